"""In-process transport: every connection gets an outbox."""

from typing import Dict, List

from unoroom.room.messages import ServerMessage


class LocalTransport:
    """Records outbound messages per connection instead of sending them."""

    def __init__(self) -> None:
        self.outboxes: Dict[str, List[ServerMessage]] = {}

    def attach(self, conn_id: str) -> None:
        self.outboxes.setdefault(conn_id, [])

    def detach(self, conn_id: str) -> None:
        self.outboxes.pop(conn_id, None)

    def send(self, conn_id: str, message: ServerMessage) -> None:
        if conn_id in self.outboxes:
            self.outboxes[conn_id].append(message)

    def broadcast(self, message: ServerMessage) -> None:
        for outbox in self.outboxes.values():
            outbox.append(message)

    def list_connections(self) -> List[str]:
        return list(self.outboxes)

    def drain(self, conn_id: str) -> List[ServerMessage]:
        """Return and clear everything queued for ``conn_id``."""
        messages = self.outboxes.get(conn_id, [])
        if conn_id in self.outboxes:
            self.outboxes[conn_id] = []
        return messages
