"""Collaborators the dispatcher is given: a state store and a transport."""

from typing import Iterable, Optional, Protocol

from unoroom.engine.game_state import GameState
from unoroom.room.messages import ServerMessage


class StateStore(Protocol):
    """Key-value persistence of one state blob per room.

    No transactions or versioning: the dispatcher assumes it is the only
    writer for a room key.
    """

    def get(self, room_key: str) -> Optional[GameState]:
        """Return the stored state, or None if the room has never been written."""
        ...

    def put(self, room_key: str, state: GameState) -> None:
        """Replace the stored state."""
        ...


class Transport(Protocol):
    """Message delivery for one room."""

    def send(self, conn_id: str, message: ServerMessage) -> None:
        """Deliver to a single connection."""
        ...

    def broadcast(self, message: ServerMessage) -> None:
        """Deliver to every connection attached to the room."""
        ...

    def list_connections(self) -> Iterable[str]:
        """Ids of the connections currently attached."""
        ...
