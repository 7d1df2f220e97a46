"""Room session handling: messages, persistence and transport."""

from unoroom.room.dispatcher import RoomDispatcher
from unoroom.room.messages import parse_client_message
from unoroom.room.store import InMemoryStateStore, JsonFileStateStore
from unoroom.room.transport import LocalTransport

__all__ = [
    "RoomDispatcher",
    "parse_client_message",
    "InMemoryStateStore",
    "JsonFileStateStore",
    "LocalTransport",
]
