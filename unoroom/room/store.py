"""State store implementations."""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union
from urllib.parse import quote

from unoroom.engine.game_state import GameState
from unoroom.room.serialization import state_from_dict, state_to_dict

logger = logging.getLogger(__name__)


class InMemoryStateStore:
    """Keeps state in a dict. Copies on the way in and out."""

    def __init__(self) -> None:
        self._rooms: Dict[str, GameState] = {}

    def get(self, room_key: str) -> Optional[GameState]:
        state = self._rooms.get(room_key)
        return state.clone() if state is not None else None

    def put(self, room_key: str, state: GameState) -> None:
        self._rooms[room_key] = state.clone()

    def __contains__(self, room_key: str) -> bool:
        return room_key in self._rooms


class JsonFileStateStore:
    """One ``<room_key>.json`` file per room under ``directory``.

    Keys are percent-encoded, so distinct keys never share a file.
    """

    def __init__(self, directory: Union[str, Path]) -> None:
        self._dir = Path(directory)
        self._dir.mkdir(parents=True, exist_ok=True)

    def _path(self, room_key: str) -> Path:
        if not room_key:
            raise ValueError(f"Invalid room key: {room_key!r}")
        return self._dir / f"{quote(room_key, safe='')}.json"

    def get(self, room_key: str) -> Optional[GameState]:
        path = self._path(room_key)
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as f:
            return state_from_dict(json.load(f))

    def put(self, room_key: str, state: GameState) -> None:
        path = self._path(room_key)
        tmp = path.with_suffix(".json.tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(state_to_dict(state), f)
        os.replace(tmp, path)
        logger.debug("Saved room %s to %s", room_key, path)
