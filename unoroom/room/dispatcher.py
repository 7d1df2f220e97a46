"""Routes client messages for one room to the engine.

The dispatcher is the only component that touches the store or the
transport. Each message is a single get, a pure state transition and a
single put; a rejected or failed message persists nothing.
"""

import logging
import random
import time
from typing import Callable, Optional, Tuple

from unoroom.config import Settings
from unoroom.engine import actions
from unoroom.engine.card import Card
from unoroom.engine.errors import GameError
from unoroom.engine.game_state import GameState
from unoroom.room.interfaces import StateStore, Transport
from unoroom.room.messages import (
    CallUnoMessage,
    DrawCardMessage,
    DrawnCardMessage,
    EndGameMessage,
    ErrorMessage,
    JoinMessage,
    KeepDrawnCardMessage,
    PlayCardMessage,
    PlayDrawnCardMessage,
    ReadyMessage,
    RestartGameMessage,
    StartGameMessage,
    StateMessage,
    parse_client_message,
)
from unoroom.room.serialization import card_to_dict, state_to_dict

logger = logging.getLogger(__name__)


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class RoomDispatcher:
    """Message handling for a single room.

    Messages for one room must be delivered one at a time; the store is
    read and written without locking.
    """

    def __init__(
        self,
        room_key: str,
        store: StateStore,
        transport: Transport,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], int]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.room_key = room_key
        self._store = store
        self._transport = transport
        self._settings = settings or Settings()
        self._clock = clock or _wall_clock_ms
        if rng is None and self._settings.seed is not None:
            rng = random.Random(self._settings.seed)
        self._rng = rng
        self._reconciled = False

    def load_state(self) -> GameState:
        state = self._store.get(self.room_key)
        if state is None:
            state = GameState()
            self._store.put(self.room_key, state)
        return state

    def on_connect(self, conn_id: str) -> None:
        """Create the room if needed, drop stale players once, and sync the newcomer."""
        state = self.load_state()
        if not self._reconciled:
            live = set(self._transport.list_connections()) | {conn_id}
            reconciled = actions.reconcile(state, live, self._rng)
            if reconciled is not state:
                logger.info(
                    "Room %s: dropped %d stale player(s)",
                    self.room_key,
                    len(state.players) - len(reconciled.players),
                )
                self._store.put(self.room_key, reconciled)
                state = reconciled
            self._reconciled = True
        self._transport.send(conn_id, StateMessage(state=state_to_dict(state)))

    def on_close(self, conn_id: str) -> None:
        state = self._store.get(self.room_key)
        if state is None or state.find_player(conn_id) is None:
            return
        state = actions.disconnect(state, conn_id, self._rng)
        logger.info("Room %s: player %s left (%d remaining)", self.room_key, conn_id, len(state.players))
        self._store.put(self.room_key, state)
        self._broadcast_state(state)

    def on_message(self, conn_id: str, raw) -> None:
        """Handle one inbound frame from ``conn_id``."""
        try:
            message = parse_client_message(raw)
            state, drawn = self._handle(message, self.load_state(), conn_id)
        except GameError as exc:
            logger.info("Room %s: rejected message from %s: %s (%s)", self.room_key, conn_id, exc.message, exc.code)
            self._transport.send(conn_id, ErrorMessage(message=exc.message, code=exc.code))
            return
        except Exception:
            logger.exception("Room %s: error processing message from %s", self.room_key, conn_id)
            self._transport.send(conn_id, ErrorMessage(message="Internal error"))
            return

        logger.debug("Room %s: %s from %s applied", self.room_key, message.type, conn_id)
        self._store.put(self.room_key, state)
        if drawn is not None:
            self._transport.send(conn_id, DrawnCardMessage(card=card_to_dict(drawn)))
        self._broadcast_state(state)

    def _handle(self, message, state: GameState, conn_id: str) -> Tuple[GameState, Optional[Card]]:
        settings = self._settings
        now = self._clock()

        if isinstance(message, JoinMessage):
            return actions.join(state, conn_id, message.name, settings), None
        if isinstance(message, ReadyMessage):
            return actions.ready(state, conn_id, settings), None
        if isinstance(message, StartGameMessage):
            return actions.start_game(state, conn_id, now, settings, self._rng), None
        if isinstance(message, EndGameMessage):
            return actions.end_game(state, conn_id), None
        if isinstance(message, RestartGameMessage):
            return actions.restart_game(state, conn_id, settings), None
        if isinstance(message, PlayCardMessage):
            return actions.play_card(
                state, conn_id, message.card_id, message.chosen_color, now, settings, self._rng
            ), None
        if isinstance(message, DrawCardMessage):
            result = actions.draw_card(state, conn_id, now, self._rng)
            return result.state, result.drawn_card
        if isinstance(message, PlayDrawnCardMessage):
            return actions.play_drawn_card(
                state, conn_id, message.card_id, message.chosen_color, now, settings, self._rng
            ), None
        if isinstance(message, KeepDrawnCardMessage):
            return actions.keep_drawn_card(state, conn_id, now), None
        if isinstance(message, CallUnoMessage):
            return actions.call_uno(state, conn_id), None
        raise TypeError(f"Unhandled message: {message!r}")

    def _broadcast_state(self, state: GameState) -> None:
        self._transport.broadcast(StateMessage(state=state_to_dict(state)))
