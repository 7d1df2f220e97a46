"""Single game runner: bots play one game through a local room."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from unoroom.config import Settings
from unoroom.engine import GameState, PlayerView
from unoroom.room.dispatcher import RoomDispatcher
from unoroom.room.messages import ErrorMessage
from unoroom.room.store import InMemoryStateStore
from unoroom.room.transport import LocalTransport

if TYPE_CHECKING:
    import random

    from unoroom.agent.protocol import AgentProtocol
    from unoroom.room.interfaces import StateStore

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed game."""

    winner: Optional[str]  # winner's name
    num_turns: int
    player_names: tuple[str, ...]
    final_state: GameState


class BotError(RuntimeError):
    """A bot sent a message the room rejected."""


def winner_of(state: GameState) -> Optional[str]:
    """Name of the player who emptied their hand, if a game just ended."""
    if state.started or not state.discard_pile:
        return None
    return next((p.name for p in state.players if not p.hand), None)


class GameRunner:
    """Runs a single UNO game to completion.

    Each agent gets its own connection. Time is simulated: the clock moves
    ``ms_per_action`` forward after every message, so UNO penalties fire
    when a bot forgets to call.
    """

    def __init__(
        self,
        agents: dict[str, "AgentProtocol"],
        settings: Optional[Settings] = None,
        rng: Optional["random.Random"] = None,
        store: Optional["StateStore"] = None,
        room_key: str = "sim",
        ms_per_action: int = 3000,
        max_turns: int = 1000,
    ):
        self._agents = agents
        self._settings = settings or Settings()
        self._now = 0
        self._ms_per_action = ms_per_action
        self._max_turns = max_turns
        self.transport = LocalTransport()
        self.dispatcher = RoomDispatcher(
            room_key,
            store or InMemoryStateStore(),
            self.transport,
            settings=self._settings,
            clock=lambda: self._now,
            rng=rng,
        )

    def _send(self, conn_id: str, message: dict) -> None:
        self.dispatcher.on_message(conn_id, json.dumps(message))
        self._now += self._ms_per_action
        errors = [m for m in self.transport.drain(conn_id) if isinstance(m, ErrorMessage)]
        if errors:
            raise BotError(f"{conn_id} sent {message}: {errors[0].message}")

    def run(self) -> GameResult:
        """Run the game and return the result."""
        conn_ids = list(self._agents.keys())
        for cid in conn_ids:
            self.transport.attach(cid)
            self.dispatcher.on_connect(cid)
        for cid in conn_ids:
            self._send(cid, {"type": "join", "name": self._agents[cid].name})
        for cid in conn_ids:
            self._send(cid, {"type": "ready"})
        self._send(conn_ids[0], {"type": "startGame"})

        state = self.dispatcher.load_state()
        num_turns = 0
        while state.started and num_turns < self._max_turns:
            for cid, agent in self._agents.items():
                if agent.wants_to_call_uno(PlayerView.from_state(state, cid)):
                    self._send(cid, {"type": "callUno"})
            state = self.dispatcher.load_state()

            current = state.players[state.current_player_index]
            view = PlayerView.from_state(state, current.id)
            self._send(current.id, self._agents[current.id].get_action(view))
            state = self.dispatcher.load_state()
            num_turns += 1

        winner = winner_of(state)
        logger.info("Game over after %d turns, winner: %s", num_turns, winner)
        return GameResult(
            winner=winner,
            num_turns=num_turns,
            player_names=tuple(p.name for p in state.players),
            final_state=state,
        )
