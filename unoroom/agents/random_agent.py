"""Random agent - plays any legal card, otherwise draws."""

import random
from typing import Any, Dict, Optional

from unoroom.engine import PlayerView, playable_cards
from unoroom.engine.card import PLAYABLE_COLORS, Card


class RandomAgent:
    """Bot that picks uniformly among legal moves.

    ``uno_call_rate`` is the chance of remembering to call UNO each time
    it is asked, so a rate below 1.0 exposes the bot to penalties.
    """

    def __init__(self, name: str, seed: Optional[int] = None, uno_call_rate: float = 1.0):
        self._name = name
        self._rng = random.Random(seed)
        self._uno_call_rate = uno_call_rate

    @property
    def name(self) -> str:
        return self._name

    def _play(self, msg_type: str, card: Card, view: PlayerView) -> Dict[str, Any]:
        message: Dict[str, Any] = {"type": msg_type, "cardId": card.id}
        if card.value.is_wild:
            # Favor the color we hold most of
            counts = {c: 0 for c in PLAYABLE_COLORS}
            for held in view.my_hand:
                if held.color in counts:
                    counts[held.color] += 1
            best = max(counts.values())
            message["chosenColor"] = self._rng.choice(
                [c.value for c, n in counts.items() if n == best]
            )
        return message

    def get_action(self, player_view: PlayerView) -> Dict[str, Any]:
        if player_view.pending_card_id is not None:
            drawn = next(c for c in player_view.my_hand if c.id == player_view.pending_card_id)
            if self._rng.random() < 0.8:
                return self._play("playDrawnCard", drawn, player_view)
            return {"type": "keepDrawnCard"}

        options = playable_cards(player_view.my_hand, player_view.top_discard)
        if options:
            return self._play("playCard", self._rng.choice(options), player_view)
        return {"type": "drawCard"}

    def wants_to_call_uno(self, player_view: PlayerView) -> bool:
        if len(player_view.my_hand) != 1 or player_view.called_uno:
            return False
        return self._rng.random() < self._uno_call_rate
