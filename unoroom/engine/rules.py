"""UNO rules: card legality and special-card effects."""

import random
from typing import Iterable, List, Optional

from unoroom.engine.card import Card, Value
from unoroom.engine.game_state import GameState
from unoroom.engine.turns import advance, draw_cards, next_index

DRAW_PENALTIES = {
    Value.DRAW_TWO: 2,
    Value.WILD_DRAW_FOUR: 4,
}


def _matches(card: Card, top: Card) -> bool:
    return card.color == top.color or card.value == top.value


def is_playable(card: Card, top: Optional[Card], hand: Iterable[Card]) -> bool:
    """Check if ``card`` may be played on ``top`` from ``hand``.

    Wild Draw Four is a last resort: it is only playable when no other
    non-wild card in the hand matches the top card's color or value.
    """
    if card.value is Value.WILD_DRAW_FOUR:
        if top is None:
            return True
        return not any(
            c.id != card.id and not c.value.is_wild and _matches(c, top)
            for c in hand
        )
    if card.value is Value.WILD:
        return True
    if top is None:
        return False
    return _matches(card, top)


def apply_effect(card: Card, state: GameState, rng: Optional[random.Random] = None) -> bool:
    """Resolve the effect of ``card``, already on top of the discard pile.

    Returns True when the effect has moved the turn pointer itself, so the
    caller must not advance it again. Skip, Draw Two and Wild Draw Four pass
    over the next player. In a two-player game that hands the turn straight
    back to the player who played them, and Reverse and Wild do the same.
    """
    heads_up = len(state.players) == 2

    if card.value in DRAW_PENALTIES:
        victim = state.players[next_index(state)]
        draw_cards(state, victim, DRAW_PENALTIES[card.value], rng)
        advance(state, 2)
        return True

    if card.value is Value.SKIP:
        advance(state, 2)
        return True

    if card.value is Value.REVERSE:
        if heads_up:
            advance(state, 2)
        else:
            state.direction = -state.direction
            advance(state)
        return True

    if card.value is Value.WILD:
        if heads_up:
            advance(state, 2)
            return True
        return False

    return False


def playable_cards(hand: Iterable[Card], top: Optional[Card]) -> List[Card]:
    """Cards in ``hand`` that may legally be played on ``top``."""
    hand = list(hand)
    return [c for c in hand if is_playable(c, top, hand)]
