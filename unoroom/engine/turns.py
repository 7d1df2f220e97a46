"""Turn order and drawing from the deck."""

import random
from typing import List, Optional

from unoroom.engine.card import Card
from unoroom.engine.deck import shuffle
from unoroom.engine.game_state import GameState, Player


def next_index(state: GameState) -> int:
    """Index of the player after the current one in the current direction."""
    n = len(state.players)
    return (state.current_player_index + state.direction + n) % n


def advance(state: GameState, steps: int = 1) -> None:
    """Move the turn pointer ``steps`` times. Any pending decision lapses."""
    for _ in range(steps):
        state.current_player_index = next_index(state)
    state.pending_decision = None


def reshuffle_if_empty(state: GameState, rng: Optional[random.Random] = None) -> None:
    """Refill an empty deck from the discard pile, keeping its top card.

    With one card or fewer on the discard pile there is nothing to
    reshuffle and the deck stays empty.
    """
    if state.deck or not state.discard_pile:
        return
    top = state.discard_pile.pop()
    state.deck = shuffle(state.discard_pile, rng)
    state.discard_pile = [top]


def draw_cards(
    state: GameState,
    player: Player,
    count: int,
    rng: Optional[random.Random] = None,
) -> List[Card]:
    """Draw up to ``count`` cards into ``player``'s hand.

    The reshuffle policy applies before each card. Returns the cards
    actually drawn, which may be fewer than ``count`` when the table
    has run dry.
    """
    drawn: List[Card] = []
    for _ in range(count):
        reshuffle_if_empty(state, rng)
        if not state.deck:
            break
        card = state.deck.pop()
        player.hand.append(card)
        drawn.append(card)
    return drawn
