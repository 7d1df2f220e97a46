"""Deck creation and shuffling."""

import random
from typing import List, Optional, Sequence, TypeVar

from unoroom.engine.card import PLAYABLE_COLORS, Card, Color, Value

T = TypeVar("T")

DECK_SIZE = 108

CARD_VALUES_STANDARD = (
    Value.ONE, Value.TWO, Value.THREE, Value.FOUR, Value.FIVE,
    Value.SIX, Value.SEVEN, Value.EIGHT, Value.NINE,
    Value.SKIP, Value.REVERSE, Value.DRAW_TWO,
)


def shuffle(cards: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a Fisher-Yates shuffled copy of ``cards``."""
    rand = rng or random
    result = list(cards)
    for i in range(len(result) - 1, 0, -1):
        j = rand.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def generate_deck(rng: Optional[random.Random] = None) -> List[Card]:
    """Create a shuffled standard 108-card UNO deck.

    - 4 colors x (one 0, two each of 1-9, Skip, Reverse, Draw Two): 96 cards
    - 4 Wild, 4 Wild Draw Four: 8 cards
    """
    cards: List[Card] = []

    for color in PLAYABLE_COLORS:
        cards.append(Card(id=f"{color.value}-0", color=color, value=Value.ZERO))
        for value in CARD_VALUES_STANDARD:
            for copy in (1, 2):
                cards.append(
                    Card(id=f"{color.value}-{value.value}-{copy}", color=color, value=value)
                )

    for i in range(1, 5):
        cards.append(Card(id=f"wild-{i}", color=Color.WILD, value=Value.WILD))
        cards.append(Card(id=f"wild-draw-{i}", color=Color.WILD, value=Value.WILD_DRAW_FOUR))

    return shuffle(cards, rng)
