"""Card, Color and Value types for UNO."""

from dataclasses import dataclass, replace
from enum import Enum


class Color(str, Enum):
    """Card colors. Wild cards carry WILD until a color is chosen."""

    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    WILD = "wild"


PLAYABLE_COLORS = (Color.RED, Color.GREEN, Color.BLUE, Color.YELLOW)


class Value(str, Enum):
    """Card face values."""

    ZERO = "0"
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"

    @property
    def is_wild(self) -> bool:
        return self in (Value.WILD, Value.WILD_DRAW_FOUR)


@dataclass(frozen=True)
class Card:
    """A UNO card.

    ``id`` is unique within the 108-card deck. Wild cards start with
    ``color=Color.WILD``; once played, the discard pile holds a copy whose
    color is the one the player chose.
    """

    id: str
    color: Color
    value: Value

    def __post_init__(self) -> None:
        if not self.value.is_wild and self.color is Color.WILD:
            raise ValueError("Non-wild cards must have a color")

    def with_color(self, color: Color) -> "Card":
        """Return the played copy of a wild card with its chosen color."""
        if not self.value.is_wild:
            raise ValueError("Only wild cards can change color")
        if color not in PLAYABLE_COLORS:
            raise ValueError(f"Cannot choose color: {color}")
        return replace(self, color=color)

    def __str__(self) -> str:
        if self.color is Color.WILD:
            return self.value.value
        return f"{self.color.value}_{self.value.value}"
