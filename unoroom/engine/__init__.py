"""Game engine for UNO rooms."""

from unoroom.engine.card import Card, Color, Value
from unoroom.engine.deck import DECK_SIZE, generate_deck, shuffle
from unoroom.engine.errors import (
    AuthorizationError,
    GameError,
    MalformedMessageError,
    NotFoundError,
    PhasePreconditionError,
    RuleViolationError,
)
from unoroom.engine.game_state import GameState, PendingDecision, Player, PlayerView
from unoroom.engine.rules import apply_effect, is_playable, playable_cards
from unoroom.engine.turns import draw_cards, next_index

__all__ = [
    "Card",
    "Color",
    "Value",
    "DECK_SIZE",
    "generate_deck",
    "shuffle",
    "GameError",
    "PhasePreconditionError",
    "AuthorizationError",
    "NotFoundError",
    "RuleViolationError",
    "MalformedMessageError",
    "GameState",
    "PendingDecision",
    "Player",
    "PlayerView",
    "is_playable",
    "playable_cards",
    "apply_effect",
    "next_index",
    "draw_cards",
]
