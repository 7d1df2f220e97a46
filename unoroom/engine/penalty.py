"""Penalty for failing to call UNO.

The check is reactive: it runs as a side effect of a resolved play, never
on a timer, so a player left alone on one card is never penalized.
"""

import logging
import random
from typing import List, Optional

from unoroom.engine.game_state import GameState, Player
from unoroom.engine.turns import draw_cards

logger = logging.getLogger(__name__)

UNO_CALL_WINDOW_MS = 10_000
UNO_PENALTY_CARDS = 2


def sync_last_card(player: Player, now: int) -> None:
    """Start the call window when a hand reaches one card; clear it otherwise."""
    if len(player.hand) == 1:
        if player.last_card_timestamp is None:
            player.last_card_timestamp = now
            player.called_uno = False
    else:
        player.last_card_timestamp = None
        player.called_uno = False


def is_penalizable(player: Player, now: int, window_ms: int = UNO_CALL_WINDOW_MS) -> bool:
    return (
        len(player.hand) == 1
        and player.last_card_timestamp is not None
        and not player.called_uno
        and now - player.last_card_timestamp > window_ms
    )


def apply_uno_penalties(
    state: GameState,
    now: int,
    rng: Optional[random.Random] = None,
    window_ms: int = UNO_CALL_WINDOW_MS,
    penalty_cards: int = UNO_PENALTY_CARDS,
) -> List[str]:
    """Force-draw for every player whose call window has lapsed.

    Returns the ids of the penalized players.
    """
    penalized = []
    for player in state.players:
        if not is_penalizable(player, now, window_ms):
            continue
        draw_cards(state, player, penalty_cards, rng)
        player.last_card_timestamp = None
        player.called_uno = False
        penalized.append(player.id)
        logger.info("UNO penalty: %s drew %d cards", player.name, penalty_cards)
    return penalized
