"""Game orchestration."""

from unoroom.orchestration.game_runner import GameResult, GameRunner, winner_of
from unoroom.orchestration.tournament import run_tournament

__all__ = ["GameResult", "GameRunner", "run_tournament", "winner_of"]
