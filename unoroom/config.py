"""Runtime settings, read from ``UNOROOM_*`` environment variables."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "UNOROOM_"


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    max_players: int = 5
    min_players: int = 2
    initial_hand_size: int = 7
    uno_call_window_ms: int = 10_000
    uno_penalty_cards: int = 2
    log_level: str = "WARNING"
    state_dir: Optional[str] = None  # JSON file store; in-memory when unset
    seed: Optional[int] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from the environment (call ``load_dotenv`` first for .env support)."""
        env = os.environ if env is None else env
        seed_raw = env.get(ENV_PREFIX + "SEED")
        return cls(
            max_players=_int_env(env, "MAX_PLAYERS", cls.max_players),
            min_players=_int_env(env, "MIN_PLAYERS", cls.min_players),
            initial_hand_size=_int_env(env, "INITIAL_HAND_SIZE", cls.initial_hand_size),
            uno_call_window_ms=_int_env(env, "UNO_CALL_WINDOW_MS", cls.uno_call_window_ms),
            uno_penalty_cards=_int_env(env, "UNO_PENALTY_CARDS", cls.uno_penalty_cards),
            log_level=env.get(ENV_PREFIX + "LOG_LEVEL", cls.log_level).upper(),
            state_dir=env.get(ENV_PREFIX + "STATE_DIR") or None,
            seed=_int_env(env, "SEED", 0) if seed_raw else None,
        )
