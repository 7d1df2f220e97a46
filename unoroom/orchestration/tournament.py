"""Tournament - run many games and aggregate results."""

import random
from collections import defaultdict
from typing import Any, Optional

from unoroom.config import Settings
from unoroom.orchestration.game_runner import GameRunner


def run_tournament(
    agents: dict[str, Any],
    num_games: int = 100,
    seed: int | None = None,
    settings: Optional[Settings] = None,
) -> dict[str, int]:
    """Play ``num_games`` games between the same agents.

    Seating rotates each game so every agent takes a turn as host and
    first player.

    Returns:
        Dict mapping agent name to number of wins.
    """
    conn_ids = list(agents.keys())
    wins: dict[str, int] = defaultdict(int)

    rng = random.Random(seed)
    for g in range(num_games):
        shift = g % len(conn_ids)
        order = conn_ids[shift:] + conn_ids[:shift]
        seated = {cid: agents[cid] for cid in order}
        runner = GameRunner(
            seated,
            settings=settings,
            rng=random.Random(rng.randint(0, 2**31 - 1)),
            room_key=f"tournament-{g}",
        )
        result = runner.run()
        if result.winner:
            wins[result.winner] += 1

    return dict(wins)
