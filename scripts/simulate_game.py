"""Simulate a game with random bots and print the table as it goes."""

import logging
import random

from unoroom.agents.random_agent import RandomAgent
from unoroom.orchestration.game_runner import GameRunner


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    agents = {
        "p1": RandomAgent("Bot1", seed=1, uno_call_rate=0.7),
        "p2": RandomAgent("Bot2", seed=2, uno_call_rate=0.7),
        "p3": RandomAgent("Bot3", seed=3, uno_call_rate=0.7),
        "p4": RandomAgent("Bot4", seed=4, uno_call_rate=0.7),
    }

    runner = GameRunner(agents, rng=random.Random(42))
    result = runner.run()

    print(f"Game finished! Winner: {result.winner}")
    print(f"Turns: {result.num_turns}")
    for p in result.final_state.players:
        print(f"  {p.name}: {len(p.hand)} cards left")


if __name__ == "__main__":
    main()
