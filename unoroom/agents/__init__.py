"""Built-in agents."""

from unoroom.agents.random_agent import RandomAgent

__all__ = ["RandomAgent"]
