"""Built-in agents."""

from unotable.agents.random_agent import RandomAgent

__all__ = ["RandomAgent"]
