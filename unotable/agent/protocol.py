"""Agent protocol - interface for automated players."""

from dataclasses import dataclass
from typing import Optional, Protocol, Union

from unotable.engine import Color
from unotable.orchestration.round_state import PlayerView


@dataclass
class PlayCard:
    """Intent: play a card. For wilds, chosen_color is required."""

    card_id: str
    chosen_color: Optional[Color] = None


@dataclass
class DrawCard:
    """Intent: draw a card and pass the turn."""

    pass


Action = Union[PlayCard, DrawCard]


class AgentProtocol(Protocol):
    """Interface for agents seated through the orchestrator's intents."""

    @property
    def name(self) -> str:
        """Display name for the agent."""
        ...

    def get_action(self, player_view: PlayerView) -> Action:
        """Choose what to do when it is this agent's turn.

        Args:
            player_view: The agent's own hand and public round info.

        Returns:
            A PlayCard for a card in the hand, or DrawCard.
        """
        ...
