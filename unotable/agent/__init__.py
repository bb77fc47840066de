"""Agent interface and the intents agents return."""

from unotable.agent.protocol import Action, AgentProtocol, DrawCard, PlayCard

__all__ = ["Action", "AgentProtocol", "DrawCard", "PlayCard"]
