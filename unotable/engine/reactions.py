"""Reactions: instructions a draw or play hands back to the turn orchestrator."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ErrorCode(str, Enum):
    """Stable codes for rejected intents."""

    CONNECTION_NOT_FOUND = "CONNECTION_NOT_FOUND"
    NOT_JOINED = "NOT_JOINED"
    ALREADY_JOINED = "ALREADY_JOINED"
    GAME_STARTED = "GAME_STARTED"
    GAME_NOT_STARTED = "GAME_NOT_STARTED"
    GAME_FULL = "GAME_FULL"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    CARD_NOT_FOUND = "CARD_NOT_FOUND"
    NOT_PLACEABLE = "NOT_PLACEABLE"
    COLOR_REQUIRED = "COLOR_REQUIRED"
    DECK_NOT_INITIALIZED = "DECK_NOT_INITIALIZED"
    INVALID_EVENT = "INVALID_EVENT"
    INTERNAL = "INTERNAL"


@dataclass(frozen=True)
class AdvanceTurn:
    """Move the turn one seat in the current direction."""


@dataclass(frozen=True)
class ReverseDirection:
    """Flip the direction of play."""


@dataclass(frozen=True)
class ForceDraw:
    """Give the current player one card without passing their turn."""


@dataclass(frozen=True)
class ErrorReaction:
    """Reject the intent. Carries a human-readable message."""

    message: str
    code: Optional[ErrorCode] = None

    def to_dict(self) -> dict:
        return {"message": self.message, "code": self.code.value if self.code else None}


Reaction = Union[AdvanceTurn, ReverseDirection, ForceDraw, ErrorReaction]
