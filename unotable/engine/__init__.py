"""Pile engine: cards, deck, placement rules and reactions."""

from unotable.engine.card import Ability, Card, Color
from unotable.engine.deck import DECK_SIZE, HAND_SIZE, create_deck, shuffle_deck
from unotable.engine.pile import PileEngine
from unotable.engine.reactions import (
    AdvanceTurn,
    ErrorCode,
    ErrorReaction,
    ForceDraw,
    Reaction,
    ReverseDirection,
)
from unotable.engine.rules import is_placeable, reactions_for

__all__ = [
    "Ability",
    "Card",
    "Color",
    "DECK_SIZE",
    "HAND_SIZE",
    "create_deck",
    "shuffle_deck",
    "PileEngine",
    "AdvanceTurn",
    "ErrorCode",
    "ErrorReaction",
    "ForceDraw",
    "Reaction",
    "ReverseDirection",
    "is_placeable",
    "reactions_for",
]
