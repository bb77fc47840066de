"""The shared pile and the hands dealt from it."""

import logging
import random
from typing import Dict, List, Optional

from unotable.engine.card import Card, Color
from unotable.engine.deck import HAND_SIZE, create_deck, shuffle_deck
from unotable.engine.reactions import AdvanceTurn, ErrorCode, ErrorReaction, Reaction
from unotable.engine.rules import is_placeable, reactions_for

logger = logging.getLogger(__name__)


class PileEngine:
    """Owns the shared pile and every hand for one round.

    The pile is a single list: the head (index 0) is where cards are drawn
    from and the tail is the discard history, whose last card is the active
    card. There is no reshuffle, so the draw source shrinks until only the
    active card is left and further draws are refused.
    """

    def __init__(self, player_count: int, rng: Optional[random.Random] = None):
        self.hands: List[List[Card]] = [[] for _ in range(player_count)]
        self.pile: List[Card] = shuffle_deck(create_deck(), rng)

        for hand in self.hands:
            for _ in range(HAND_SIZE):
                hand.append(self.pile.pop())

    @property
    def player_count(self) -> int:
        return len(self.hands)

    def hand(self, position: int) -> List[Card]:
        return self.hands[position]

    def active_card(self) -> Optional[Card]:
        """Return the top of the discard history."""
        return self.pile[-1] if self.pile else None

    def is_placeable(self, card: Card) -> bool:
        return is_placeable(card, self.active_card())

    def card_count(self) -> int:
        return len(self.pile) + sum(len(hand) for hand in self.hands)

    def draw(self, position: int) -> List[Reaction]:
        """Move the head of the pile into a hand.

        The turn always moves on, even when the pile is down to its active
        card and nothing could be drawn.
        """
        if len(self.pile) > 1:
            card = self.pile.pop(0)
            if card.is_wild:
                card.color = None
            self.hands[position].append(card)
        else:
            logger.debug("Pile exhausted, draw for position %d refused", position)
        return [AdvanceTurn()]

    def play(
        self,
        position: int,
        card_id: str,
        chosen_color: Optional[Color] = None,
    ) -> List[Reaction]:
        """Move a card from a hand onto the pile and return its effects."""
        hand = self.hands[position]
        card = next((c for c in hand if c.id == card_id), None)
        if card is None:
            return [ErrorReaction("Card not found.", ErrorCode.CARD_NOT_FOUND)]

        if not self.is_placeable(card):
            return [ErrorReaction("Card not placeable.", ErrorCode.NOT_PLACEABLE)]

        if card.is_wild and chosen_color is None:
            return [ErrorReaction("Color not selected.", ErrorCode.COLOR_REQUIRED)]

        self.hands[position] = [c for c in hand if c.id != card.id]
        self.pile.append(card)
        if card.is_wild:
            card.color = chosen_color

        return reactions_for(card, self.player_count)

    def to_dict(self) -> Dict[str, object]:
        active = self.active_card()
        return {
            "pile": [c.to_dict() for c in self.pile],
            "active_card": active.to_dict() if active else None,
            "pile_size": len(self.pile),
        }
