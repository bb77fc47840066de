"""Deck creation and shuffling."""

import random
from typing import List, Optional

from unotable.engine.card import Ability, Card, Color, WILD_ABILITIES

DECK_SIZE = 108
HAND_SIZE = 7

COLORED_ABILITIES = (Ability.REVERSE, Ability.SKIP, Ability.DRAW_TWO)


def create_deck() -> List[Card]:
    """Create the 108-card population in a fixed order.

    - 4 colors x (one 0, two each of 1-9): 76 cards
    - 4 colors x two each of Reverse, Skip, Draw Two: 24 cards
    - 4 Wild, 4 Wild Draw Four, no color: 8 cards
    - Total: 108 cards
    """
    cards: List[Card] = []

    for color in Color:
        cards.append(Card(color=color, number=0))
        for number in range(1, 10):
            cards.append(Card(color=color, number=number))
            cards.append(Card(color=color, number=number))
        for ability in COLORED_ABILITIES:
            cards.append(Card(color=color, ability=ability))
            cards.append(Card(color=color, ability=ability))

    for _ in range(4):
        for ability in WILD_ABILITIES:
            cards.append(Card(color=None, ability=ability))

    return cards


def shuffle_deck(cards: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """Shuffle in place (uniform Fisher-Yates) and return the same list."""
    (rng or random).shuffle(cards)
    return cards
