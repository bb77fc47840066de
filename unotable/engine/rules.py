"""Placement rules shared by the server and any client showing legal plays."""

from typing import List, Optional

from unotable.engine.card import Ability, Card
from unotable.engine.reactions import AdvanceTurn, ForceDraw, Reaction, ReverseDirection


def is_placeable(card: Card, active: Optional[Card]) -> bool:
    """Check if a card can be played on the active card."""
    if active is None:
        return True
    # A wild that has not had a color chosen accepts anything
    if active.is_wild and active.color is None:
        return True
    if card.color is not None and card.color == active.color:
        return True
    if card.number is not None and card.number == active.number:
        return True
    if card.ability is not None and card.ability == active.ability:
        return True
    if card.is_wild:
        return True
    return False


def reactions_for(card: Card, player_count: int) -> List[Reaction]:
    """Turn effects of a card that was just played."""
    if card.number is not None:
        return [AdvanceTurn()]

    if card.ability == Ability.DRAW_TWO:
        return [AdvanceTurn(), ForceDraw(), ForceDraw(), AdvanceTurn()]

    if card.ability == Ability.SKIP:
        return [AdvanceTurn(), AdvanceTurn()]

    if card.ability == Ability.REVERSE:
        # With two players a reverse acts as a skip
        if player_count > 2:
            return [ReverseDirection(), AdvanceTurn()]
        return [ReverseDirection(), AdvanceTurn(), AdvanceTurn()]

    if card.ability == Ability.WILD:
        return [AdvanceTurn()]

    if card.ability == Ability.WILD_DRAW_FOUR:
        return [AdvanceTurn(), ForceDraw(), ForceDraw(), ForceDraw(), ForceDraw(), AdvanceTurn()]

    return []
