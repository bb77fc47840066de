"""Card, Color and Ability types."""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Color(str, Enum):
    """Card colors."""

    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"


class Ability(str, Enum):
    """Card abilities."""

    REVERSE = "reverse"
    SKIP = "skip"
    DRAW_TWO = "draw_two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"


WILD_ABILITIES = (Ability.WILD, Ability.WILD_DRAW_FOUR)


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Card:
    """A card.

    Exactly one of number (0-9) and ability is set. Wild-type cards start with
    color=None; the color is chosen when the card is played and cleared again
    when it is drawn back into a hand.
    """

    color: Optional[Color]
    number: Optional[int] = None
    ability: Optional[Ability] = None
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        if (self.number is None) == (self.ability is None):
            raise ValueError("A card has exactly one of number or ability")
        if self.number is not None and not 0 <= self.number <= 9:
            raise ValueError(f"Invalid card number: {self.number}")
        if self.number is not None and self.color is None:
            raise ValueError("Number cards must have a color")
        if self.ability is not None and self.ability not in WILD_ABILITIES and self.color is None:
            raise ValueError("Non-wild cards must have a color")

    @property
    def is_wild(self) -> bool:
        return self.ability in WILD_ABILITIES

    def to_dict(self) -> dict:
        data: dict = {"id": self.id, "color": self.color.value if self.color else None}
        if self.number is not None:
            data["number"] = self.number
        else:
            data["ability"] = self.ability.value
        return data

    def __str__(self) -> str:
        face = str(self.number) if self.number is not None else self.ability.value
        if self.color is None:
            return face
        return f"{self.color.value}_{face}"
