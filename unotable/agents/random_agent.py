"""Agent that plays a random legal card, or draws when it has none."""

import random
from typing import Optional

from unotable.agent.protocol import Action, DrawCard, PlayCard
from unotable.engine import Color, is_placeable
from unotable.orchestration.round_state import PlayerView


class RandomAgent:
    def __init__(self, name: str = "random", rng: Optional[random.Random] = None):
        self._name = name
        self._rng = rng or random.Random()

    @property
    def name(self) -> str:
        return self._name

    def get_action(self, player_view: PlayerView) -> Action:
        playable = [c for c in player_view.my_hand if is_placeable(c, player_view.active_card)]
        if not playable:
            return DrawCard()

        card = self._rng.choice(playable)
        color = self._rng.choice(list(Color)) if card.is_wild else None
        return PlayCard(card_id=card.id, chosen_color=color)
