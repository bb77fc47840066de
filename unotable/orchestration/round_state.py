"""Round state for the lobby and the round in progress."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from unotable.engine import Card, PileEngine

PLACEHOLDER_POSITION = 999


class RoundStatus(str, Enum):
    """Round lifecycle."""

    WAITING = "waiting"
    PLAYING = "playing"


@dataclass
class Player:
    """A seat at the table. The hand lives in the pile engine at this position."""

    user_id: str
    position: int = PLACEHOLDER_POSITION
    ready: bool = False
    deadline: Optional[float] = None  # absolute epoch seconds, only while holding the turn


@dataclass
class RoundState:
    """Mutable state of the single round. Guarded by the orchestrator's lock."""

    status: RoundStatus = RoundStatus.WAITING
    position: int = 0
    direction: int = 1  # 1 = clockwise, -1 = counter-clockwise
    players: List[Player] = field(default_factory=list)
    pile: Optional[PileEngine] = None

    def find_player(self, user_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.user_id == user_id), None)

    def player_at(self, position: int) -> Optional[Player]:
        return next((p for p in self.players if p.position == position), None)

    def current_player(self) -> Optional[Player]:
        return self.player_at(self.position)

    def hand(self, player: Player) -> List[Card]:
        if self.pile is None:
            return []
        return self.pile.hand(player.position)

    def reorganize(self) -> None:
        """Sort by position and renumber 0..N-1, keeping relative order."""
        self.players.sort(key=lambda p: p.position)
        for i, player in enumerate(self.players):
            player.position = i

    def reset(self) -> None:
        self.status = RoundStatus.WAITING
        self.position = 0
        self.direction = 1
        self.players = []
        self.pile = None


@dataclass
class PlayerView:
    """What one player can see: their own hand and public info."""

    user_id: str
    position: int
    my_hand: List[Card]
    active_card: Optional[Card]
    current_position: int
    direction: int
    hand_sizes: Dict[int, int]  # position -> number of cards

    @classmethod
    def from_state(cls, state: RoundState, user_id: str) -> "PlayerView":
        player = state.find_player(user_id)
        if player is None:
            raise ValueError(f"{user_id} is not seated")
        return cls(
            user_id=user_id,
            position=player.position,
            my_hand=list(state.hand(player)),
            active_card=state.pile.active_card() if state.pile else None,
            current_position=state.position,
            direction=state.direction,
            hand_sizes={p.position: len(state.hand(p)) for p in state.players},
        )


def conceal_hands(snapshot: dict, viewer_id: Optional[str]) -> dict:
    """Copy of a state snapshot with every hand but the viewer's emptied.

    Hand sizes stay visible through each player's ``hand_size``.
    """
    players = []
    for player in snapshot.get("players", []):
        if player["user_id"] != viewer_id:
            player = {**player, "hand": []}
        players.append(player)
    return {**snapshot, "players": players}
