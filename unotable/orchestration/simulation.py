"""Run a full round in-process with agents seated through the public intents."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from unotable.config import Settings
from unotable.orchestration.orchestrator import GAME_END, TurnOrchestrator
from unotable.orchestration.round_state import PlayerView, RoundStatus
from unotable.services.broadcast import RecordingChannel
from unotable.services.profiles import InMemoryProfileStore
from unotable.services.protocol import Connection, ProfileStore

if TYPE_CHECKING:
    from unotable.agent.protocol import AgentProtocol

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Result of a simulated round."""

    winner: Optional[str]
    num_turns: int
    player_ids: tuple[str, ...]
    podium: List[dict] = field(default_factory=list)


class SimulationRunner:
    """Seats agents in the lobby, readies them and plays until someone wins."""

    def __init__(
        self,
        agents: dict[str, "AgentProtocol"],
        seed: Optional[int] = None,
        max_turns: int = 1000,
        profiles: Optional[ProfileStore] = None,
        channel: Optional[RecordingChannel] = None,
    ):
        self._agents = agents
        self._rng = random.Random(seed)
        self._max_turns = max_turns
        self.channel = channel or RecordingChannel()
        self.profiles = profiles or InMemoryProfileStore(rng=self._rng)
        settings = Settings(max_players=max(len(agents), 2))
        # Frozen clock: agents always answer, so deadlines never expire
        self.orchestrator = TurnOrchestrator(
            self.channel, self.profiles, settings, clock=lambda: 0.0, rng=self._rng
        )

    def run(self) -> SimulationResult:
        """Play one round and return the result."""
        from unotable.agent.protocol import PlayCard

        orchestrator = self.orchestrator
        player_ids = list(self._agents.keys())
        for pid in player_ids:
            orchestrator.connect(Connection(connection_id=pid, user_id=pid, session_id=pid))
            orchestrator.join(pid)
        for pid in player_ids:
            orchestrator.toggle_ready(pid)

        num_turns = 0
        while orchestrator.state.status == RoundStatus.PLAYING and num_turns < self._max_turns:
            current = orchestrator.state.current_player()
            pid = current.user_id
            action = self._agents[pid].get_action(PlayerView.from_state(orchestrator.state, pid))

            if isinstance(action, PlayCard):
                orchestrator.play(pid, action.card_id, action.chosen_color)
            else:
                orchestrator.draw(pid)
            num_turns += 1

        end = self.channel.last(GAME_END)
        podium = end.payload if end else []
        winner = podium[0]["user_id"] if podium else None
        logger.info("Simulation finished after %d turns, winner %s", num_turns, winner)
        return SimulationResult(
            winner=winner,
            num_turns=num_turns,
            player_ids=tuple(player_ids),
            podium=podium,
        )
