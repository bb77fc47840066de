"""Turn orchestration."""

from unotable.orchestration.interpreter import advance_turn, interpret_reactions
from unotable.orchestration.orchestrator import TurnOrchestrator
from unotable.orchestration.round_state import (
    Player,
    PlayerView,
    RoundState,
    RoundStatus,
    conceal_hands,
)
from unotable.orchestration.simulation import SimulationResult, SimulationRunner
from unotable.orchestration.watchdog import DeadlineWatchdog

__all__ = [
    "advance_turn",
    "interpret_reactions",
    "TurnOrchestrator",
    "Player",
    "PlayerView",
    "RoundState",
    "RoundStatus",
    "conceal_hands",
    "SimulationResult",
    "SimulationRunner",
    "DeadlineWatchdog",
]
