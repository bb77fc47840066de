"""Shared fixtures for orchestrator tests."""

import random

import pytest

from unotable.config import Settings
from unotable.orchestration import TurnOrchestrator
from unotable.services import Connection, InMemoryProfileStore
from unotable.services.broadcast import RecordingChannel


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def profiles() -> InMemoryProfileStore:
    return InMemoryProfileStore(rng=random.Random(0))


@pytest.fixture
def orchestrator(channel, profiles, clock) -> TurnOrchestrator:
    return TurnOrchestrator(channel, profiles, Settings(), clock=clock, rng=random.Random(7))


def seat(orchestrator: TurnOrchestrator, *user_ids: str, ready: bool = False) -> None:
    """Connect and join each user (connection id == user id), optionally readying all."""
    for uid in user_ids:
        orchestrator.connect(Connection(connection_id=uid, user_id=uid, session_id=f"s-{uid}"))
        orchestrator.join(uid)
    if ready:
        for uid in user_ids:
            orchestrator.toggle_ready(uid)
