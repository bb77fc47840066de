"""Reaction interpreter: turns reactions into position, direction and deadline changes."""

import logging
from collections import deque
from typing import Iterable, List

from unotable.engine import (
    AdvanceTurn,
    ErrorCode,
    ErrorReaction,
    ForceDraw,
    Reaction,
    ReverseDirection,
)
from unotable.orchestration.round_state import RoundState

logger = logging.getLogger(__name__)


def advance_turn(state: RoundState, now: float, turn_timeout: float) -> None:
    """Move one seat in the current direction and restart the turn clock."""
    size = len(state.players)
    if size == 0:
        return

    new_position = state.position + state.direction
    if new_position > size - 1:
        new_position = 0
    elif new_position < 0:
        new_position = size - 1
    state.position = new_position

    for player in state.players:
        player.deadline = now + turn_timeout if player.position == new_position else None


def interpret_reactions(
    state: RoundState,
    reactions: Iterable[Reaction],
    now: float,
    turn_timeout: float,
) -> List[ErrorReaction]:
    """Apply reactions in order. Returns the errors for the caller to deliver."""
    pending = deque(reactions)
    errors: List[ErrorReaction] = []

    while pending:
        reaction = pending.popleft()
        logger.debug("Reaction %s at position %d", type(reaction).__name__, state.position)

        if isinstance(reaction, AdvanceTurn):
            advance_turn(state, now, turn_timeout)

        elif isinstance(reaction, ReverseDirection):
            state.direction = -state.direction

        elif isinstance(reaction, ForceDraw):
            if state.pile is None:
                errors.append(ErrorReaction("Deck not found.", ErrorCode.DECK_NOT_INITIALIZED))
                continue
            drawn = state.pile.draw(state.position)
            # The draw passes the turn on; step back so the drawing player keeps it
            follow_up = [*drawn, ReverseDirection(), AdvanceTurn(), ReverseDirection()]
            pending.extendleft(reversed(follow_up))

        elif isinstance(reaction, ErrorReaction):
            errors.append(reaction)

    return errors
