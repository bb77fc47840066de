"""Unit tests for the reaction interpreter."""

import random

import pytest
from unotable.engine import (
    Ability,
    AdvanceTurn,
    Card,
    Color,
    ErrorCode,
    ErrorReaction,
    ForceDraw,
    PileEngine,
    ReverseDirection,
)
from unotable.orchestration import Player, RoundState, RoundStatus, advance_turn, interpret_reactions

NOW = 1000.0
TIMEOUT = 30.0


def _round(size: int, position: int = 0, direction: int = 1) -> RoundState:
    state = RoundState(
        status=RoundStatus.PLAYING,
        position=position,
        direction=direction,
        players=[Player(user_id=f"p{i}", position=i) for i in range(size)],
        pile=PileEngine(size, rng=random.Random(3)),
    )
    return state


def _run(state: RoundState, reactions) -> list:
    return interpret_reactions(state, reactions, NOW, TIMEOUT)


@pytest.mark.parametrize("size", [2, 3, 4])
@pytest.mark.parametrize("direction", [1, -1])
def test_advance_cycles_back_to_start(size: int, direction: int) -> None:
    for start in range(size):
        state = _round(size, position=start, direction=direction)
        for _ in range(size):
            advance_turn(state, NOW, TIMEOUT)
        assert state.position == start


def test_advance_wraps_both_ways() -> None:
    state = _round(4, position=3)
    advance_turn(state, NOW, TIMEOUT)
    assert state.position == 0

    state = _round(4, position=0, direction=-1)
    advance_turn(state, NOW, TIMEOUT)
    assert state.position == 3


def test_advance_sets_only_current_deadline() -> None:
    state = _round(3)
    state.players[0].deadline = NOW
    advance_turn(state, NOW, TIMEOUT)
    assert [p.deadline for p in state.players] == [None, NOW + TIMEOUT, None]


def test_reverse_flips_direction_only() -> None:
    state = _round(4, position=2)
    _run(state, [ReverseDirection()])
    assert state.direction == -1
    assert state.position == 2
    _run(state, [ReverseDirection()])
    assert state.direction == 1


def test_force_draw_stays_on_current_player() -> None:
    for direction in (1, -1):
        state = _round(4, position=1, direction=direction)
        before = len(state.pile.hand(1))
        errors = _run(state, [ForceDraw()])
        assert errors == []
        assert state.position == 1
        assert state.direction == direction
        assert len(state.pile.hand(1)) == before + 1
        assert state.players[1].deadline == NOW + TIMEOUT
        assert all(p.deadline is None for p in state.players if p.position != 1)


def test_force_draw_with_exhausted_pile_keeps_position() -> None:
    state = _round(3, position=2)
    state.pile.pile = state.pile.pile[-1:]
    before = len(state.pile.hand(2))
    _run(state, [ForceDraw(), ForceDraw()])
    assert state.position == 2
    assert len(state.pile.hand(2)) == before


def _play(state: RoundState, ability: Ability) -> None:
    """Put a playable card of the given ability in the current hand and play it."""
    card = Card(None if ability in (Ability.WILD, Ability.WILD_DRAW_FOUR) else Color.RED, ability=ability)
    state.pile.pile.append(Card(Color.RED, number=4))
    state.pile.hand(state.position).append(card)
    reactions = state.pile.play(state.position, card.id, Color.RED)
    assert _run(state, reactions) == []


def test_draw_two_hits_next_player_and_skips_them() -> None:
    state = _round(4, position=0)
    sizes = [len(h) for h in state.pile.hands]
    _play(state, Ability.DRAW_TWO)
    assert [len(h) for h in state.pile.hands] == [sizes[0], sizes[1] + 2, sizes[2], sizes[3]]
    assert state.position == 2
    assert state.direction == 1


def test_wild_draw_four_hits_next_player_and_skips_them() -> None:
    state = _round(4, position=3)
    sizes = [len(h) for h in state.pile.hands]
    _play(state, Ability.WILD_DRAW_FOUR)
    assert [len(h) for h in state.pile.hands] == [sizes[0] + 4, sizes[1], sizes[2], sizes[3]]
    assert state.position == 1
    assert state.pile.active_card().color == Color.RED


def test_draw_two_counter_clockwise() -> None:
    state = _round(3, position=0, direction=-1)
    sizes = [len(h) for h in state.pile.hands]
    _play(state, Ability.DRAW_TWO)
    assert len(state.pile.hand(2)) == sizes[2] + 2
    assert state.position == 1


def test_skip_passes_two_seats() -> None:
    state = _round(4, position=1)
    _play(state, Ability.SKIP)
    assert state.position == 3


def test_reverse_with_three_players() -> None:
    state = _round(3, position=1)
    _play(state, Ability.REVERSE)
    assert state.direction == -1
    assert state.position == 0


def test_reverse_with_two_players_returns_turn_to_player() -> None:
    state = _round(2, position=0)
    _play(state, Ability.REVERSE)
    assert state.position == 0
    assert state.direction == -1

    state = _round(2, position=1)
    _play(state, Ability.SKIP)
    skip_position = state.position
    state = _round(2, position=1)
    _play(state, Ability.REVERSE)
    assert state.position == skip_position == 1


def test_errors_are_returned_without_state_change() -> None:
    state = _round(3, position=1)
    error = ErrorReaction("Card not found.", ErrorCode.CARD_NOT_FOUND)
    assert _run(state, [error]) == [error]
    assert state.position == 1
    assert state.direction == 1


def test_force_draw_without_pile_is_an_error() -> None:
    state = _round(2)
    state.pile = None
    errors = _run(state, [ForceDraw(), AdvanceTurn()])
    assert errors[0].code == ErrorCode.DECK_NOT_INITIALIZED
    assert state.position == 1
