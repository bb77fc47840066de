"""Unit tests for the pile engine."""

import random
from collections import Counter

import pytest
from unotable.engine import (
    Ability,
    AdvanceTurn,
    Card,
    Color,
    DECK_SIZE,
    ErrorCode,
    ErrorReaction,
    ForceDraw,
    PileEngine,
    ReverseDirection,
    create_deck,
    is_placeable,
)


def _pile(hands: list[list[Card]], pile: list[Card]) -> PileEngine:
    engine = PileEngine(len(hands), rng=random.Random(0))
    engine.hands = hands
    engine.pile = pile
    return engine


def test_create_deck_size() -> None:
    deck = create_deck()
    assert len(deck) == DECK_SIZE == 108
    assert len({c.id for c in deck}) == 108


def test_create_deck_composition() -> None:
    deck = create_deck()
    for color in Color:
        numbers = Counter(c.number for c in deck if c.color == color and c.number is not None)
        assert numbers[0] == 1
        assert all(numbers[n] == 2 for n in range(1, 10))
        abilities = Counter(c.ability for c in deck if c.color == color and c.ability is not None)
        assert abilities == {Ability.REVERSE: 2, Ability.SKIP: 2, Ability.DRAW_TWO: 2}
    wilds = [c for c in deck if c.is_wild]
    assert all(c.color is None for c in wilds)
    assert Counter(c.ability for c in wilds) == {Ability.WILD: 4, Ability.WILD_DRAW_FOUR: 4}


def test_card_validation() -> None:
    with pytest.raises(ValueError):
        Card(color=Color.RED)
    with pytest.raises(ValueError):
        Card(color=Color.RED, number=3, ability=Ability.SKIP)
    with pytest.raises(ValueError):
        Card(color=None, number=3)
    with pytest.raises(ValueError):
        Card(color=None, ability=Ability.SKIP)
    assert Card(color=None, ability=Ability.WILD).is_wild


def test_deal_is_reproducible_with_seed() -> None:
    a = PileEngine(3, rng=random.Random(123))
    b = PileEngine(3, rng=random.Random(123))
    assert [str(c) for c in a.pile] == [str(c) for c in b.pile]


def test_initialize_deals_seven_each() -> None:
    engine = PileEngine(4, rng=random.Random(1))
    assert [len(h) for h in engine.hands] == [7, 7, 7, 7]
    assert len(engine.pile) == 108 - 28
    assert engine.card_count() == 108
    assert engine.active_card() is engine.pile[-1]


def test_active_card_empty_pile() -> None:
    engine = _pile([[], []], [])
    assert engine.active_card() is None


def test_is_placeable_rules() -> None:
    red_5 = Card(Color.RED, number=5)
    assert is_placeable(red_5, None)
    assert is_placeable(red_5, Card(Color.RED, number=9))
    assert is_placeable(red_5, Card(Color.BLUE, number=5))
    assert not is_placeable(red_5, Card(Color.BLUE, number=6))
    assert not is_placeable(red_5, Card(Color.BLUE, ability=Ability.SKIP))

    blue_skip = Card(Color.BLUE, ability=Ability.SKIP)
    assert is_placeable(Card(Color.GREEN, ability=Ability.SKIP), blue_skip)
    assert not is_placeable(Card(Color.GREEN, ability=Ability.REVERSE), blue_skip)

    # Wilds go on anything
    assert is_placeable(Card(None, ability=Ability.WILD), Card(Color.BLUE, number=1))
    assert is_placeable(Card(None, ability=Ability.WILD_DRAW_FOUR), blue_skip)

    # A colorless wild accepts anything; a colored one only its color
    wild = Card(None, ability=Ability.WILD)
    assert is_placeable(red_5, wild)
    wild.color = Color.GREEN
    assert not is_placeable(red_5, wild)
    assert is_placeable(Card(Color.GREEN, number=2), wild)


def test_draw_moves_head_into_hand() -> None:
    head = Card(Color.RED, number=1)
    active = Card(Color.BLUE, number=2)
    engine = _pile([[], []], [head, active])
    reactions = engine.draw(1)
    assert reactions == [AdvanceTurn()]
    assert engine.hand(1) == [head]
    assert engine.pile == [active]


def test_draw_clears_wild_color() -> None:
    wild = Card(None, ability=Ability.WILD_DRAW_FOUR)
    wild.color = Color.YELLOW
    engine = _pile([[], []], [wild, Card(Color.BLUE, number=2)])
    engine.draw(0)
    assert engine.hand(0)[0].color is None


def test_draw_refused_with_only_active_card() -> None:
    engine = _pile([[Card(Color.RED, number=3)], []], [Card(Color.BLUE, number=2)])
    reactions = engine.draw(0)
    assert reactions == [AdvanceTurn()]
    assert len(engine.hand(0)) == 1
    assert len(engine.pile) == 1


def test_play_card_not_found() -> None:
    engine = _pile([[Card(Color.RED, number=3)], []], [Card(Color.RED, number=2)])
    reactions = engine.play(0, "missing")
    assert reactions == [ErrorReaction("Card not found.", ErrorCode.CARD_NOT_FOUND)]


def test_play_not_placeable_leaves_state() -> None:
    card = Card(Color.RED, number=3)
    engine = _pile([[card], []], [Card(Color.BLUE, number=2)])
    reactions = engine.play(0, card.id)
    assert len(reactions) == 1
    assert reactions[0].code == ErrorCode.NOT_PLACEABLE
    assert engine.hand(0) == [card]
    assert len(engine.pile) == 1


def test_play_wild_requires_color() -> None:
    wild = Card(None, ability=Ability.WILD)
    engine = _pile([[wild], []], [Card(Color.BLUE, number=2)])
    reactions = engine.play(0, wild.id)
    assert reactions[0].code == ErrorCode.COLOR_REQUIRED
    assert engine.hand(0) == [wild]


@pytest.mark.parametrize("ability", [Ability.WILD, Ability.WILD_DRAW_FOUR])
def test_play_wild_sets_chosen_color(ability: Ability) -> None:
    wild = Card(None, ability=ability)
    engine = _pile([[wild, Card(Color.RED, number=1)], []], [Card(Color.BLUE, number=2)])
    engine.play(0, wild.id, Color.GREEN)
    assert engine.active_card() is wild
    assert engine.active_card().color == Color.GREEN


def test_play_number_card() -> None:
    card = Card(Color.BLUE, number=7)
    other = Card(Color.RED, number=1)
    engine = _pile([[card, other], []], [Card(Color.BLUE, number=2)])
    assert engine.play(0, card.id) == [AdvanceTurn()]
    assert engine.hand(0) == [other]
    assert engine.active_card() is card


def test_play_reactions_by_ability() -> None:
    top = Card(Color.BLUE, number=2)
    cards = {
        Ability.DRAW_TWO: [AdvanceTurn(), ForceDraw(), ForceDraw(), AdvanceTurn()],
        Ability.SKIP: [AdvanceTurn(), AdvanceTurn()],
        Ability.REVERSE: [ReverseDirection(), AdvanceTurn()],
    }
    for ability, expected in cards.items():
        card = Card(Color.BLUE, ability=ability)
        engine = _pile([[card], [], []], [top])
        assert engine.play(0, card.id) == expected

    wd4 = Card(None, ability=Ability.WILD_DRAW_FOUR)
    engine = _pile([[wd4], [], []], [top])
    assert engine.play(0, wd4.id, Color.RED) == [AdvanceTurn()] + [ForceDraw()] * 4 + [AdvanceTurn()]


def test_reverse_with_two_players_acts_as_skip() -> None:
    card = Card(Color.BLUE, ability=Ability.REVERSE)
    engine = _pile([[card], []], [Card(Color.BLUE, number=2)])
    assert engine.play(0, card.id) == [ReverseDirection(), AdvanceTurn(), AdvanceTurn()]


def test_card_count_conserved_through_plays_and_draws() -> None:
    rng = random.Random(5)
    engine = PileEngine(4, rng=rng)
    for turn in range(200):
        position = turn % 4
        playable = [c for c in engine.hand(position) if engine.is_placeable(c)]
        if playable:
            engine.play(position, playable[0].id, Color.RED)
        else:
            engine.draw(position)
        assert engine.card_count() == 108
