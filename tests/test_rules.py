"""Tests for card legality and special-card effects."""

import pytest

from unoroom.engine import Card, Color, Value, apply_effect, is_playable, playable_cards
from unoroom.engine.actions import play_card

RED_5 = Card(id="red-5-1", color=Color.RED, value=Value.FIVE)
RED_9 = Card(id="red-9-1", color=Color.RED, value=Value.NINE)
BLUE_5 = Card(id="blue-5-1", color=Color.BLUE, value=Value.FIVE)
BLUE_7 = Card(id="blue-7-1", color=Color.BLUE, value=Value.SEVEN)
WILD = Card(id="wild-1", color=Color.WILD, value=Value.WILD)
WILD_4 = Card(id="wild-draw-1", color=Color.WILD, value=Value.WILD_DRAW_FOUR)
WILD_4_B = Card(id="wild-draw-2", color=Color.WILD, value=Value.WILD_DRAW_FOUR)


def test_match_by_color_or_value() -> None:
    assert is_playable(RED_9, RED_5, [RED_9])
    assert is_playable(BLUE_5, RED_5, [BLUE_5])
    assert not is_playable(BLUE_7, RED_5, [BLUE_7])


def test_wild_always_playable() -> None:
    assert is_playable(WILD, RED_5, [WILD, RED_9, BLUE_5])


def test_played_wild_matches_chosen_color() -> None:
    top = WILD.with_color(Color.BLUE)
    assert is_playable(BLUE_7, top, [BLUE_7])
    assert not is_playable(RED_9, top, [RED_9])


def test_wild_draw_four_rejected_with_matching_color() -> None:
    assert not is_playable(WILD_4, RED_5, [WILD_4, RED_9])


def test_wild_draw_four_rejected_with_matching_value() -> None:
    assert not is_playable(WILD_4, RED_5, [WILD_4, BLUE_5])


def test_wild_draw_four_allowed_once_match_removed() -> None:
    assert is_playable(WILD_4, RED_5, [WILD_4, BLUE_7])


def test_wild_draw_four_ignores_other_wilds() -> None:
    assert is_playable(WILD_4, RED_5, [WILD_4, WILD, WILD_4_B, BLUE_7])


def test_playable_cards() -> None:
    hand = [RED_9, BLUE_7, WILD_4, WILD]
    assert playable_cards(hand, RED_5) == [RED_9, WILD]


# Effects table: (card id, players, expected index, expected return)
@pytest.mark.parametrize(
    "card_id, n_players, expected_index, expected_return",
    [
        ("red-skip-1", 2, 0, True),
        ("red-skip-1", 3, 2, True),
        ("red-reverse-1", 2, 0, True),
        ("red-reverse-1", 3, 2, True),
        ("wild-1", 2, 0, True),
        ("wild-1", 3, 0, False),
        ("red-draw_two-1", 2, 0, True),
        ("red-draw_two-1", 3, 2, True),
        ("wild-draw-1", 2, 0, True),
        ("wild-draw-1", 3, 2, True),
        ("red-7-1", 2, 0, False),
        ("red-7-1", 3, 0, False),
    ],
)
def test_apply_effect_table(make_table, card_id, n_players, expected_index, expected_return) -> None:
    hands = [["blue-1-1", "blue-2-1"], ["green-1-1"], ["yellow-1-1"]][:n_players]
    state = make_table(hands, top=card_id)
    card = state.top_discard()
    if card.value.is_wild:
        card = card.with_color(Color.RED)
        state.discard_pile[-1] = card

    turn_advanced = apply_effect(card, state)

    assert turn_advanced is expected_return
    assert state.current_player_index == expected_index


def test_reverse_flips_direction_with_three_players(make_table) -> None:
    state = make_table([["blue-1-1"], ["green-1-1"], ["yellow-1-1"]], top="red-reverse-1")
    apply_effect(state.top_discard(), state)
    assert state.direction == -1


def test_reverse_keeps_direction_with_two_players(make_table) -> None:
    state = make_table([["blue-1-1"], ["green-1-1"]], top="red-reverse-1")
    apply_effect(state.top_discard(), state)
    assert state.direction == 1


@pytest.mark.parametrize("card_id, drawn", [("red-draw_two-1", 2), ("wild-draw-1", 4)])
def test_draw_effects_hit_next_player(make_table, card_id, drawn) -> None:
    state = make_table([["blue-1-1"], ["green-1-1"], ["yellow-1-1"]], top=card_id)
    apply_effect(state.top_discard(), state)
    assert [len(p.hand) for p in state.players] == [1, 1 + drawn, 1]
    assert state.card_count() == 108


def test_draw_two_follows_direction(make_table) -> None:
    state = make_table(
        [["blue-1-1"], ["green-1-1"], ["yellow-1-1"]], top="red-draw_two-1", direction=-1
    )
    apply_effect(state.top_discard(), state)
    assert [len(p.hand) for p in state.players] == [1, 1, 3]
    assert state.current_player_index == 1


# Full play pipeline: exactly one effective advance per play
@pytest.mark.parametrize(
    "card_id, color, n_players, expected_index",
    [
        ("red-7-1", None, 2, 1),
        ("red-7-1", None, 3, 1),
        ("red-skip-1", None, 2, 0),
        ("red-skip-1", None, 3, 2),
        ("red-reverse-1", None, 2, 0),
        ("red-reverse-1", None, 3, 2),
        ("wild-1", Color.GREEN, 2, 0),
        ("wild-1", Color.GREEN, 3, 1),
        ("red-draw_two-1", None, 2, 0),
        ("red-draw_two-1", None, 3, 2),
        ("wild-draw-1", Color.GREEN, 2, 0),
        ("wild-draw-1", Color.GREEN, 3, 2),
    ],
)
def test_play_advances_turn_exactly_once(make_table, card_id, color, n_players, expected_index) -> None:
    hands = [[card_id, "blue-1-1"], ["green-1-1", "green-2-1"], ["yellow-1-1", "yellow-2-1"]]
    state = make_table(hands[:n_players], top="red-5-1")

    new_state = play_card(state, "p1", card_id, color, now=0)

    assert new_state.current_player_index == expected_index
    assert new_state.top_discard().id == card_id
    assert new_state.card_count() == 108


def test_reverse_with_four_players_passes_back(make_table) -> None:
    hands = [["blue-1-1", "blue-2-1"], ["red-reverse-1", "green-2-1"], ["yellow-1-1"], ["yellow-2-1"]]
    state = make_table(hands, top="red-5-1", current=1)

    new_state = play_card(state, "p2", "red-reverse-1", None, now=0)

    assert new_state.direction == -1
    assert new_state.current_player_index == 0
