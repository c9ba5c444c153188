"""Tests for game and tournament presets."""

from __future__ import annotations

import pytest

from utils.constants.presets import (
    GAME_PRESETS,
    TOURNAMENT_PRESETS,
    GameType,
    game_preset,
    tournament_preset,
)
from utils.deck_models import DrawRules, MulliganConfig


def test_every_game_has_a_preset() -> None:
    assert set(GAME_PRESETS) == set(GameType)
    for preset in GAME_PRESETS.values():
        assert preset.min_deck_size <= preset.default_deck_size <= preset.max_deck_size


def test_lookup_by_name_and_value() -> None:
    assert game_preset("MTG") is GAME_PRESETS[GameType.MTG]
    assert game_preset("Pokémon TCG") is GAME_PRESETS[GameType.POKEMON]
    assert game_preset(GameType.ONE_PIECE).default_deck_size == 50
    with pytest.raises(KeyError):
        game_preset("Hearthstone")


def test_draw_rules() -> None:
    yugioh = game_preset(GameType.YUGIOH).draw_rules()
    assert yugioh == DrawRules(5, draw_on_turn_one_first=False, draw_on_turn_one_second=True)
    assert yugioh.seat_draw_counts() == (5, 6)
    assert yugioh.baseline_draw_count(going_second=False) == 5
    assert yugioh.baseline_draw_count(going_second=True) == 6


def test_pokemon_both_seats_draw() -> None:
    rules = game_preset(GameType.POKEMON).draw_rules()
    assert rules.seat_draw_counts() == (8, 8)
    assert rules.baseline_draw_count(going_second=False) == 7


def test_starting_hand_override() -> None:
    rules = game_preset(GameType.CUSTOM).draw_rules(starting_hand_size=6)
    assert rules.seat_draw_counts() == (6, 7)


def test_mulligan_defaults_follow_preset() -> None:
    assert not MulliganConfig.for_preset(game_preset(GameType.YUGIOH)).enabled
    mtg = MulliganConfig.for_preset(game_preset(GameType.MTG), keep_role="Land", keep_min=2)
    assert mtg.enabled
    assert mtg.mulligan_type == "mtg"
    assert (mtg.keep_role, mtg.keep_min) == ("Land", 2)


def test_tournament_presets() -> None:
    assert [preset.rounds for preset in TOURNAMENT_PRESETS] == [5, 9, 12]
    assert tournament_preset(" regionals ").players == 500
    assert tournament_preset("Worlds") is None
