"""Shared deck fixtures for the test suite."""

from __future__ import annotations

import pytest

from utils.deck_models import CompoundCondition, DeckCategory, RoleThreshold


@pytest.fixture
def sample_categories() -> list[DeckCategory]:
    """A 39-card engine deck; a 40-card deck gets one filler card."""
    return [
        DeckCategory("Starter + Extender", 12, ("Starter", "Extender")),
        DeckCategory("Defensive Non-Engine", 9, ("Defensive",)),
        DeckCategory("Pure Extender", 15, ("Extender",)),
        DeckCategory("High-Impact Brick", 3, ("Brick",)),
    ]


@pytest.fixture
def playable_hand() -> CompoundCondition:
    return CompoundCondition(
        "Playable Hand",
        (RoleThreshold("Starter", 1, 40), RoleThreshold("Brick", 0, 0)),
        weight=1.0,
    )


@pytest.fixture
def full_combo() -> CompoundCondition:
    return CompoundCondition(
        "Full Combo + Defense",
        (
            RoleThreshold("Starter", 1, 40),
            RoleThreshold("Extender", 1, 40),
            RoleThreshold("Defensive", 1, 40),
        ),
        weight=2.5,
    )


@pytest.fixture
def at_least_one_starter() -> CompoundCondition:
    return CompoundCondition("Starter", (RoleThreshold("Starter", 1, 40),))
