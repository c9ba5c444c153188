"""Immutable value types shared by the deck, probability and tournament services."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from utils.constants.presets import GamePreset

MULLIGAN_TYPES = ("none", "mtg", "one-piece", "pokemon")


@dataclass(frozen=True)
class DeckCategory:
    """A group of identical-function cards: a count plus the roles they carry."""

    name: str
    count: int
    roles: tuple[str, ...] = ()


@dataclass(frozen=True)
class DeckComposition:
    """Population counts and role sets for every category, filler included."""

    population_counts: tuple[int, ...]
    category_roles: tuple[frozenset[str], ...]
    roles: tuple[str, ...] = ()

    @property
    def deck_size(self) -> int:
        return sum(self.population_counts)


@dataclass(frozen=True)
class RoleThreshold:
    """Inclusive bounds on how many drawn cards may carry ``role``."""

    role: str
    min_count: int
    max_count: int


@dataclass(frozen=True)
class CompoundCondition:
    """
    A named win state: every threshold must hold at once.

    The weight only matters when conditions are averaged together; it never
    enters a single condition's probability.
    """

    name: str
    thresholds: tuple[RoleThreshold, ...]
    weight: float = 1.0

    def threshold_map(self) -> dict[str, tuple[int, int]]:
        bounds: dict[str, tuple[int, int]] = {}
        for threshold in self.thresholds:
            bounds[threshold.role] = (threshold.min_count, threshold.max_count)
        return bounds


@dataclass(frozen=True)
class MulliganConfig:
    """Single-retry mulligan model: keep when ``keep_min``+ ``keep_role`` cards are in hand."""

    enabled: bool = False
    mulligan_type: str = "none"
    keep_role: str = "Starter"
    keep_min: int = 1
    max_mulligans: int = 1

    @classmethod
    def for_preset(
        cls, preset: GamePreset, keep_role: str = "Starter", keep_min: int = 1
    ) -> MulliganConfig:
        """Default mulligan rules for a game format; formats without one start disabled."""
        return cls(
            enabled=preset.mulligan_type != "none",
            mulligan_type=preset.mulligan_type,
            keep_role=keep_role,
            keep_min=keep_min,
        )


@dataclass(frozen=True)
class DrawRules:
    """Opening-hand size and which seats draw on turn one."""

    starting_hand_size: int
    draw_on_turn_one_first: bool = False
    draw_on_turn_one_second: bool = True

    def baseline_draw_count(self, going_second: bool) -> int:
        """Cards seen at the first decision point of a timeline."""
        extra = 1 if going_second and self.draw_on_turn_one_second else 0
        return self.starting_hand_size + extra

    def seat_draw_counts(self) -> tuple[int, int]:
        """Cards seen on turn one going first and going second."""
        first = self.starting_hand_size + (1 if self.draw_on_turn_one_first else 0)
        second = self.starting_hand_size + (1 if self.draw_on_turn_one_second else 0)
        return first, second


@dataclass(frozen=True)
class TournamentConfig:
    """Swiss event and sideboarding parameters."""

    rounds: int = 8
    top_cut_threshold: int = 6
    g1_going_first: bool = True
    sideboard_variance: float = 0.12
    brick_sensitivity: bool = True
    stamina_factor: bool = False


@dataclass(frozen=True)
class SideboardPlan:
    """Cards brought in from the side deck and per-category counts taken out."""

    side_in: tuple[DeckCategory, ...] = ()
    side_out: Mapping[str, int] = field(default_factory=dict)

    @property
    def is_active(self) -> bool:
        return len(self.side_in) > 0


__all__ = [
    "MULLIGAN_TYPES",
    "CompoundCondition",
    "DeckCategory",
    "DeckComposition",
    "DrawRules",
    "MulliganConfig",
    "RoleThreshold",
    "SideboardPlan",
    "TournamentConfig",
]
