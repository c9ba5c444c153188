"""
Probability composition: from role thresholds to per-hand event probabilities.

Sums multivariate hypergeometric probabilities over every draw vector that
satisfies a condition, applies the single-retry mulligan adjustment to opening
hands and builds draw-by-draw timelines. Nothing here raises for in-domain
input; impossible draws simply have probability 0.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field

from loguru import logger

from utils.constants.analysis import TIMELINE_STEPS
from utils.constants.presets import BRICK_ROLE
from utils.deck_models import CompoundCondition, DeckComposition, DrawRules, MulliganConfig
from utils.draw_vectors import RoleBounds, iter_valid_draw_vectors
from utils.math_utils import multivariate_hypergeometric_pmf


def _bounds(condition: CompoundCondition | RoleBounds) -> dict[str, tuple[int, int]]:
    if isinstance(condition, CompoundCondition):
        return condition.threshold_map()
    return dict(condition)


def event_probability(
    draw_count: int,
    condition: CompoundCondition | RoleBounds,
    population_counts: Sequence[int],
    category_roles: Sequence[Collection[str]],
    roles: Iterable[str] | None = None,
) -> float:
    """
    Exact probability that a hand of ``draw_count`` cards satisfies ``condition``.

    Args:
        draw_count: Cards in hand
        condition: A CompoundCondition or a raw {role: (min, max)} mapping
        population_counts: Cards per category, filler included
        category_roles: Role set per category
        roles: Roles of interest (unthresholded roles are unconstrained)

    Returns:
        Probability as a float between 0.0 and 1.0
    """
    deck_size = sum(population_counts)
    if draw_count < 0 or deck_size <= 0:
        return 0.0

    total_probability = 0.0
    for vector in iter_valid_draw_vectors(
        population_counts, draw_count, roles, category_roles, _bounds(condition)
    ):
        total_probability += multivariate_hypergeometric_pmf(
            population_counts, vector, deck_size, draw_count
        )

    return total_probability


def keep_probability(
    draw_count: int,
    mulligan: MulliganConfig,
    population_counts: Sequence[int],
    category_roles: Sequence[Collection[str]],
    roles: Iterable[str] | None = None,
) -> float:
    """Probability that the opening hand meets the mulligan keep rule."""
    deck_size = sum(population_counts)
    keep_bounds = {mulligan.keep_role: (mulligan.keep_min, deck_size)}
    return event_probability(draw_count, keep_bounds, population_counts, category_roles, roles)


def mulligan_adjusted_probability(raw_probability: float, keep_prob: float) -> float:
    """
    Single-retry mulligan approximation: ``raw + (1 - keep) * raw``.

    Assumes the redrawn hand meets the condition with the same unconditional
    probability as the first one and ignores further mulligans. The result is
    not a convex combination and can exceed 1.0; it is deliberately left
    unclamped.
    """
    return raw_probability + (1 - keep_prob) * raw_probability


def cap_brick_bounds(
    bounds: Mapping[str, tuple[int, int]], max_bricks: int
) -> dict[str, tuple[int, int]]:
    """Limit the ``Brick`` role to at most ``max_bricks`` drawn cards."""
    capped = dict(bounds)
    if BRICK_ROLE in capped:
        low, high = capped[BRICK_ROLE]
        capped[BRICK_ROLE] = (low, min(high, max_bricks))
    else:
        capped[BRICK_ROLE] = (0, max_bricks)
    return capped


def step_probability(
    draw_count: int,
    condition: CompoundCondition | RoleBounds,
    composition: DeckComposition,
    *,
    opening_hand_size: int,
    mulligan: MulliganConfig | None = None,
    brick_cap: int | None = None,
) -> float:
    """
    Probability for one draw step, with the opening-hand mulligan when enabled.

    Args:
        draw_count: Cards seen so far
        condition: Condition to satisfy
        composition: Deck population
        opening_hand_size: Cards in the opening hand; only that step is mulligan-adjusted
        mulligan: Mulligan rules, ignored when disabled
        brick_cap: Dead draw penalty; hands with more bricks than this fail

    Returns:
        Probability; may exceed 1.0 when the mulligan adjustment applies
    """
    bounds = _bounds(condition)
    if brick_cap is not None:
        bounds = cap_brick_bounds(bounds, brick_cap)

    raw = event_probability(
        draw_count,
        bounds,
        composition.population_counts,
        composition.category_roles,
        composition.roles,
    )

    if mulligan is not None and mulligan.enabled and draw_count == opening_hand_size:
        keep = keep_probability(
            draw_count,
            mulligan,
            composition.population_counts,
            composition.category_roles,
            composition.roles,
        )
        return mulligan_adjusted_probability(raw, keep)

    return raw


# ============= Timeline =============


@dataclass(frozen=True)
class TimelinePoint:
    """Condition probabilities and weighted expected value at one draw step."""

    step: int
    cards_drawn: int
    probabilities: dict[str, float] = field(default_factory=dict)
    expected_value: float = 0.0

    def percentages(self) -> dict[str, float]:
        return {name: probability * 100 for name, probability in self.probabilities.items()}


@dataclass(frozen=True)
class Timeline:
    """
    Lazily computed probabilities for the opening hand and the next ten draws.

    Iterating recomputes every point from scratch, so the sequence can be
    walked any number of times and always reflects its inputs.
    """

    conditions: tuple[CompoundCondition, ...]
    composition: DeckComposition
    baseline: int
    mulligan: MulliganConfig | None = None

    def __len__(self) -> int:
        return TIMELINE_STEPS

    def __iter__(self) -> Iterator[TimelinePoint]:
        for step in range(TIMELINE_STEPS):
            cards_drawn = self.baseline + step
            probabilities: dict[str, float] = {}
            expected_value = 0.0
            for condition in self.conditions:
                probability = step_probability(
                    cards_drawn,
                    condition,
                    self.composition,
                    opening_hand_size=self.baseline,
                    mulligan=self.mulligan,
                )
                probabilities[condition.name] = probability
                expected_value += probability * condition.weight
            yield TimelinePoint(step, cards_drawn, probabilities, expected_value)


def compute_timeline(
    conditions: Iterable[CompoundCondition],
    composition: DeckComposition,
    draw_rules: DrawRules,
    *,
    going_second: bool = False,
    mulligan: MulliganConfig | None = None,
) -> Timeline:
    baseline = draw_rules.baseline_draw_count(going_second)
    logger.debug(
        f"Timeline baseline {baseline} cards ({'second' if going_second else 'first'}), "
        f"deck of {composition.deck_size}"
    )
    return Timeline(tuple(conditions), composition, baseline, mulligan)
