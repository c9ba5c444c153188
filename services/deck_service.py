"""
Deck Service - boundary between caller-entered deck data and the probability core.

This module contains the business logic that turns user-facing deck data into
the immutable population the probability engine works on:
- Role discovery and per-role card totals
- Input validation (the only place in the project that raises on bad input)
- Filler ("Generic") category completion
- Post-sideboard deck composition
- Card quality tiers by functional role coverage
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from loguru import logger

from utils.constants.presets import BRICK_ROLE, DEFAULT_ROLES
from utils.deck_models import (
    MULLIGAN_TYPES,
    CompoundCondition,
    DeckCategory,
    DeckComposition,
    MulliganConfig,
    SideboardPlan,
    TournamentConfig,
)


@dataclass(frozen=True)
class DeckStatus:
    """Outcome of checking explicit category counts against the deck size."""

    valid: bool
    message: str
    filler_count: int


@dataclass(frozen=True)
class QualityTier:
    """Cards grouped by how many functional roles they cover."""

    name: str
    weight: float
    count: int


# ============= Roles =============


def all_roles(categories: Iterable[DeckCategory]) -> tuple[str, ...]:
    """Default roles followed by any custom category roles, first-seen order."""
    seen = dict.fromkeys(DEFAULT_ROLES)
    for category in categories:
        for role in category.roles:
            seen.setdefault(role)
    return tuple(seen)


def role_totals(
    categories: Iterable[DeckCategory], roles: Iterable[str] | None = None
) -> dict[str, int]:
    """
    Count the cards carrying each role across the deck.

    Multi-role cards count once per role. With ``roles`` only those roles are
    reported, in the given order; otherwise every default and category role is.
    """
    categories = list(categories)
    totals = dict.fromkeys(roles if roles is not None else all_roles(categories), 0)
    for category in categories:
        for role in category.roles:
            if role in totals:
                totals[role] += category.count
    return totals


# ============= Validation =============


def validate_categories(categories: Sequence[DeckCategory], deck_size: int) -> None:
    """
    Reject deck data the probability core cannot represent.

    Raises:
        ValueError: On a negative deck size or category count, or when the
            explicit categories hold more cards than the deck
    """
    if deck_size < 0:
        raise ValueError(f"Deck size must be non-negative, got {deck_size}")

    for category in categories:
        if category.count < 0:
            raise ValueError(
                f"Card count for {category.name!r} must be non-negative, got {category.count}"
            )

    total = sum(category.count for category in categories)
    if total > deck_size:
        logger.warning(f"Deck categories hold {total} cards but deck size is {deck_size}")
        raise ValueError(f"Category counts ({total}) cannot exceed deck size ({deck_size})")


def validate_condition(condition: CompoundCondition) -> None:
    """
    Raises:
        ValueError: On a negative bound, ``min > max`` or a negative weight
    """
    if condition.weight < 0:
        raise ValueError(
            f"Weight of condition {condition.name!r} must be non-negative, got {condition.weight}"
        )
    for threshold in condition.thresholds:
        if threshold.min_count < 0:
            raise ValueError(
                f"Minimum for role {threshold.role!r} must be non-negative, "
                f"got {threshold.min_count}"
            )
        if threshold.min_count > threshold.max_count:
            raise ValueError(
                f"Minimum ({threshold.min_count}) for role {threshold.role!r} cannot exceed "
                f"maximum ({threshold.max_count})"
            )


def validate_mulligan(mulligan: MulliganConfig) -> None:
    if mulligan.mulligan_type not in MULLIGAN_TYPES:
        raise ValueError(f"Unknown mulligan type: {mulligan.mulligan_type!r}")
    if mulligan.keep_min < 0:
        raise ValueError(f"Keep minimum must be non-negative, got {mulligan.keep_min}")
    if mulligan.max_mulligans < 0:
        raise ValueError(f"Max mulligans must be non-negative, got {mulligan.max_mulligans}")


def validate_tournament_config(config: TournamentConfig) -> None:
    if config.rounds < 0:
        raise ValueError(f"Round count must be non-negative, got {config.rounds}")
    if config.top_cut_threshold < 0:
        raise ValueError(
            f"Top cut threshold must be non-negative, got {config.top_cut_threshold}"
        )
    if not 0.0 <= config.sideboard_variance <= 1.0:
        raise ValueError(
            f"Sideboard variance must be between 0 and 1, got {config.sideboard_variance}"
        )


def deck_status(categories: Sequence[DeckCategory], deck_size: int) -> DeckStatus:
    """Summarise whether the deck adds up, without raising."""
    total = sum(category.count for category in categories)
    if total > deck_size:
        return DeckStatus(False, f"Exceeds deck size ({total}/{deck_size}).", 0)
    if total < deck_size:
        remaining = deck_size - total
        return DeckStatus(True, f'Filling {remaining} cards as "Generic".', remaining)
    return DeckStatus(True, "Deck sum is perfect.", 0)


# ============= Composition =============


def build_composition(
    categories: Sequence[DeckCategory],
    deck_size: int,
    roles: Iterable[str] | None = None,
) -> DeckComposition:
    """
    Validate the deck and convert it into a probability-ready population.

    A role-less filler category is appended when the explicit categories hold
    fewer cards than ``deck_size``, so the population always sums to the deck.

    Args:
        categories: Explicit deck categories
        deck_size: Declared deck size
        roles: Roles of interest (defaults to ``all_roles(categories)``)

    Returns:
        DeckComposition whose deck_size equals ``deck_size``

    Raises:
        ValueError: If the deck fails ``validate_categories``
    """
    validate_categories(categories, deck_size)

    population_counts = [category.count for category in categories]
    category_roles = [frozenset(category.roles) for category in categories]

    filler = deck_size - sum(population_counts)
    if filler > 0:
        population_counts.append(filler)
        category_roles.append(frozenset())

    return DeckComposition(
        population_counts=tuple(population_counts),
        category_roles=tuple(category_roles),
        roles=tuple(roles) if roles is not None else all_roles(categories),
    )


def apply_sideboard(
    categories: Sequence[DeckCategory],
    deck_size: int,
    plan: SideboardPlan,
) -> tuple[list[DeckCategory], int]:
    """
    Return the post-sideboard categories and deck size.

    Counts taken out are floored at zero per category and emptied categories
    are dropped; side-in categories with cards are appended. The deck size
    changes by the cards actually removed, so side-outs naming unknown
    categories or exceeding a count do not shrink it further.
    """
    modified: list[DeckCategory] = []
    total_out = 0
    for category in categories:
        remaining = max(0, category.count - plan.side_out.get(category.name, 0))
        total_out += category.count - remaining
        if remaining > 0:
            modified.append(DeckCategory(category.name, remaining, category.roles))

    side_in = [category for category in plan.side_in if category.count > 0]
    total_in = sum(category.count for category in plan.side_in)

    return modified + side_in, deck_size - total_out + total_in


# ============= Quality Tiers =============


def quality_tiers(categories: Iterable[DeckCategory]) -> list[QualityTier]:
    """
    Bucket cards by functional role coverage.

    Functional roles exclude ``Brick``. Three or more make a card "Ultimate",
    exactly two "Omni-Role"; a card whose only role is ``Brick`` is a brick and
    anything else is "Pure Role".
    """
    counts = {"ultimate": 0, "omni": 0, "pure": 0, "brick": 0}

    for category in categories:
        is_brick = BRICK_ROLE in category.roles
        functional_roles = sum(1 for role in category.roles if role != BRICK_ROLE)

        if is_brick and functional_roles == 0:
            counts["brick"] += category.count
        elif functional_roles >= 3:
            counts["ultimate"] += category.count
        elif functional_roles == 2:
            counts["omni"] += category.count
        else:
            counts["pure"] += category.count

    return [
        QualityTier("Ultimate (6.0)", 6.0, counts["ultimate"]),
        QualityTier("Omni-Role (4.0)", 4.0, counts["omni"]),
        QualityTier("Pure Role (2.0)", 2.0, counts["pure"]),
        QualityTier("Brick (0.0)", 0.0, counts["brick"]),
    ]
