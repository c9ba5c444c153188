"""
Exhaustive enumeration of per-category draw counts that satisfy role thresholds.

A draw vector assigns a drawn-card count to every deck category so that the
counts sum to the number of cards drawn. Role sums are computed over completed
vectors only: a category carrying several roles adds its full drawn count to
each of them, so three cards tagged both "Starter" and "Extender" count three
towards each role.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Iterator, Mapping, Sequence

RoleBounds = Mapping[str, tuple[int, int]]


def role_sums(
    vector: Sequence[int],
    category_roles: Sequence[Collection[str]],
    roles: Iterable[str] = (),
) -> dict[str, int]:
    """Return the number of drawn cards carrying each role (multi-counted)."""
    sums = dict.fromkeys(roles, 0)
    for drawn, category in zip(vector, category_roles):
        if drawn == 0:
            continue
        for role in category:
            sums[role] = sums.get(role, 0) + drawn
    return sums


def satisfies_thresholds(
    vector: Sequence[int],
    category_roles: Sequence[Collection[str]],
    thresholds: RoleBounds,
) -> bool:
    sums = role_sums(vector, category_roles, thresholds)
    return all(low <= sums[role] <= high for role, (low, high) in thresholds.items())


def iter_valid_draw_vectors(
    population_counts: Sequence[int],
    total_draws: int,
    _roles: Iterable[str] | None,
    category_roles: Sequence[Collection[str]],
    thresholds: RoleBounds,
) -> Iterator[list[int]]:
    """
    Lazily yield every draw vector whose role sums fall within ``thresholds``.

    Categories are filled depth first. Every category but the last tries each
    count from 0 to min(remaining, available); the last one takes whatever
    remains if it fits. Thresholds filter completed vectors and never prune
    partial ones.

    Args:
        population_counts: Cards available per category
        total_draws: Cards drawn in total
        _roles: Roles of interest; roles without a threshold are unconstrained
        category_roles: Role set of each category, aligned with population_counts
        thresholds: Inclusive (min, max) drawn-card bounds per role

    Yields:
        Fresh lists, one per valid vector
    """
    category_count = len(population_counts)

    if total_draws < 0 or total_draws > sum(population_counts):
        return
    if category_count == 0:
        if satisfies_thresholds([], category_roles, thresholds):
            yield []
        return

    current = [0] * category_count
    last = category_count - 1

    def solve(index: int, remaining: int) -> Iterator[list[int]]:
        if index == last:
            if remaining <= population_counts[index]:
                current[index] = remaining
                if satisfies_thresholds(current, category_roles, thresholds):
                    yield list(current)
            return

        for drawn in range(min(remaining, population_counts[index]) + 1):
            current[index] = drawn
            yield from solve(index + 1, remaining - drawn)

    yield from solve(0, total_draws)


def enumerate_valid_draw_vectors(
    population_counts: Sequence[int],
    total_draws: int,
    roles: Iterable[str] | None,
    category_roles: Sequence[Collection[str]],
    thresholds: RoleBounds,
) -> list[list[int]]:
    """
    Return every valid draw vector, in depth-first order.

    Example:
        >>> enumerate_valid_draw_vectors([2, 2], 2, [], [[], []], {})
        [[0, 2], [1, 1], [2, 0]]
    """
    return list(
        iter_valid_draw_vectors(population_counts, total_draws, roles, category_roles, thresholds)
    )
