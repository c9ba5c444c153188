"""
Mathematical utility functions for probability calculations.

This module provides the combinatorics kernel and the hypergeometric
distributions used to compute the odds of drawing role-tagged card groups
from a deck. Every function here is pure and total over non-negative integer
input: degenerate arguments resolve to a probability of 0 instead of raising,
so callers can feed enumerated draws straight through without guarding.
"""

import math
import sys
from collections.abc import Sequence
from functools import lru_cache

# Natural-log ceiling below which exp() cannot overflow a float.
_MAX_FLOAT_LOG = math.log(sys.float_info.max) - 1.0


@lru_cache(maxsize=4096)
def log_factorial(n: int) -> float:
    """
    Return ln(n!) as a running sum of ln(i) for i in 2..n.

    Stays finite for deck-sized arguments where n! itself would overflow a
    float. Returns 0.0 for n in {0, 1}.
    """
    total = 0.0
    for i in range(2, n + 1):
        total += math.log(i)
    return total


def n_cr(n: int, r: int) -> int:
    """
    Count the ways to choose r items from n, computed in log space.

    Formula: C(n, r) = round(exp(ln n! - ln r! - ln (n-r)!))

    The final rounding recovers the integer lost to floating error on the way
    through log space; low-order digits of very large counts are not exact.

    Args:
        n: Population size
        r: Number of items chosen

    Returns:
        The combination count, or 0 when r < 0 or r > n

    Example:
        >>> n_cr(40, 5)
        658008
    """
    if r < 0 or r > n:
        return 0
    if r == 0 or r == n:
        return 1
    if r > n / 2:
        r = n - r

    log_value = log_factorial(n) - log_factorial(r) - log_factorial(n - r)
    if log_value >= _MAX_FLOAT_LOG:
        return math.comb(n, r)
    return round(math.exp(log_value))


def hypergeometric_pmf(
    population: int,
    successes_in_pop: int,
    sample_size: int,
    successes_in_sample: int,
) -> float:
    """
    Calculate the exact probability of drawing a specific number of target cards.

    Uses the hypergeometric distribution to compute the probability of drawing
    exactly k target cards when drawing n cards from a deck of N cards that
    contains K copies of the target card.

    Formula: P(X = k) = [C(K, k) × C(N-K, n-k)] / C(N, n)

    Args:
        population: Total number of cards in the deck (N)
        successes_in_pop: Number of target cards in the deck (K)
        sample_size: Number of cards drawn (n)
        successes_in_sample: Target number of cards to draw (k)

    Returns:
        Probability as a float between 0.0 and 1.0. Draws larger than the
        deck, or otherwise impossible draws, yield 0.0.

    Example:
        >>> # Probability of drawing exactly 1 of a 3-of in a 5-card opening hand
        >>> hypergeometric_pmf(40, 3, 5, 1)
        0.3011...
    """
    denominator = n_cr(population, sample_size)
    if denominator == 0:
        return 0.0

    numerator = n_cr(successes_in_pop, successes_in_sample) * n_cr(
        population - successes_in_pop, sample_size - successes_in_sample
    )
    return numerator / denominator


def hypergeometric_cdf(
    population: int,
    successes_in_pop: int,
    sample_size: int,
    min_successes: int,
) -> float:
    """
    Calculate the probability of drawing at least a minimum number of target cards.

    Computes P(X >= min_successes) by summing probabilities from min_successes
    to the maximum possible number of target cards that could be drawn.

    Args:
        population: Total number of cards in the deck (N)
        successes_in_pop: Number of target cards in the deck (K)
        sample_size: Number of cards drawn (n)
        min_successes: Minimum number of target cards desired (k_min)

    Returns:
        Probability as a float between 0.0 and 1.0

    Example:
        >>> # At least 1 of 12 starters in a 5-card hand from 40 cards
        >>> hypergeometric_cdf(40, 12, 5, 1)
        0.8506...
    """
    max_successes = min(sample_size, successes_in_pop)

    total_probability = 0.0
    for k in range(min_successes, max_successes + 1):
        total_probability += hypergeometric_pmf(population, successes_in_pop, sample_size, k)

    return total_probability


def multivariate_hypergeometric_pmf(
    population_counts: Sequence[int],
    drawn_counts: Sequence[int],
    population: int,
    sample_size: int,
) -> float:
    """
    Probability of one exact per-category draw from a multi-category deck.

    Formula: P = [∏ C(K_i, k_i)] / C(N, n)

    Args:
        population_counts: Cards per category (K_i); must sum to population
        drawn_counts: Cards drawn per category (k_i)
        population: Total number of cards in the deck (N)
        sample_size: Number of cards drawn (n)

    Returns:
        Probability as a float between 0.0 and 1.0. A draw vector that does
        not sum to sample_size has probability 0.0.
    """
    if sum(drawn_counts) != sample_size:
        return 0.0

    denominator = n_cr(population, sample_size)
    if denominator == 0:
        return 0.0

    numerator = math.prod(
        n_cr(available, drawn) for available, drawn in zip(population_counts, drawn_counts)
    )
    return numerator / denominator


def binomial_probability(trials: int, successes: int, p: float) -> float:
    """Binomial PMF: C(n, k) · p^k · (1-p)^(n-k); 0.0 when k is outside [0, n]."""
    if successes < 0 or successes > trials:
        return 0.0
    return n_cr(trials, successes) * p**successes * (1 - p) ** (trials - successes)
