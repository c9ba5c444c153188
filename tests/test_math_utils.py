"""Unit tests for mathematical utility functions."""

import math

import pytest

from utils.math_utils import (
    binomial_probability,
    hypergeometric_cdf,
    hypergeometric_pmf,
    log_factorial,
    multivariate_hypergeometric_pmf,
    n_cr,
)


class TestCombinations:
    """Tests for log_factorial and n_cr."""

    def test_log_factorial_small_values(self) -> None:
        assert log_factorial(0) == 0.0
        assert log_factorial(1) == 0.0
        assert log_factorial(5) == pytest.approx(math.log(120))

    def test_log_factorial_stays_finite_for_large_decks(self) -> None:
        """1000! overflows a float but its log does not."""
        assert log_factorial(1000) == pytest.approx(math.lgamma(1001))

    def test_known_values(self) -> None:
        assert n_cr(40, 5) == 658008
        assert n_cr(60, 7) == 386206920
        assert n_cr(28, 5) == 98280

    def test_edges(self) -> None:
        for n in range(0, 50):
            assert n_cr(n, 0) == 1
            assert n_cr(n, n) == 1

    def test_symmetry(self) -> None:
        for n in range(0, 61):
            for r in range(0, n + 1):
                assert n_cr(n, r) == n_cr(n, n - r)

    def test_out_of_range_is_zero(self) -> None:
        assert n_cr(5, -1) == 0
        assert n_cr(5, 6) == 0
        assert n_cr(0, 1) == 0

    def test_returns_integer(self) -> None:
        assert isinstance(n_cr(40, 5), int)

    def test_matches_exact_count_for_deck_sizes(self) -> None:
        for n in (40, 50, 60):
            for r in range(0, 8):
                assert n_cr(n, r) == math.comb(n, r)

    def test_huge_arguments_do_not_overflow(self) -> None:
        """Counts beyond the float range fall back to the exact value."""
        assert n_cr(2000, 1000) == math.comb(2000, 1000)


class TestHypergeometricPmf:
    """Tests for hypergeometric_pmf function."""

    def test_opening_hand_exactly_one_playset(self) -> None:
        """Probability of exactly 1 copy of a 4-of in 7-card opening hand (60-card deck).

        Reference: https://aetherhub.com/Apps/HyperGeometric
        Expected: ~33.63%
        """
        prob = hypergeometric_pmf(
            population=60,
            successes_in_pop=4,
            sample_size=7,
            successes_in_sample=1,
        )
        assert 0.335 <= prob <= 0.337

    def test_opening_hand_exactly_two_playset(self) -> None:
        """Probability of exactly 2 copies of a 4-of in 7-card opening hand.

        Expected: ~5.93%
        """
        prob = hypergeometric_pmf(60, 4, 7, 2)
        assert 0.058 <= prob <= 0.060

    def test_single_copy_in_forty_card_deck(self) -> None:
        """Exactly 1 copy of a 1-of in a 5-card hand from 40 cards: 5/40."""
        prob = hypergeometric_pmf(40, 1, 5, 1)
        assert prob == pytest.approx(0.125)

    def test_drawing_zero(self) -> None:
        """Probability of drawing 0 copies of a 4-of.

        Expected: ~60.05% (more likely to miss than hit)
        """
        prob = hypergeometric_pmf(60, 4, 7, 0)
        assert 0.599 <= prob <= 0.602

    def test_impossible_draw_is_zero(self) -> None:
        """Requesting more target cards than exist in deck has probability 0."""
        assert hypergeometric_pmf(60, 4, 7, 5) == 0.0

    def test_draw_larger_than_deck_is_zero(self) -> None:
        """A zero denominator resolves to 0 instead of dividing."""
        assert hypergeometric_pmf(5, 2, 6, 1) == 0.0

    def test_guaranteed_draw(self) -> None:
        """Drawing the whole deck draws every copy."""
        assert hypergeometric_pmf(60, 4, 60, 4) == 1.0

    def test_single_card_deck(self) -> None:
        assert hypergeometric_pmf(1, 1, 1, 1) == 1.0

    def test_zero_copies_zero_target(self) -> None:
        assert hypergeometric_pmf(60, 0, 7, 0) == 1.0

    @pytest.mark.parametrize(
        ("population", "successes", "sample"),
        [(60, 4, 7), (40, 12, 5), (50, 17, 6), (100, 20, 15), (10, 10, 3)],
    )
    def test_sum_of_all_probabilities_equals_one(
        self, population: int, successes: int, sample: int
    ) -> None:
        total = sum(
            hypergeometric_pmf(population, successes, sample, k) for k in range(sample + 1)
        )
        assert total == pytest.approx(1.0, abs=1e-10)


class TestHypergeometricCdf:
    """Tests for hypergeometric_cdf (probability of at least k)."""

    def test_at_least_one_playset_opening_hand(self) -> None:
        """P(X >= 1) = 1 - P(X = 0) = 1 - 0.6005 = ~39.95%"""
        prob = hypergeometric_cdf(60, 4, 7, 1)
        assert 0.398 <= prob <= 0.401

    def test_at_least_zero_is_one(self) -> None:
        assert hypergeometric_cdf(60, 4, 7, 0) == pytest.approx(1.0)
        assert hypergeometric_cdf(40, 12, 5, 0) == pytest.approx(1.0)

    def test_at_least_more_than_possible(self) -> None:
        assert hypergeometric_cdf(60, 4, 7, 5) == 0.0

    def test_turn_three_on_play(self) -> None:
        """P(at least 1 of a 4-of by turn 3 on the play: 9 cards seen).

        Expected: ~48.75%
        """
        prob = hypergeometric_cdf(60, 4, 9, 1)
        assert 0.486 <= prob <= 0.489

    def test_starter_in_opening_hand(self) -> None:
        """At least 1 of 12 starters in a 5-card hand from 40 cards."""
        expected = 1 - n_cr(28, 5) / n_cr(40, 5)
        assert hypergeometric_cdf(40, 12, 5, 1) == pytest.approx(expected)
        assert expected == pytest.approx(0.85064, abs=1e-5)


class TestMultivariateHypergeometricPmf:
    """Tests for multivariate_hypergeometric_pmf."""

    def test_two_categories_match_univariate(self) -> None:
        for k in range(0, 6):
            prob = multivariate_hypergeometric_pmf([12, 28], [k, 5 - k], 40, 5)
            assert prob == pytest.approx(hypergeometric_pmf(40, 12, 5, k))

    def test_single_category_is_certain(self) -> None:
        assert multivariate_hypergeometric_pmf([40], [5], 40, 5) == pytest.approx(1.0)

    def test_vector_not_summing_to_sample_is_zero(self) -> None:
        assert multivariate_hypergeometric_pmf([12, 28], [1, 3], 40, 5) == 0.0

    def test_draw_exceeding_population_is_zero(self) -> None:
        assert multivariate_hypergeometric_pmf([2, 2], [3, 2], 4, 5) == 0.0

    def test_category_overdraw_is_zero(self) -> None:
        assert multivariate_hypergeometric_pmf([1, 5], [2, 0], 6, 2) == 0.0

    def test_three_categories(self) -> None:
        """C(3,1)·C(2,1)·C(5,1) / C(10,3) = 30 / 120."""
        prob = multivariate_hypergeometric_pmf([3, 2, 5], [1, 1, 1], 10, 3)
        assert prob == pytest.approx(0.25)


class TestBinomialProbability:
    """Tests for binomial_probability."""

    def test_fair_coin(self) -> None:
        assert binomial_probability(3, 0, 0.5) == pytest.approx(0.125)
        assert binomial_probability(3, 1, 0.5) == pytest.approx(0.375)

    def test_certain_outcomes(self) -> None:
        assert binomial_probability(4, 4, 1.0) == 1.0
        assert binomial_probability(4, 0, 0.0) == 1.0
        assert binomial_probability(4, 0, 1.0) == 0.0

    def test_out_of_range_successes(self) -> None:
        assert binomial_probability(3, 4, 1.0) == 0.0
        assert binomial_probability(3, -1, 0.5) == 0.0

    def test_zero_trials(self) -> None:
        assert binomial_probability(0, 0, 0.3) == 1.0


class TestProbabilityBounds:
    """Tests to verify probability values are always in valid range."""

    def test_probability_between_zero_and_one(self) -> None:
        test_cases = [
            (60, 4, 7, 0),
            (60, 4, 7, 1),
            (60, 4, 7, 2),
            (60, 4, 7, 3),
            (60, 4, 7, 4),
            (100, 20, 15, 5),
            (40, 17, 7, 3),
        ]
        for pop, k, n, x in test_cases:
            prob = hypergeometric_pmf(pop, k, n, x)
            assert 0.0 <= prob <= 1.0, f"Probability out of bounds for ({pop}, {k}, {n}, {x})"
