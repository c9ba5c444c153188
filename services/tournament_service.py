"""
Match and Swiss tournament aggregation.

Turns per-condition hand probabilities into single-game, best-of-three match
and Swiss record distributions. Game 1 is played with the main deck from the
player's chosen seat; games 2 and 3 use the post-sideboard deck with the
sideboard variance weighting. Two approximations are kept on purpose: games
within a match are treated as independent, and the mulligan model retries
only once.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from loguru import logger

from services.probability_service import step_probability
from utils.constants.analysis import (
    DEAD_DRAW_MAX_BRICKS,
    FINAL_ROUND_PENALTY,
    FRINGE_MAX_DECAY,
    MATCH_CONSISTENCY_FLOOR,
    PENULTIMATE_ROUND_PENALTY,
    POST_SIDE_CONSISTENCY_FLOOR,
    RESILIENT_KEEP_FACTOR,
    RESILIENT_WEIGHT_RATIO,
    VELOCITY_CRITICAL_DROP,
    VELOCITY_WARNING_DROP,
)
from utils.deck_models import (
    CompoundCondition,
    DeckComposition,
    DrawRules,
    MulliganConfig,
    TournamentConfig,
)
from utils.math_utils import binomial_probability


@dataclass(frozen=True)
class ConditionOdds:
    """A condition's weight and its turn-one probability from each seat."""

    name: str
    weight: float
    prob_first: float
    prob_second: float

    @property
    def seat_average(self) -> float:
        return (self.prob_first + self.prob_second) / 2


@dataclass(frozen=True)
class VelocityAlert:
    """Relative drop from game-1 to post-sideboard win probability."""

    drop: float
    triggered: bool
    severity: str


@dataclass(frozen=True)
class RoundRecord:
    wins: int
    losses: int
    probability: float

    @property
    def record(self) -> str:
        return f"{self.wins}-{self.losses}"


@dataclass(frozen=True)
class TournamentAnalysis:
    """Everything derived for one deck across a best-of-three Swiss event."""

    p_g1: float
    p_g2_after_win: float
    p_g2_after_loss: float
    p_g3: float
    p_match: float
    match_consistency: float
    meets_consistency_floor: bool
    post_side_consistency: float
    consistency_warning: bool
    g1_velocity: float
    g23_velocity: float
    velocity_drop: float
    brick_alert: bool
    brick_alert_severity: str
    top_cut_probability: float
    rounds_distribution: list[RoundRecord]
    expected_wins: float
    expected_losses: float


# ============= Single Game =============


def condition_odds(
    conditions: Iterable[CompoundCondition],
    composition: DeckComposition,
    draw_rules: DrawRules,
    *,
    mulligan: MulliganConfig | None = None,
    brick_cap: int | None = None,
) -> list[ConditionOdds]:
    """Turn-one probability of every condition going first and going second."""
    first_draws, second_draws = draw_rules.seat_draw_counts()
    odds = []
    for condition in conditions:
        prob_first = step_probability(
            first_draws,
            condition,
            composition,
            opening_hand_size=first_draws,
            mulligan=mulligan,
            brick_cap=brick_cap,
        )
        prob_second = step_probability(
            second_draws,
            condition,
            composition,
            opening_hand_size=second_draws,
            mulligan=mulligan,
            brick_cap=brick_cap,
        )
        odds.append(ConditionOdds(condition.name, condition.weight, prob_first, prob_second))
    return odds


def sideboard_keep_factor(weight: float, max_weight: float) -> float:
    """
    Share of a condition's weight that survives sideboarding.

    Conditions close to the top weight keep 90%; the rest lose up to 30%
    in proportion to how far below the top weight they sit.
    """
    resilience = weight / max_weight
    if resilience >= RESILIENT_WEIGHT_RATIO:
        return RESILIENT_KEEP_FACTOR
    return 1 - FRINGE_MAX_DECAY * (1 - resilience)


def game_win_probability(
    odds: Sequence[ConditionOdds],
    going_first: bool,
    *,
    with_sideboard: bool = False,
    sideboard_variance: float = 0.0,
) -> float:
    """
    Weighted mean of condition probabilities from one seat.

    Args:
        odds: Per-condition seat probabilities
        going_first: Seat to read probabilities from
        with_sideboard: Apply the post-sideboard weight decay
        sideboard_variance: Decay is only applied when this is positive

    Returns:
        Weighted probability, or 0.0 when the total weight is zero
    """
    max_weight = max([entry.weight for entry in odds] + [1.0])
    weighted_probability = 0.0
    total_weight = 0.0

    for entry in odds:
        base_probability = entry.prob_first if going_first else entry.prob_second
        effective_weight = entry.weight
        if with_sideboard and sideboard_variance > 0:
            effective_weight = entry.weight * max(
                0.0, sideboard_keep_factor(entry.weight, max_weight)
            )
        weighted_probability += base_probability * effective_weight
        total_weight += effective_weight

    return weighted_probability / total_weight if total_weight > 0 else 0.0


# ============= Match =============


def best_of_three_probability(
    p_g1: float, p_g2_after_win: float, p_g2_after_loss: float, p_g3: float
) -> float:
    """
    Match win probability over the win-win, win-lose-win and lose-win-win paths.

    Formula: P = p1·p2w + p1·(1-p2w)·p3 + (1-p1)·p2l·p3
    """
    return (
        p_g1 * p_g2_after_win
        + p_g1 * (1 - p_g2_after_win) * p_g3
        + (1 - p_g1) * p_g2_after_loss * p_g3
    )


def match_consistency(playable_g1: float, playable_g23: float) -> float:
    """Chance of at least one playable hand in three games, assuming independent games."""
    return 1 - (1 - playable_g1) * (1 - playable_g23) ** 2


def velocity_alert(g1_velocity: float, g23_velocity: float) -> VelocityAlert:
    drop = (g1_velocity - g23_velocity) / g1_velocity if g1_velocity > 0 else 0.0
    severity = "critical" if drop > VELOCITY_CRITICAL_DROP else "warning"
    return VelocityAlert(drop=drop, triggered=drop > VELOCITY_WARNING_DROP, severity=severity)


# ============= Swiss =============


def stamina_penalty(round_number: int, rounds: int, enabled: bool = True) -> float:
    """Fatigue subtracted from the match win probability in the last two rounds."""
    if not enabled:
        return 0.0
    if round_number >= rounds:
        return FINAL_ROUND_PENALTY
    if round_number >= rounds - 1:
        return PENULTIMATE_ROUND_PENALTY
    return 0.0


def swiss_distribution(p_match: float, rounds: int, *, stamina: bool = False) -> list[RoundRecord]:
    """
    Probability of every win-loss record after ``rounds`` Swiss rounds.

    Without stamina the record is binomial in ``p_match``. With stamina each
    round's win probability is ``max(0, p_match - penalty(round))`` and the
    distribution is built round by round:
    dp[r][w] = dp[r-1][w-1]·p_r + dp[r-1][w]·(1-p_r), with dp[0][0] = 1.
    """
    if not stamina:
        return [
            RoundRecord(wins, rounds - wins, binomial_probability(rounds, wins, p_match))
            for wins in range(rounds + 1)
        ]

    previous = [1.0] + [0.0] * rounds
    for round_number in range(1, rounds + 1):
        p_round = max(0.0, p_match - stamina_penalty(round_number, rounds))
        current = [0.0] * (rounds + 1)
        for wins in range(round_number + 1):
            if wins > 0:
                current[wins] += previous[wins - 1] * p_round
            current[wins] += previous[wins] * (1 - p_round)
        previous = current

    return [RoundRecord(wins, rounds - wins, previous[wins]) for wins in range(rounds + 1)]


def top_cut_probability(distribution: Iterable[RoundRecord], threshold: int) -> float:
    return sum(entry.probability for entry in distribution if entry.wins >= threshold)


def expected_wins(distribution: Iterable[RoundRecord]) -> float:
    return sum(entry.wins * entry.probability for entry in distribution)


# ============= Full Analysis =============


def analyze_tournament(
    conditions: Sequence[CompoundCondition],
    main_deck: DeckComposition,
    draw_rules: DrawRules,
    config: TournamentConfig,
    *,
    mulligan: MulliganConfig | None = None,
    post_side_deck: DeckComposition | None = None,
) -> TournamentAnalysis | None:
    """
    Compose hand probabilities into match and Swiss tournament statistics.

    The first condition is treated as the "playable hand" condition for the
    consistency figures.

    Args:
        conditions: Weighted win states; the first one defines a playable hand
        main_deck: Game-1 deck
        draw_rules: Opening hand and turn-one draw rules
        config: Swiss and sideboarding parameters
        mulligan: Mulligan rules for game-1 opening hands
        post_side_deck: Games 2/3 deck; the main deck is reused when omitted

    Returns:
        TournamentAnalysis, or None when there are no conditions
    """
    if not conditions:
        return None

    use_post_side = post_side_deck is not None
    g23_deck = post_side_deck if post_side_deck is not None else main_deck
    brick_cap = DEAD_DRAW_MAX_BRICKS if config.brick_sensitivity else None

    g1_odds = condition_odds(conditions, main_deck, draw_rules, mulligan=mulligan)
    g23_odds = condition_odds(conditions, g23_deck, draw_rules, brick_cap=brick_cap)

    variance = config.sideboard_variance
    p_g1 = game_win_probability(g1_odds, config.g1_going_first)
    p_g2_after_win = game_win_probability(
        g23_odds, False, with_sideboard=True, sideboard_variance=variance
    )
    p_g2_after_loss = game_win_probability(
        g23_odds, True, with_sideboard=True, sideboard_variance=variance
    )
    p_g3 = (p_g2_after_loss + p_g2_after_win) / 2
    p_match = best_of_three_probability(p_g1, p_g2_after_win, p_g2_after_loss, p_g3)

    playable_g1 = g1_odds[0].seat_average
    playable_g23 = g23_odds[0].seat_average
    consistency = match_consistency(playable_g1, playable_g23)

    g23_velocity = (p_g2_after_win + p_g2_after_loss + p_g3) / 3
    alert = velocity_alert(p_g1, g23_velocity)

    distribution = swiss_distribution(p_match, config.rounds, stamina=config.stamina_factor)
    wins = expected_wins(distribution)

    analysis = TournamentAnalysis(
        p_g1=p_g1,
        p_g2_after_win=p_g2_after_win,
        p_g2_after_loss=p_g2_after_loss,
        p_g3=p_g3,
        p_match=p_match,
        match_consistency=consistency,
        meets_consistency_floor=consistency >= MATCH_CONSISTENCY_FLOOR,
        post_side_consistency=playable_g23,
        consistency_warning=use_post_side and playable_g23 < POST_SIDE_CONSISTENCY_FLOOR,
        g1_velocity=p_g1,
        g23_velocity=g23_velocity,
        velocity_drop=alert.drop,
        brick_alert=alert.triggered,
        brick_alert_severity=alert.severity,
        top_cut_probability=top_cut_probability(distribution, config.top_cut_threshold),
        rounds_distribution=distribution,
        expected_wins=wins,
        expected_losses=config.rounds - wins,
    )
    logger.debug(
        f"Tournament analysis: P(match)={p_match:.4f}, "
        f"top cut={analysis.top_cut_probability:.4f} over {config.rounds} rounds"
    )
    return analysis
