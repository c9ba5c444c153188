"""Tuning constants for match and Swiss tournament aggregation."""

# Number of draw steps after the opening hand in a timeline (inclusive of step 0).
TIMELINE_STEPS = 11

# Sideboard variance: conditions at or above this share of the top weight keep
# RESILIENT_KEEP_FACTOR of their weight; the rest lose up to FRINGE_MAX_DECAY.
RESILIENT_WEIGHT_RATIO = 0.8
RESILIENT_KEEP_FACTOR = 0.90
FRINGE_MAX_DECAY = 0.30

# Post-sideboard games treat hands with more than this many bricks as dead.
DEAD_DRAW_MAX_BRICKS = 1

MATCH_CONSISTENCY_FLOOR = 0.997
POST_SIDE_CONSISTENCY_FLOOR = 0.90

VELOCITY_WARNING_DROP = 0.02
VELOCITY_CRITICAL_DROP = 0.05

# Late-round fatigue applied to the per-round match win probability.
FINAL_ROUND_PENALTY = 0.03
PENULTIMATE_ROUND_PENALTY = 0.02
