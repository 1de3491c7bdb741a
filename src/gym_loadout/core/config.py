"""
Configuration constants for load resolution and warm-up planning.

All adjustable parameters are centralized here for easy tuning.
"""

from typing import Final

# =============================================================================
# UNITS
# =============================================================================

LB_PER_KG: Final[float] = 2.20462262  # Single conversion factor, applied once each way
WEIGHT_EPSILON: Final[float] = 1e-6  # Tolerance for exact-match and plate-fit checks
DISPLAY_DECIMALS: Final[int] = 1  # Resolved totals are shown to 0.1 of a unit
ACHIEVABLE_TOLERANCE: Final[float] = 0.1  # is_achievable(): max |achieved - desired|

# =============================================================================
# WARM-UP STRATEGIES
# Each entry: (fraction of working weight, target reps)
# =============================================================================

STRATEGY_SCHEDULES: Final[dict[str, list[tuple[float, int]]]] = {
    "ramped": [(0.40, 10), (0.60, 8), (0.80, 5)],
    "quick": [(0.50, 8), (0.70, 5)],
    "power": [(0.40, 5), (0.60, 3), (0.80, 1)],
}

DEFAULT_STRATEGY: Final[str] = "ramped"

# Reps used when the schedule is derived from muscle warmth: the tail of the
# ramped ladder, so one set → 5 reps, two → 8/5, three → 10/8/5.
WARMTH_REP_LADDER: Final[list[int]] = [10, 8, 5]

# =============================================================================
# FEEDBACK BIAS
# Added to every step's fraction, weighted toward the earliest set:
#   p[i] + bias × (1 − i / n)
# =============================================================================

FEEDBACK_BIAS: Final[dict[str, float]] = {
    "not_enough": 0.05,
    "excellent": 0.0,
    "too_much": -0.05,
}

MAX_WARMUP_FRACTION: Final[float] = 0.95  # No warm-up step above 95% of the top set

# =============================================================================
# REST
# =============================================================================

REST_SCHEDULE_SECONDS: Final[list[int]] = [60, 90, 120]
REST_FALLBACK_SECONDS: Final[int] = 60  # Steps beyond the schedule
SECONDS_PER_SET: Final[int] = 30  # One warm-up set, for duration estimates

# =============================================================================
# MUSCLE WARMTH
# =============================================================================

WARMUP_COUNT_PRIMARY: Final[int] = 1  # Muscle already worked as prime mover
WARMUP_COUNT_SECONDARY: Final[int] = 2  # Muscle only touched as assisting mover
WARMUP_COUNT_COLD: Final[int] = 3

# Percent of working weight per warm-up count
WARMTH_PERCENTAGES: Final[dict[int, list[int]]] = {
    1: [70],
    2: [55, 75],
    3: [40, 60, 80],
}

# =============================================================================
# PLAN DEFAULTS
# =============================================================================

DEFAULT_ROUNDING_INCREMENT: Final[float] = 2.5
DEFAULT_MIN_WEIGHT: Final[float] = 0.0
