"""
Warm-up plan builder.

Turns a working (top-set) weight into an ordered list of warm-up steps.

Pipeline
--------
1. Base schedule (fraction of top weight, reps):
     explicit warm-up count  → percentages_for(count)
     muscle groups given     → percentages_for(next_warmup_count(...))
     otherwise               → strategy table (ramped / quick / power)
2. Feedback bias, weighted toward the earliest sets:
     p[i] + bias × (1 − i / n),  clamped to [min_weight / top, 0.95]
3. Snap each weight: through the resolver when an EquipmentProfile is
   supplied (plate path for barbells, nearest notch for stacks and fixed
   weights), else to the nearest multiple of the rounding increment (never
   below min_weight).
4. Rest by final index: 60 / 90 / 120 s, then 60 s.

Steps that snap above 95 % of the top weight, below min_weight, or onto a
weight no heavier than the previous step, are dropped so the plan always
climbs.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from .config import (
    DEFAULT_MIN_WEIGHT,
    DEFAULT_ROUNDING_INCREMENT,
    DEFAULT_STRATEGY,
    FEEDBACK_BIAS,
    MAX_WARMUP_FRACTION,
    REST_FALLBACK_SECONDS,
    REST_SCHEDULE_SECONDS,
    SECONDS_PER_SET,
    STRATEGY_SCHEDULES,
    WARMTH_REP_LADDER,
    WEIGHT_EPSILON,
)
from .loadout import resolve
from .models import (
    RESOLVED_LOAD_TYPES,
    EquipmentProfile,
    ExerciseMuscles,
    Feedback,
    LoadType,
    Strategy,
    Unit,
    WarmupContext,
    WarmupStep,
)
from .muscle_warmth import next_warmup_count, percentages_for

def _count_schedule(count: int) -> list[tuple[float, int]]:
    reps = WARMTH_REP_LADDER[-count:]
    return [(pct / 100, r) for pct, r in zip(percentages_for(count), reps)]


def base_schedule(
    strategy: Strategy = DEFAULT_STRATEGY,
    muscle_group_ids: Sequence[str] = (),
    context: WarmupContext | None = None,
    warmup_count: int | None = None,
) -> list[tuple[float, int]]:
    """
    Select the (fraction, reps) schedule before feedback and snapping.

    The first muscle-group id is treated as the prime mover and the rest as
    assisting movers.  Without a context every muscle counts as cold.

    Raises:
        ValueError: If strategy is unknown or warmup_count unsupported
    """
    if strategy not in STRATEGY_SCHEDULES:
        valid = ", ".join(STRATEGY_SCHEDULES)
        raise ValueError(f"Unknown warm-up strategy {strategy!r}. Valid: {valid}")

    if warmup_count is not None:
        return _count_schedule(warmup_count)

    if muscle_group_ids:
        exercise = ExerciseMuscles(
            primary=muscle_group_ids[0],
            secondary=tuple(muscle_group_ids[1:]),
        )
        ctx = context if context is not None else WarmupContext()
        return _count_schedule(next_warmup_count(exercise, ctx))

    return list(STRATEGY_SCHEDULES[strategy])


def apply_feedback(
    fractions: Sequence[float],
    feedback: Feedback | None,
    floor: float = 0.0,
) -> list[float]:
    """
    Shift fractions by the feedback bias, more on early sets than late ones.

    Each result is clamped to [floor, MAX_WARMUP_FRACTION].
    """
    if feedback is not None and feedback not in FEEDBACK_BIAS:
        raise ValueError(f"Unknown feedback {feedback!r}. Valid: {', '.join(FEEDBACK_BIAS)}")
    bias = FEEDBACK_BIAS[feedback] if feedback else 0.0
    n = len(fractions)
    adjusted: list[float] = []
    for i, p in enumerate(fractions):
        value = p + bias * (1 - i / n)
        adjusted.append(min(MAX_WARMUP_FRACTION, max(floor, value)))
    return adjusted


def round_to_increment(weight: float, increment: float, min_weight: float = 0.0) -> float:
    """Round half-up to the nearest multiple of ``increment``, floored at ``min_weight``."""
    if increment > 0:
        weight = math.floor(weight / increment + 0.5) * increment
    return round(max(min_weight, weight), 3)


def rest_for_index(index: int) -> int:
    """Rest seconds for the step at ``index``."""
    if index < len(REST_SCHEDULE_SECONDS):
        return REST_SCHEDULE_SECONDS[index]
    return REST_FALLBACK_SECONDS


def build_warmup_plan(
    top_weight: float,
    strategy: Strategy = DEFAULT_STRATEGY,
    rounding_increment: float = DEFAULT_ROUNDING_INCREMENT,
    min_weight: float = DEFAULT_MIN_WEIGHT,
    feedback: Feedback | None = None,
    muscle_group_ids: Sequence[str] = (),
    profile: EquipmentProfile | None = None,
    *,
    context: WarmupContext | None = None,
    warmup_count: int | None = None,
    unit: Unit = "kg",
    load_type: LoadType = "dual_load",
) -> list[WarmupStep]:
    """
    Build the warm-up steps leading to a top set.

    Args:
        top_weight: Working weight in ``unit`` (> 0)
        strategy: Named schedule used when no muscle groups are given
        rounding_increment: Rounding step used without a profile
        min_weight: Lowest weight any step may use; with a profile, steps
            the equipment can only build below it are dropped
        feedback: Last warm-up feedback for this exercise, if any
        muscle_group_ids: Primary muscle group first, then secondary ones
        profile: Equipment to snap each step onto
        context: Session warmth, consulted with muscle_group_ids
        warmup_count: Explicit set count (e.g. from a superset); wins over
            muscle groups and strategy
        unit: Unit of top_weight and min_weight
        load_type: How ``profile`` is loaded (plates, stack or fixed)

    Returns:
        Steps with strictly increasing percentages, none above 95 %

    Raises:
        ValueError: If top_weight is not positive, or the strategy,
            warm-up count or snapping load type is unsupported
    """
    if top_weight <= 0:
        raise ValueError(f"top_weight must be positive, got {top_weight}")
    if profile is not None and load_type not in RESOLVED_LOAD_TYPES:
        raise ValueError(f"Warm-up snapping supports {RESOLVED_LOAD_TYPES}, got {load_type!r}")

    schedule = base_schedule(strategy, muscle_group_ids, context, warmup_count)
    fractions = apply_feedback(
        [fraction for fraction, _ in schedule],
        feedback,
        floor=min_weight / top_weight,
    )

    cap = top_weight * MAX_WARMUP_FRACTION + WEIGHT_EPSILON
    steps: list[WarmupStep] = []
    previous: float | None = None

    for fraction, (_, reps) in zip(fractions, schedule):
        raw = top_weight * fraction
        if profile is not None:
            snapped = resolve(raw, unit, load_type, profile).total_system_weight
        else:
            snapped = round_to_increment(raw, rounding_increment, min_weight)

        if snapped <= 0 or snapped > cap or snapped < min_weight - WEIGHT_EPSILON:
            continue
        if previous is not None and snapped <= previous + WEIGHT_EPSILON:
            continue

        index = len(steps)
        steps.append(
            WarmupStep(
                id=f"W{index + 1}",
                percentage=snapped / top_weight,
                weight=snapped,
                reps=reps,
                rest_seconds=rest_for_index(index),
            )
        )
        previous = snapped

    return steps


def plan_duration_seconds(steps: Sequence[WarmupStep]) -> int:
    """Rough wall-clock time of a warm-up: every rest plus the sets themselves."""
    return sum(s.rest_seconds for s in steps) + SECONDS_PER_SET * len(steps)
