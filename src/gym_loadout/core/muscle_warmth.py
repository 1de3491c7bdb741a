"""
Session-scoped muscle warmth tracking.

A WarmupContext remembers which muscle groups have already been worked in
the current session, as prime mover (``primary``) or only as an assisting
mover (``secondary``).  The number of warm-up sets for the next exercise
follows the 3 → 2 → 1 reduction rule:

  primary muscle cold                  → 3 warm-up sets (40/60/80 %)
  primary muscle touched as secondary  → 2 warm-up sets (55/75 %)
  primary muscle already worked        → 1 warm-up set  (70 %)

The context is a plain value owned by one session controller and passed
into every call; nothing here keeps module-level state.
"""

from __future__ import annotations

from collections.abc import Iterable

from .config import (
    WARMTH_PERCENTAGES,
    WARMUP_COUNT_COLD,
    WARMUP_COUNT_PRIMARY,
    WARMUP_COUNT_SECONDARY,
)
from .models import ExerciseMuscles, Warmth, WarmupContext


def warmth_of(muscle_group_id: str, ctx: WarmupContext) -> Warmth:
    """Return "primary", "secondary" or "cold" for a muscle group."""
    if muscle_group_id in ctx.primary:
        return "primary"
    if muscle_group_id in ctx.secondary:
        return "secondary"
    return "cold"


def next_warmup_count(exercise: ExerciseMuscles, ctx: WarmupContext) -> int:
    """
    Number of warm-up sets the exercise warrants given what was already worked.

    Only the exercise's primary muscle group is looked up; primary status
    takes precedence over secondary.

    Returns:
        1, 2 or 3
    """
    warmth = warmth_of(exercise.primary, ctx)
    if warmth == "primary":
        return WARMUP_COUNT_PRIMARY
    if warmth == "secondary":
        return WARMUP_COUNT_SECONDARY
    return WARMUP_COUNT_COLD


def commit(exercise: ExerciseMuscles, ctx: WarmupContext) -> None:
    """
    Record a finished exercise in the context.

    The primary muscle group is promoted to ``primary``.  Secondary groups
    are added to ``secondary`` unless already primary: primary status is
    never downgraded.
    """
    ctx.primary.add(exercise.primary)
    ctx.secondary.discard(exercise.primary)
    for muscle in exercise.secondary:
        if muscle not in ctx.primary:
            ctx.secondary.add(muscle)


def percentages_for(count: int) -> list[int]:
    """
    Warm-up percentages of the working weight for a given set count.

    Raises:
        ValueError: If count is not 1, 2 or 3
    """
    if count not in WARMTH_PERCENTAGES:
        valid = ", ".join(str(k) for k in WARMTH_PERCENTAGES)
        raise ValueError(f"Unsupported warm-up count {count}. Valid counts: {valid}")
    return list(WARMTH_PERCENTAGES[count])


def superset_warmup_count(exercises: Iterable[ExerciseMuscles], ctx: WarmupContext) -> int:
    """
    Warm-up count for exercises performed together as a superset.

    Every exercise is evaluated against the context as it stands before any
    of them is committed; the superset uses the largest count.
    """
    counts = [next_warmup_count(ex, ctx) for ex in exercises]
    if not counts:
        raise ValueError("A superset needs at least one exercise")
    return max(counts)


def commit_superset(exercises: Iterable[ExerciseMuscles], ctx: WarmupContext) -> None:
    """Commit every exercise of a superset, in order."""
    for ex in exercises:
        commit(ex, ctx)
