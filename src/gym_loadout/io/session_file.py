"""
YAML session files.

A session file lists the exercises of one workout in order, each with its
working weight and muscle groups.  Consecutive exercises sharing the same
``superset`` tag are performed together.

Example:
    unit: kg
    rounding_increment: 2.5
    exercises:
      - name: Bench press
        top_weight: 100
        primary: chest
        secondary: [triceps, shoulders]
        profile: olympic_kg
      - name: Dips
        top_weight: 20
        primary: triceps
        superset: A
      - name: Cable fly
        top_weight: 30
        primary: chest
        profile: cable_stack_kg
        superset: A

run_session() walks the file with a single WarmupContext, the way a
workout-session controller would: evaluate, plan, then commit.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from ..core.config import DEFAULT_ROUNDING_INCREMENT
from ..core.models import (
    RESOLVED_LOAD_TYPES,
    ExerciseMuscles,
    Feedback,
    LoadType,
    Unit,
    Warmth,
    WarmupContext,
    WarmupStep,
)
from ..core.muscle_warmth import commit_superset, superset_warmup_count, warmth_of
from ..core.profiles import get_profile
from ..core.warmup import build_warmup_plan
from .serializers import (
    ValidationError,
    dict_to_exercise_muscles,
    validate_feedback,
    validate_load_type,
    validate_positive,
    validate_unit,
)


@dataclass
class SessionExercise:
    """One exercise entry of a session file."""

    name: str
    top_weight: float
    muscles: ExerciseMuscles
    feedback: Feedback | None = None
    profile_id: str | None = None
    load_type: LoadType | None = None
    superset: str | None = None


@dataclass
class SessionFile:
    """A parsed session file."""

    unit: Unit
    rounding_increment: float
    exercises: list[SessionExercise]


@dataclass
class ExerciseWarmup:
    """Warm-up planned for one exercise of a session."""

    exercise: SessionExercise
    warmup_count: int
    warmth: Warmth  # warmth of the primary muscle before this exercise
    steps: list[WarmupStep]


def _exercise_from_dict(d: Any, index: int) -> SessionExercise:
    if not isinstance(d, dict):
        raise ValidationError(f"exercise #{index + 1} must be a mapping")
    if "strategy" in d:
        # warm-up counts in a session always follow muscle warmth
        raise ValidationError(
            f"exercise #{index + 1}: strategy is not supported in session files; "
            "warm-up sets follow which muscles are already worked"
        )
    if "top_weight" not in d:
        raise ValidationError(f"exercise #{index + 1} is missing top_weight")
    try:
        top_weight = float(d["top_weight"])
    except (TypeError, ValueError) as e:
        raise ValidationError(f"exercise #{index + 1}: top_weight must be a number") from e

    load_type = d.get("load_type")
    superset = d.get("superset")
    return SessionExercise(
        name=str(d.get("name") or f"Exercise {index + 1}"),
        top_weight=validate_positive(top_weight, "top_weight"),
        muscles=dict_to_exercise_muscles(d),
        feedback=validate_feedback(d.get("feedback")),
        profile_id=d.get("profile"),
        load_type=validate_load_type(load_type) if load_type else None,
        superset=str(superset) if superset not in (None, "") else None,
    )


def dict_to_session_file(data: dict[str, Any]) -> SessionFile:
    """
    Convert a raw session dict to SessionFile.

    Raises:
        ValidationError: If any field is missing or invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("session file must contain a mapping")
    raw_exercises = data.get("exercises")
    if not isinstance(raw_exercises, list) or not raw_exercises:
        raise ValidationError("session file needs a non-empty 'exercises' list")

    try:
        increment = float(data.get("rounding_increment", DEFAULT_ROUNDING_INCREMENT))
    except (TypeError, ValueError) as e:
        raise ValidationError("rounding_increment must be a number") from e

    return SessionFile(
        unit=validate_unit(data.get("unit", "kg")),
        rounding_increment=validate_positive(increment, "rounding_increment"),
        exercises=[_exercise_from_dict(d, i) for i, d in enumerate(raw_exercises)],
    )


def load_session_file(path: str | Path) -> SessionFile:
    """
    Read and validate a YAML session file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If the YAML is malformed or invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Session file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in {path}: {e}") from e
    return dict_to_session_file(data)


def group_supersets(exercises: list[SessionExercise]) -> list[list[SessionExercise]]:
    """Group consecutive exercises sharing a superset tag; untagged ones stand alone."""
    groups: list[list[SessionExercise]] = []
    for ex in exercises:
        if groups and ex.superset is not None and groups[-1][-1].superset == ex.superset:
            groups[-1].append(ex)
        else:
            groups.append([ex])
    return groups


def plan_exercise(
    exercise: SessionExercise,
    warmup_count: int,
    unit: Unit,
    rounding_increment: float,
) -> list[WarmupStep]:
    """
    Build the warm-up for one exercise with a known set count.

    With a profile every step is snapped through the resolver; bodyweight
    and band exercises fall back to plain increment rounding.
    """
    profile = None
    load_type = "dual_load"
    if exercise.profile_id is not None:
        try:
            profile, default_load_type = get_profile(exercise.profile_id)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        load_type = exercise.load_type or default_load_type or "dual_load"
        if load_type not in RESOLVED_LOAD_TYPES:
            profile = None

    return build_warmup_plan(
        exercise.top_weight,
        rounding_increment=rounding_increment,
        feedback=exercise.feedback,
        profile=profile,
        warmup_count=warmup_count,
        unit=unit,
        load_type=load_type,
    )


def run_session(session: SessionFile, ctx: WarmupContext | None = None) -> list[ExerciseWarmup]:
    """
    Plan warm-ups for every exercise of a session, in order.

    Each superset (or lone exercise) is evaluated against the context as it
    stood before the group, planned with the group's largest warm-up count,
    and only then committed.

    Args:
        session: Parsed session file
        ctx: Session context to update; a fresh one when None

    Returns:
        One ExerciseWarmup per exercise, in file order
    """
    ctx = ctx if ctx is not None else WarmupContext()
    results: list[ExerciseWarmup] = []

    for group in group_supersets(session.exercises):
        muscles = [ex.muscles for ex in group]
        count = superset_warmup_count(muscles, ctx)
        for ex in group:
            steps = plan_exercise(ex, count, session.unit, session.rounding_increment)
            results.append(
                ExerciseWarmup(
                    exercise=ex,
                    warmup_count=count,
                    warmth=warmth_of(ex.muscles.primary, ctx),
                    steps=steps,
                )
            )
        commit_superset(muscles, ctx)

    return results
