"""
JSON serialization and boundary validation for gym-loadout models.

Handles conversion between dataclasses and JSON-compatible dicts, and the
checks a caller runs on external input before it reaches the core.  Dict
keys follow the camelCase wire shape used by the rest of the product.
"""

from typing import Any

from ..core.config import FEEDBACK_BIAS, STRATEGY_SCHEDULES
from ..core.models import (
    LOAD_TYPES,
    UNITS,
    EquipmentProfile,
    ExerciseMuscles,
    Feedback,
    LoadType,
    ResolveResult,
    Strategy,
    Unit,
    WarmupContext,
    WarmupStep,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_unit(unit: str) -> Unit:
    """
    Validate a weight unit.

    Raises:
        ValidationError: If unit is not "kg" or "lb"
    """
    if unit not in UNITS:
        raise ValidationError(f"Invalid unit: {unit!r}. Must be one of {UNITS}")
    return unit  # type: ignore


def validate_load_type(load_type: str) -> LoadType:
    """
    Validate a load type.

    Raises:
        ValidationError: If load type is not one of LOAD_TYPES
    """
    if load_type not in LOAD_TYPES:
        raise ValidationError(
            f"Invalid load_type: {load_type!r}. Must be one of {LOAD_TYPES}"
        )
    return load_type  # type: ignore


def validate_strategy(strategy: str) -> Strategy:
    """
    Validate a warm-up strategy name.

    Raises:
        ValidationError: If strategy is unknown
    """
    valid = tuple(STRATEGY_SCHEDULES)
    if strategy not in valid:
        raise ValidationError(f"Invalid strategy: {strategy!r}. Must be one of {valid}")
    return strategy  # type: ignore


def validate_feedback(feedback: str | None) -> Feedback | None:
    """
    Validate warm-up feedback; None and empty string mean "no feedback".

    Raises:
        ValidationError: If feedback is not a known value
    """
    if feedback is None or feedback == "":
        return None
    valid = tuple(FEEDBACK_BIAS)
    if feedback not in valid:
        raise ValidationError(f"Invalid feedback: {feedback!r}. Must be one of {valid}")
    return feedback  # type: ignore


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is non-negative.

    Raises:
        ValidationError: If value is negative
    """
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def validate_positive(value: int | float, name: str) -> int | float:
    """
    Validate that a value is positive.

    Raises:
        ValidationError: If value is not positive
    """
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def parse_muscle_list(raw: str | None) -> list[str]:
    """Split a comma-separated muscle-group list, dropping blanks."""
    if not raw:
        return []
    return [m.strip() for m in raw.split(",") if m.strip()]


def equipment_profile_to_dict(profile: EquipmentProfile) -> dict[str, Any]:
    """Convert EquipmentProfile to JSON-compatible dict."""
    return {
        "unit": profile.unit,
        "barWeight": profile.bar_weight,
        "perSidePlates": list(profile.per_side_plates),
        "microPlates": list(profile.micro_plates),
        "stackSteps": list(profile.stack_steps),
        "stackAddOns": list(profile.stack_add_ons),
        "fixedBars": list(profile.fixed_bars),
        "dumbbellSet": list(profile.dumbbell_set),
    }


def dict_to_equipment_profile(data: dict[str, Any]) -> EquipmentProfile:
    """
    Convert a camelCase dict to EquipmentProfile.

    Missing lists default to empty.

    Raises:
        ValidationError: If unit is invalid or any weight is negative
    """
    try:
        return EquipmentProfile(
            unit=validate_unit(data.get("unit", "kg")),
            bar_weight=float(data.get("barWeight", 0.0)),
            per_side_plates=tuple(data.get("perSidePlates") or ()),
            micro_plates=tuple(data.get("microPlates") or ()),
            stack_steps=tuple(data.get("stackSteps") or ()),
            stack_add_ons=tuple(data.get("stackAddOns") or ()),
            fixed_bars=tuple(data.get("fixedBars") or ()),
            dumbbell_set=tuple(data.get("dumbbellSet") or ()),
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid equipment profile: {e}") from e


def resolve_result_to_dict(result: ResolveResult) -> dict[str, Any]:
    """
    Convert ResolveResult to JSON-compatible dict.

    Optional breakdown keys are omitted when they do not apply to the load
    type (no ``perSidePlates`` for a stack, no ``machineDisplay`` for plates).
    """
    data: dict[str, Any] = {
        "desired": result.desired,
        "targetDisplay": result.target_display,
        "totalSystemWeight": result.total_system_weight,
        "unit": result.unit,
        "matchQuality": result.match_quality,
    }
    if result.per_side_plates is not None:
        data["perSidePlates"] = list(result.per_side_plates)
    if result.machine_display is not None:
        data["machineDisplay"] = result.machine_display
    if result.used_add_ons is not None:
        data["usedAddOns"] = list(result.used_add_ons)
    return data


def warmup_step_to_dict(step: WarmupStep) -> dict[str, Any]:
    """Convert WarmupStep to JSON-compatible dict."""
    return {
        "id": step.id,
        "pct": round(step.percentage, 4),
        "weight": step.weight,
        "reps": step.reps,
        "restSec": step.rest_seconds,
    }


def dict_to_exercise_muscles(data: dict[str, Any]) -> ExerciseMuscles:
    """
    Convert {primary, secondary} to ExerciseMuscles.

    Raises:
        ValidationError: If primary is missing or secondary is not a list
    """
    if "primary" not in data:
        raise ValidationError("Exercise is missing its primary muscle group")
    secondary = data.get("secondary") or []
    if isinstance(secondary, str):
        secondary = parse_muscle_list(secondary)
    if not isinstance(secondary, list):
        raise ValidationError("secondary must be a list of muscle groups")
    try:
        return ExerciseMuscles(
            primary=str(data["primary"]),
            secondary=tuple(str(m) for m in secondary),
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


def warmup_context_to_dict(ctx: WarmupContext) -> dict[str, list[str]]:
    """Snapshot a context as sorted lists (for display and debugging only)."""
    return {
        "primary": sorted(ctx.primary),
        "secondary": sorted(ctx.secondary),
    }
