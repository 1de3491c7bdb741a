"""
Data models for gym-loadout.

Dataclasses describing equipment inventories, resolved loadouts, warm-up
steps and the per-session muscle warmth context.  Validation of individual
field values happens in ``__post_init__``; parsing of external input lives in
io/serializers.py.
"""

from dataclasses import dataclass, field
from typing import Literal

Unit = Literal["kg", "lb"]
LoadType = Literal["dual_load", "single_load", "stack", "fixed", "bodyweight", "band"]
MatchQuality = Literal["exact", "nearestUp", "nearestDown"]
Strategy = Literal["ramped", "quick", "power"]
Feedback = Literal["not_enough", "excellent", "too_much"]
Warmth = Literal["primary", "secondary", "cold"]

UNITS: tuple[str, ...] = ("kg", "lb")
LOAD_TYPES: tuple[str, ...] = ("dual_load", "single_load", "stack", "fixed", "bodyweight", "band")
PLATE_LOAD_TYPES: tuple[str, ...] = ("dual_load", "single_load")
# Load types with an inventory to search (the rest are pass-through)
RESOLVED_LOAD_TYPES: tuple[str, ...] = ("dual_load", "single_load", "stack", "fixed")


@dataclass(frozen=True)
class EquipmentProfile:
    """
    The discrete increments one piece of equipment can offer.

    All weights are expressed in ``unit``.  ``per_side_plates`` and
    ``micro_plates`` may come in any order (the resolver sorts them
    descending).  ``stack_steps``, ``stack_add_ons``, ``fixed_bars`` and
    ``dumbbell_set`` are evaluated in the order given, so the first of two
    equally close candidates wins: supply them in ascending order.
    """

    unit: Unit = "kg"
    bar_weight: float = 0.0
    per_side_plates: tuple[float, ...] = ()
    micro_plates: tuple[float, ...] = ()
    stack_steps: tuple[float, ...] = ()
    stack_add_ons: tuple[float, ...] = ()
    fixed_bars: tuple[float, ...] = ()
    dumbbell_set: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        """Validate unit and weights."""
        if self.unit not in UNITS:
            raise ValueError(f"Invalid unit: {self.unit!r}. Must be 'kg' or 'lb'.")
        if self.bar_weight < 0:
            raise ValueError("bar_weight must be non-negative")
        for name in (
            "per_side_plates",
            "micro_plates",
            "stack_steps",
            "stack_add_ons",
            "fixed_bars",
            "dumbbell_set",
        ):
            values = tuple(float(v) for v in getattr(self, name))
            if any(v < 0 for v in values):
                raise ValueError(f"{name} must contain only non-negative weights")
            # frozen dataclass: normalise lists passed by callers into tuples
            object.__setattr__(self, name, values)


@dataclass
class ResolveResult:
    """
    Closest achievable configuration for a requested weight.

    ``desired``, ``target_display`` and ``total_system_weight`` are in the
    caller's unit; the plate breakdown and machine notch stay in the
    profile's unit, as they are read off the equipment.
    """

    desired: float
    target_display: float
    total_system_weight: float
    unit: Unit
    match_quality: MatchQuality
    per_side_plates: list[float] | None = None
    machine_display: float | None = None
    used_add_ons: list[float] | None = None

    @property
    def residual(self) -> float:
        """Achieved minus desired, in the caller's unit (positive = heavier)."""
        return round(self.total_system_weight - self.desired, 1)


@dataclass(frozen=True)
class WarmupStep:
    """One warm-up set: fraction of the working weight, absolute weight, reps and rest."""

    id: str
    percentage: float
    weight: float
    reps: int
    rest_seconds: int

    def __post_init__(self) -> None:
        if self.percentage < 0:
            raise ValueError("percentage must be non-negative")
        if self.reps < 0:
            raise ValueError("reps must be non-negative")
        if self.rest_seconds < 0:
            raise ValueError("rest_seconds must be non-negative")


@dataclass(frozen=True)
class ExerciseMuscles:
    """Muscle-group metadata of one exercise, as supplied by the exercise catalog."""

    primary: str
    secondary: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.primary, str) or not self.primary.strip():
            raise ValueError("primary muscle group must be a non-empty string")
        object.__setattr__(self, "secondary", tuple(self.secondary))


@dataclass
class WarmupContext:
    """
    Muscle groups already worked in the current session.

    Created at session start and owned by exactly one session controller,
    which passes it explicitly into every call.  Never persisted and never
    shared between sessions.
    """

    primary: set[str] = field(default_factory=set)
    secondary: set[str] = field(default_factory=set)
