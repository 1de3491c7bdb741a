"""
Equipment-aware load resolution.

Maps a desired training weight onto the closest configuration a specific
piece of equipment can actually produce.  One resolver serves both set-entry
snapping and the "is this load achievable" advisory check.

Resolution by load type
-----------------------
  stack        :  every step alone and every step + add-on pair, nearest wins
  fixed        :  nearest fixed bar (or, with no fixed bars, nearest dumbbell)
  dual_load    :  bar + 2 × greedy per-side fill of (desired − bar) / 2
  single_load  :  bar + 1 × greedy fill of (desired − bar)
  bodyweight   :  pass-through, no plate math
  band         :  pass-through, no plate math

Units
-----
The desired weight is converted once into the profile's unit, the search
runs entirely in profile units, and the result is converted back once.

Known limitation
----------------
The plate fill is greedy (largest plate first, then micro-plates).  Like the
classic coin-change greedy it can miss a target that only a non-greedy
combination reaches, e.g. per-side 6 with plates [5, 3] fills to 5, not 3+3.
The behaviour is pinned by a regression test.

Ties
----
Stack and fixed searches keep the first strictly better candidate, so
results depend on the order of ``stack_steps`` / ``fixed_bars`` /
``dumbbell_set``.  EquipmentProfile documents ascending order as the contract.
"""

from __future__ import annotations

import math

from .config import ACHIEVABLE_TOLERANCE, DISPLAY_DECIMALS, LB_PER_KG, WEIGHT_EPSILON
from .models import (
    LOAD_TYPES,
    PLATE_LOAD_TYPES,
    EquipmentProfile,
    LoadType,
    MatchQuality,
    ResolveResult,
    Unit,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def convert_weight(value: float, from_unit: Unit, to_unit: Unit) -> float:
    """
    Convert a weight between kg and lb.

    Args:
        value: Weight in ``from_unit``
        from_unit: "kg" or "lb"
        to_unit: "kg" or "lb"

    Returns:
        Weight in ``to_unit`` (unrounded)
    """
    if from_unit == to_unit:
        return value
    if from_unit == "kg":
        return value * LB_PER_KG
    return value / LB_PER_KG


def classify_match(achieved: float, desired: float) -> MatchQuality:
    """Tag how the achieved weight compares to the desired one (same unit)."""
    if abs(achieved - desired) < WEIGHT_EPSILON:
        return "exact"
    return "nearestUp" if achieved > desired else "nearestDown"


def _sides(load_type: LoadType) -> int:
    return 2 if load_type == "dual_load" else 1


def _display(value: float) -> float:
    return round(value, DISPLAY_DECIMALS)


def greedy_fill(
    target: float,
    plates: tuple[float, ...] | list[float],
    micro_plates: tuple[float, ...] | list[float] = (),
) -> list[float]:
    """
    Fill ``target`` with plates, largest first, then micro-plates.

    Each denomination is used as many times as it fits.  Zero-weight entries
    are ignored.  The fill never exceeds ``target`` (beyond float tolerance).

    Args:
        target: Weight to build on one side (≥ 0)
        plates: Available plate denominations
        micro_plates: Fractional plates tried after the regular ones

    Returns:
        Plates used, in the order they were loaded
    """
    loaded: list[float] = []
    remaining = target
    for group in (plates, micro_plates):
        for w in sorted(group, reverse=True):
            if w <= 0:
                continue
            while remaining >= w - WEIGHT_EPSILON:
                loaded.append(w)
                remaining -= w
    return loaded


def _nearest(desired: float, options: tuple[float, ...]) -> float | None:
    """First option with strictly minimal distance to ``desired``."""
    best: float | None = None
    best_dist = math.inf
    for w in options:
        dist = abs(w - desired)
        if dist < best_dist:
            best, best_dist = w, dist
    return best


# ---------------------------------------------------------------------------
# Per-load-type search (profile units)
# ---------------------------------------------------------------------------

def _resolve_stack(desired: float, profile: EquipmentProfile) -> tuple[float, float, float | None]:
    """Return (total, base_step, add_on or None) nearest to ``desired``."""
    best_total, best_base, best_add = 0.0, 0.0, None
    best_dist = math.inf
    for step in profile.stack_steps:
        if abs(step - desired) < best_dist:
            best_total, best_base, best_add = step, step, None
            best_dist = abs(step - desired)
        for add_on in profile.stack_add_ons:
            candidate = step + add_on
            if abs(candidate - desired) < best_dist:
                best_total, best_base, best_add = candidate, step, add_on
                best_dist = abs(candidate - desired)
    return best_total, best_base, best_add


def _fixed_options(profile: EquipmentProfile) -> tuple[float, ...]:
    return profile.fixed_bars if profile.fixed_bars else profile.dumbbell_set


def _resolve_plates(
    desired: float,
    load_type: LoadType,
    profile: EquipmentProfile,
) -> tuple[float, list[float]]:
    """Return (total, per_side_plates) for dual/single loading."""
    bar = profile.bar_weight
    sides = _sides(load_type)
    per_side_target = max(0.0, (desired - bar) / sides)
    side = greedy_fill(per_side_target, profile.per_side_plates, profile.micro_plates)
    return bar + sum(side) * sides, side


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def resolve(
    desired: float,
    user_unit: Unit,
    load_type: LoadType,
    profile: EquipmentProfile,
) -> ResolveResult:
    """
    Resolve a desired weight to the closest configuration the equipment offers.

    Empty inventories are not errors: they degrade to "only the bar (or
    nothing) is achievable".

    Args:
        desired: Requested weight in ``user_unit`` (≥ 0)
        user_unit: Unit the caller works in
        load_type: How the equipment is loaded
        profile: Increments the equipment offers

    Returns:
        ResolveResult with totals in ``user_unit``

    Raises:
        ValueError: If load_type is not a known load type
    """
    if load_type not in LOAD_TYPES:
        raise ValueError(f"Unknown load type {load_type!r}. Valid: {', '.join(LOAD_TYPES)}")

    if load_type in ("bodyweight", "band"):
        return ResolveResult(
            desired=desired,
            target_display=_display(desired),
            total_system_weight=_display(desired),
            unit=user_unit,
            match_quality="exact",
        )

    desired_p = convert_weight(desired, user_unit, profile.unit)

    per_side: list[float] | None = None
    machine: float | None = None
    add_ons: list[float] | None = None

    if load_type == "stack":
        total_p, machine, add_on = _resolve_stack(desired_p, profile)
        add_ons = [add_on] if add_on is not None else []
    elif load_type == "fixed":
        nearest = _nearest(desired_p, _fixed_options(profile))
        total_p = nearest if nearest is not None else 0.0
    else:
        total_p, per_side = _resolve_plates(desired_p, load_type, profile)

    total = _display(convert_weight(total_p, profile.unit, user_unit))
    return ResolveResult(
        desired=desired,
        target_display=total,
        total_system_weight=total,
        unit=user_unit,
        match_quality=classify_match(total_p, desired_p),
        per_side_plates=per_side,
        machine_display=machine,
        used_add_ons=add_ons,
    )


def minimum_load(load_type: LoadType, profile: EquipmentProfile) -> float:
    """
    Lowest total the equipment can produce, in the profile's unit.

    Bar weight for plate-loaded equipment, the lowest stack step or fixed
    option otherwise; 0 for pass-through load types or empty inventories.
    """
    if load_type in PLATE_LOAD_TYPES:
        return profile.bar_weight
    if load_type == "stack":
        return min(profile.stack_steps, default=0.0)
    if load_type == "fixed":
        return min(_fixed_options(profile), default=0.0)
    return 0.0


def _smallest_gap(values: tuple[float, ...]) -> float | None:
    ordered = sorted(set(values))
    gaps = [b - a for a, b in zip(ordered, ordered[1:]) if b - a > WEIGHT_EPSILON]
    return min(gaps, default=None)


def min_increment(load_type: LoadType, profile: EquipmentProfile) -> float | None:
    """
    Smallest step between two achievable totals, in the profile's unit.

    Plate loading: smallest plate or micro-plate × number of sides.
    Stack: smallest gap between steps, or smallest add-on if lower.
    Fixed: smallest gap between available options.

    Returns:
        The increment, or None when the inventory does not define one
    """
    if load_type in PLATE_LOAD_TYPES:
        plates = [w for w in profile.per_side_plates + profile.micro_plates if w > 0]
        if not plates:
            return None
        return min(plates) * _sides(load_type)
    if load_type == "stack":
        candidates = [w for w in profile.stack_add_ons if w > 0]
        gap = _smallest_gap(profile.stack_steps)
        if gap is not None:
            candidates.append(gap)
        return min(candidates, default=None)
    if load_type == "fixed":
        return _smallest_gap(_fixed_options(profile))
    return None


def is_achievable(
    desired: float,
    user_unit: Unit,
    load_type: LoadType,
    profile: EquipmentProfile,
    tolerance: float = ACHIEVABLE_TOLERANCE,
) -> bool:
    """Return True if the resolved total lands within ``tolerance`` of ``desired``."""
    result = resolve(desired, user_unit, load_type, profile)
    return abs(result.total_system_weight - desired) <= tolerance + WEIGHT_EPSILON
