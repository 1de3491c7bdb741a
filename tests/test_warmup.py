"""
Tests for the warm-up plan builder.

Weights are hand-computed: fraction × top weight, feedback bias
p[i] + bias × (1 − i/n), then half-up rounding to the increment (or the
resolver when a profile is given).
"""

import pytest

from gym_loadout.core.models import EquipmentProfile, WarmupContext
from gym_loadout.core.warmup import (
    apply_feedback,
    base_schedule,
    build_warmup_plan,
    plan_duration_seconds,
    rest_for_index,
    round_to_increment,
)

CABLE_STACK = EquipmentProfile(
    stack_steps=tuple(range(5, 105, 5)),
    stack_add_ons=(1.25, 2.5),
)


def _weights(steps):
    return [s.weight for s in steps]


class TestStrategies:
    def test_ramped(self):
        steps = build_warmup_plan(100)
        assert _weights(steps) == [40, 60, 80]
        assert [s.reps for s in steps] == [10, 8, 5]
        assert [s.rest_seconds for s in steps] == [60, 90, 120]
        assert [s.id for s in steps] == ["W1", "W2", "W3"]
        assert [s.percentage for s in steps] == pytest.approx([0.4, 0.6, 0.8])

    def test_quick(self):
        steps = build_warmup_plan(100, "quick")
        assert _weights(steps) == [50, 70]
        assert [s.reps for s in steps] == [8, 5]

    def test_power(self):
        steps = build_warmup_plan(100, "power")
        assert _weights(steps) == [40, 60, 80]
        assert [s.reps for s in steps] == [5, 3, 1]

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown warm-up strategy"):
            build_warmup_plan(100, "yolo")

    def test_unknown_strategy_rejected_with_muscle_groups(self):
        with pytest.raises(ValueError, match="Unknown warm-up strategy"):
            build_warmup_plan(100, "yolo", muscle_group_ids=["chest"])
        with pytest.raises(ValueError, match="Unknown warm-up strategy"):
            build_warmup_plan(100, "yolo", warmup_count=2)

    def test_top_weight_must_be_positive(self):
        with pytest.raises(ValueError):
            build_warmup_plan(0)


class TestFeedback:
    def test_not_enough(self):
        # 0.45, 0.6333, 0.8167 → 45, 63.33→62.5, 81.67→82.5
        assert _weights(build_warmup_plan(100, feedback="not_enough")) == [45, 62.5, 82.5]

    def test_too_much(self):
        # 0.35, 0.5667, 0.7833 → 35, 56.67→57.5, 78.33→77.5
        assert _weights(build_warmup_plan(100, feedback="too_much")) == [35, 57.5, 77.5]

    def test_excellent_is_neutral(self):
        assert _weights(build_warmup_plan(100, feedback="excellent")) == [40, 60, 80]

    def test_clamped_to_ceiling(self):
        assert apply_feedback([0.93], "not_enough") == [0.95]

    def test_clamped_to_floor(self):
        assert apply_feedback([0.4, 0.6], "too_much", floor=0.5) == pytest.approx([0.5, 0.575])

    def test_unknown_feedback(self):
        with pytest.raises(ValueError):
            apply_feedback([0.4], "meh")


class TestMinWeight:
    def test_floor_collapses_duplicate_steps(self):
        # fractions 0.65, 0.65, 0.8: the second 65 is not heavier and is dropped
        steps = build_warmup_plan(100, min_weight=65)
        assert _weights(steps) == [65, 80]
        assert [s.reps for s in steps] == [10, 5]
        assert [s.rest_seconds for s in steps] == [60, 90]

    def test_profile_steps_below_floor_dropped(self):
        profile = EquipmentProfile(bar_weight=20, per_side_plates=(10,))
        # 45 → per side 12.5 → 10 → 40 (below 45, dropped); 60 and 80 are exact
        steps = build_warmup_plan(100, min_weight=45, profile=profile)
        assert _weights(steps) == [60, 80]
        assert [s.reps for s in steps] == [8, 5]
        assert [s.id for s in steps] == ["W1", "W2"]


class TestMuscleWarmth:
    def test_cold_without_context(self):
        steps = build_warmup_plan(100, muscle_group_ids=["chest", "triceps"])
        assert _weights(steps) == [40, 60, 80]

    def test_primary_already_worked(self):
        ctx = WarmupContext(primary={"chest"})
        steps = build_warmup_plan(100, "quick", muscle_group_ids=["chest"], context=ctx)
        assert _weights(steps) == [70]
        assert [s.reps for s in steps] == [5]

    def test_secondary_already_worked(self):
        ctx = WarmupContext(secondary={"chest"})
        steps = build_warmup_plan(100, muscle_group_ids=["chest"], context=ctx)
        assert _weights(steps) == [55, 75]
        assert [s.reps for s in steps] == [8, 5]

    def test_explicit_count_wins(self):
        ctx = WarmupContext(primary={"chest"})
        steps = build_warmup_plan(100, muscle_group_ids=["chest"], context=ctx, warmup_count=2)
        assert _weights(steps) == [55, 75]

    def test_base_schedule_fractions(self):
        assert base_schedule(warmup_count=1) == [(0.7, 5)]


class TestProfileSnapping:
    def test_plates_snap_to_bar_and_plates(self):
        profile = EquipmentProfile(bar_weight=20, per_side_plates=(10, 5))
        # raw 26.8 / 40.2 / 53.6 → 20 / 40 / 50
        steps = build_warmup_plan(67, profile=profile)
        assert _weights(steps) == [20, 40, 50]
        assert steps[0].percentage == pytest.approx(20 / 67)

    def test_duplicate_bar_steps_dropped(self):
        profile = EquipmentProfile(bar_weight=20, per_side_plates=(10, 5, 2.5, 1.25))
        # raw 12 → 20, 18 → 20 (dropped), 24 → 22.5
        assert _weights(build_warmup_plan(30, profile=profile)) == [20, 22.5]

    def test_top_below_bar_gives_empty_plan(self):
        profile = EquipmentProfile(bar_weight=20, per_side_plates=(10, 5, 2.5, 1.25))
        assert build_warmup_plan(15, profile=profile) == []

    def test_lb_profile(self):
        profile = EquipmentProfile(unit="lb", bar_weight=45, per_side_plates=(45, 35, 25, 10, 5, 2.5))
        steps = build_warmup_plan(225, profile=profile, unit="lb")
        assert _weights(steps) == [90, 135, 180]

    def test_stack_profile(self):
        # raw 12 → 10+2.5, 18 → 15+2.5, 24 → 25
        steps = build_warmup_plan(30, profile=CABLE_STACK, load_type="stack")
        assert _weights(steps) == [12.5, 17.5, 25]

    def test_fixed_profile(self):
        profile = EquipmentProfile(dumbbell_set=(10, 15, 20, 25, 30))
        # raw 12 → 10, 18 → 20, 24 → 25
        assert _weights(build_warmup_plan(30, profile=profile, load_type="fixed")) == [10, 20, 25]

    def test_pass_through_load_type_rejected(self):
        with pytest.raises(ValueError, match="snapping"):
            build_warmup_plan(30, profile=CABLE_STACK, load_type="band")

    def test_steps_strictly_increase_and_stay_below_cap(self):
        profile = EquipmentProfile(bar_weight=20, per_side_plates=(20,))
        steps = build_warmup_plan(100, profile=profile)
        weights = _weights(steps)
        assert weights == sorted(set(weights))
        assert all(w <= 95 for w in weights)


class TestHelpers:
    def test_round_to_increment_half_up(self):
        assert round_to_increment(41.25, 2.5) == 42.5
        assert round_to_increment(41.2, 2.5) == 40

    def test_round_to_increment_floor(self):
        assert round_to_increment(10, 2.5, min_weight=20) == 20

    def test_rest_for_index(self):
        assert [rest_for_index(i) for i in range(5)] == [60, 90, 120, 60, 60]

    def test_plan_duration(self):
        # rests 60 + 90 + 120, plus 3 sets × 30 s
        assert plan_duration_seconds(build_warmup_plan(100)) == 360
        assert plan_duration_seconds([]) == 0
