"""Warm-up commands: warmup, session."""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.models import RESOLVED_LOAD_TYPES, WarmupContext
from ...core.warmup import build_warmup_plan
from ...io.serializers import (
    ValidationError,
    parse_muscle_list,
    validate_feedback,
    validate_non_negative,
    validate_positive,
    validate_strategy,
    validate_unit,
    warmup_context_to_dict,
    warmup_step_to_dict,
)
from ...io.session_file import load_session_file, run_session
from .. import views
from ..app import JsonOption, ProfileOption, UnitOption, app, load_profile_or_exit


@app.command()
def warmup(
    top_weight: Annotated[float, typer.Argument(help="Working (top set) weight")],
    strategy: Annotated[
        str,
        typer.Option("--strategy", "-s", help="ramped | quick | power"),
    ] = "ramped",
    feedback: Annotated[
        Optional[str],
        typer.Option("--feedback", "-f", help="Last warm-up felt: not_enough | excellent | too_much"),
    ] = None,
    increment: Annotated[
        float,
        typer.Option("--increment", "-i", help="Rounding increment when no profile is given"),
    ] = 2.5,
    min_weight: Annotated[
        float,
        typer.Option("--min-weight", help="Lightest weight a warm-up set may use"),
    ] = 0.0,
    muscles: Annotated[
        Optional[str],
        typer.Option(
            "--muscles", "-m",
            help="Primary muscle group first, then secondary ones: chest,triceps,shoulders",
        ),
    ] = None,
    warm_primary: Annotated[
        Optional[str],
        typer.Option("--warm-primary", help="Muscle groups already worked as prime mover"),
    ] = None,
    warm_secondary: Annotated[
        Optional[str],
        typer.Option("--warm-secondary", help="Muscle groups already worked as assisting mover"),
    ] = None,
    profile_id: ProfileOption = None,
    unit: UnitOption = "kg",
    json_out: JsonOption = False,
) -> None:
    """
    Plan warm-up sets for a working weight.

    With --muscles the set count follows what was already worked this
    session (--warm-primary / --warm-secondary) instead of --strategy:

      gym-loadout warmup 100 --muscles chest,triceps --warm-secondary chest
    """
    try:
        unit = validate_unit(unit)
        validate_positive(top_weight, "top_weight")
        validate_non_negative(min_weight, "min_weight")
        validate_positive(increment, "increment")
        strategy = validate_strategy(strategy)
        fb = validate_feedback(feedback)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    ctx = WarmupContext(
        primary=set(parse_muscle_list(warm_primary)),
        secondary=set(parse_muscle_list(warm_secondary)) - set(parse_muscle_list(warm_primary)),
    )
    muscle_ids = parse_muscle_list(muscles)

    profile = None
    load_type = "dual_load"
    if profile_id is not None:
        profile, default_load_type = load_profile_or_exit(profile_id)
        load_type = default_load_type or "dual_load"
        if load_type not in RESOLVED_LOAD_TYPES:
            profile = None

    steps = build_warmup_plan(
        top_weight,
        strategy,
        increment,
        min_weight,
        fb,
        muscle_ids,
        profile,
        context=ctx,
        unit=unit,
        load_type=load_type,
    )

    if json_out:
        print(json.dumps({
            "topWeight": top_weight,
            "unit": unit,
            "steps": [warmup_step_to_dict(s) for s in steps],
        }, indent=2))
        return

    views.print_warmup_plan(steps, unit)


@app.command()
def session(
    session_file: Annotated[Path, typer.Argument(help="YAML session file")],
    json_out: JsonOption = False,
) -> None:
    """
    Plan warm-ups for a whole workout, tracking which muscles are already warm.

    Exercises sharing a 'superset' tag get one common warm-up count.
    """
    try:
        parsed = load_session_file(session_file)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    ctx = WarmupContext()
    try:
        plans = run_session(parsed, ctx)
    except (ValidationError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps({
            "unit": parsed.unit,
            "exercises": [
                {
                    "name": p.exercise.name,
                    "topWeight": p.exercise.top_weight,
                    "warmth": p.warmth,
                    "warmupCount": p.warmup_count,
                    "steps": [warmup_step_to_dict(s) for s in p.steps],
                }
                for p in plans
            ],
            "context": warmup_context_to_dict(ctx),
        }, indent=2))
        return

    views.print_session_plan(plans, parsed.unit, ctx)
