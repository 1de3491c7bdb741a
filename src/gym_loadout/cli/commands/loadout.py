"""Loadout commands: resolve, profiles."""

import json
from typing import Annotated, Optional

import typer

from ...core.loadout import resolve as resolve_load
from ...core.profiles import load_profiles
from ...io.serializers import (
    ValidationError,
    equipment_profile_to_dict,
    resolve_result_to_dict,
    validate_load_type,
    validate_non_negative,
    validate_unit,
)
from .. import views
from ..app import JsonOption, UnitOption, app, load_profile_or_exit


@app.command()
def resolve(
    weight: Annotated[float, typer.Argument(help="Desired total weight")],
    profile_id: Annotated[
        str,
        typer.Option("--profile", "-P", help="Equipment profile ID (see 'profiles')"),
    ] = "olympic_kg",
    load_type: Annotated[
        Optional[str],
        typer.Option(
            "--load-type", "-l",
            help="dual_load | single_load | stack | fixed | bodyweight | band "
                 "(default: the profile's own load type)",
        ),
    ] = None,
    unit: UnitOption = "kg",
    json_out: JsonOption = False,
) -> None:
    """
    Snap a weight to the closest load the equipment can produce.

      gym-loadout resolve 102 --profile olympic_kg
      gym-loadout resolve 57 --profile cable_stack_kg --json
    """
    profile, default_load_type = load_profile_or_exit(profile_id)

    try:
        unit = validate_unit(unit)
        validate_non_negative(weight, "weight")
        lt = validate_load_type(load_type or default_load_type or "dual_load")
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    result = resolve_load(weight, unit, lt, profile)

    if json_out:
        print(json.dumps(resolve_result_to_dict(result), indent=2))
        return

    views.print_resolve_result(result, profile, lt)
    views.console.print(views.format_loadout(result, profile.unit))


@app.command()
def profiles(json_out: JsonOption = False) -> None:
    """
    List configured equipment profiles.

    Profiles come from the bundled equipment.yaml merged with
    ~/.gym-loadout/equipment.yaml.
    """
    configured = load_profiles()
    if not configured:
        views.print_warning("No equipment profiles configured.")
        raise typer.Exit(1)

    if json_out:
        print(json.dumps({
            pid: {**equipment_profile_to_dict(p), "loadType": lt}
            for pid, (p, lt) in configured.items()
        }, indent=2))
        return

    views.console.print(views.format_profiles_table(configured))
