"""Shared Typer app object and shared option types."""

from typing import Annotated, Optional

import typer

from ..core.models import EquipmentProfile
from ..core.profiles import get_profile
from . import views

# Shared --unit option type used across all commands
UnitOption = Annotated[
    str,
    typer.Option("--unit", "-u", help="Weight unit you work in: kg (default) or lb"),
]

# Shared --profile option type used across all commands
ProfileOption = Annotated[
    Optional[str],
    typer.Option("--profile", "-P", help="Equipment profile ID (see 'profiles')"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="gym-loadout",
    help="Snap training weights to real equipment and plan warm-up sets.",
    no_args_is_help=True,
)


def load_profile_or_exit(profile_id: str) -> tuple[EquipmentProfile, str | None]:
    """Look up a configured profile, printing an error and exiting if unknown."""
    try:
        return get_profile(profile_id)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
