"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of loadouts and warm-up plans.
"""

from rich.console import Console
from rich.table import Table

from ..core.loadout import min_increment, minimum_load
from ..core.models import (
    PLATE_LOAD_TYPES,
    EquipmentProfile,
    ResolveResult,
    WarmupContext,
    WarmupStep,
)
from ..core.warmup import plan_duration_seconds
from ..io.session_file import ExerciseWarmup

console = Console()

_QUALITY_STYLE = {
    "exact": "[green]exact[/green]",
    "nearestUp": "[yellow]nearest ↑[/yellow]",
    "nearestDown": "[yellow]nearest ↓[/yellow]",
}

_WARMTH_STYLE = {
    "cold": "[cyan]cold[/cyan]",
    "secondary": "[yellow]secondary[/yellow]",
    "primary": "[red]primary[/red]",
}


def _fmt_weight(value: float) -> str:
    """Drop a trailing .0 so 20.0 shows as 20 and 1.25 stays 1.25."""
    return f"{value:g}"


def _fmt_plates(plates: list[float]) -> str:
    """Group identical plates: [25, 10, 2.5, 2.5] → '25 + 10 + 2×2.5'."""
    if not plates:
        return "—"
    parts: list[str] = []
    for w in dict.fromkeys(plates):
        n = plates.count(w)
        parts.append(f"{n}×{_fmt_weight(w)}" if n > 1 else _fmt_weight(w))
    return " + ".join(parts)


def format_loadout(result: ResolveResult, profile_unit: str) -> str:
    """One-line human description of a resolved load."""
    total = f"{_fmt_weight(result.total_system_weight)} {result.unit}"
    if result.machine_display is not None:
        pin = f"pin {_fmt_weight(result.machine_display)} {profile_unit}"
        if result.used_add_ons:
            pin += " + add-on " + ", ".join(_fmt_weight(a) for a in result.used_add_ons)
        return f"{total} ({pin})"
    if result.per_side_plates is not None:
        return f"{total} ({_fmt_plates(result.per_side_plates)} {profile_unit} per side)"
    return total


def print_resolve_result(result: ResolveResult, profile: EquipmentProfile, load_type: str) -> None:
    """Print a resolved loadout as a two-column table."""
    table = Table(title="Loadout", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Requested", f"{_fmt_weight(result.desired)} {result.unit}")
    table.add_row("Achievable", f"{_fmt_weight(result.total_system_weight)} {result.unit}")
    table.add_row("Match", _QUALITY_STYLE[result.match_quality])
    table.add_row("Load type", load_type)

    if load_type in PLATE_LOAD_TYPES:
        table.add_row("Bar", f"{_fmt_weight(profile.bar_weight)} {profile.unit}")
    if result.per_side_plates is not None:
        label = "Per side" if load_type == "dual_load" else "Plates"
        table.add_row(label, f"{_fmt_plates(result.per_side_plates)} {profile.unit}")
    if result.machine_display is not None:
        table.add_row("Stack pin", f"{_fmt_weight(result.machine_display)} {profile.unit}")
        add_ons = ", ".join(_fmt_weight(a) for a in result.used_add_ons or []) or "—"
        table.add_row("Add-ons", add_ons)

    console.print(table)


def format_warmup_table(steps: list[WarmupStep], unit: str, title: str = "Warm-up") -> Table:
    """
    Format warm-up steps as a Rich table.

    Args:
        steps: Planned warm-up steps
        unit: Unit of the step weights
        title: Table title

    Returns:
        Rich Table object
    """
    table = Table(title=title)
    table.add_column("Set", style="cyan")
    table.add_column("%", justify="right")
    table.add_column(f"Weight ({unit})", justify="right", style="bold")
    table.add_column("Reps", justify="right")
    table.add_column("Rest", justify="right")

    for step in steps:
        table.add_row(
            step.id,
            f"{step.percentage * 100:.0f}",
            _fmt_weight(step.weight),
            str(step.reps),
            f"{step.rest_seconds}s",
        )
    return table


def print_warmup_plan(steps: list[WarmupStep], unit: str, title: str = "Warm-up") -> None:
    """Print warm-up steps and the estimated duration."""
    if not steps:
        print_warning("No warm-up sets fit below the working weight.")
        return
    console.print(format_warmup_table(steps, unit, title))
    minutes, seconds = divmod(plan_duration_seconds(steps), 60)
    console.print(f"[dim]≈ {minutes}m {seconds:02d}s including rests[/dim]")


def print_session_plan(plans: list[ExerciseWarmup], unit: str, ctx: WarmupContext) -> None:
    """Print every exercise's warm-up in session order, then the final context."""
    for plan in plans:
        ex = plan.exercise
        tag = f" [magenta](superset {ex.superset})[/magenta]" if ex.superset else ""
        console.print()
        console.print(
            f"[bold]{ex.name}[/bold] — top set {_fmt_weight(ex.top_weight)} {unit}{tag}"
        )
        console.print(
            f"  {ex.muscles.primary}: {_WARMTH_STYLE[plan.warmth]} → "
            f"{plan.warmup_count} warm-up set(s)"
        )
        print_warmup_plan(plan.steps, unit, title=f"{ex.name} warm-up")

    console.print()
    console.print(f"[dim]Worked as primary:   {', '.join(sorted(ctx.primary)) or '—'}[/dim]")
    console.print(f"[dim]Worked as secondary: {', '.join(sorted(ctx.secondary)) or '—'}[/dim]")


def format_profiles_table(profiles: dict[str, tuple[EquipmentProfile, str | None]]) -> Table:
    """Format configured equipment profiles as a Rich table."""
    table = Table(title="Equipment profiles")
    table.add_column("ID", style="cyan")
    table.add_column("Load type")
    table.add_column("Unit")
    table.add_column("Minimum", justify="right")
    table.add_column("Increment", justify="right")

    for profile_id, (profile, load_type) in profiles.items():
        lt = load_type or "dual_load"
        inc = min_increment(lt, profile)
        table.add_row(
            profile_id,
            lt,
            profile.unit,
            _fmt_weight(minimum_load(lt, profile)),
            _fmt_weight(inc) if inc is not None else "—",
        )
    return table


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")
