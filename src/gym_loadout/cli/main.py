"""
CLI entry point using Typer.

Provides commands for load resolution and warm-up planning:
- resolve: Snap a weight to the equipment
- profiles: List configured equipment profiles
- warmup: Plan warm-up sets for one working weight
- session: Plan warm-ups for a whole workout from a YAML file
"""

from .app import app
from .commands import loadout, warmup  # noqa: F401  (registers commands)


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    main()
