"""
YAML → EquipmentProfile loader.

Loads named equipment profiles from equipment.yaml (bundled with the
package) and optionally merges user overrides from
~/.gym-loadout/equipment.yaml.

Usage:
    from gym_loadout.core.profiles import get_profile
    barbell = get_profile("olympic_kg")

A user entry is deep-merged over the bundled entry with the same id, so only
changed keys need to be listed; an id with no bundled counterpart is a new
profile.  Entries that fail validation are skipped with a warning.
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from .models import LOAD_TYPES, EquipmentProfile

_WEIGHT_LISTS: tuple[str, ...] = (
    "per_side_plates",
    "micro_plates",
    "stack_steps",
    "stack_add_ons",
    "fixed_bars",
    "dumbbell_set",
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; warn and return {} if it cannot be parsed."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"gym-loadout: ignoring {path} ({exc})", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def get_bundled_yaml_path() -> Path:
    """Return the path to the bundled equipment.yaml."""
    # profiles.py lives at src/gym_loadout/core/profiles.py
    return Path(__file__).parent.parent / "equipment.yaml"


def get_user_yaml_path() -> Path | None:
    """Return ~/.gym-loadout/equipment.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".gym-loadout" / "equipment.yaml"
    return p if p.exists() else None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def profile_from_dict(d: dict) -> tuple[EquipmentProfile, str | None]:
    """
    Convert a raw profile entry to (EquipmentProfile, default load type).

    Missing weight lists default to empty.  ``load_type`` is optional and
    records how the equipment is normally loaded.

    Raises:
        ValueError: If a field has the wrong shape or an invalid value
    """
    if not isinstance(d, dict):
        raise ValueError(f"profile entry must be a mapping, got {type(d).__name__}")

    load_type = d.get("load_type")
    if load_type is not None and load_type not in LOAD_TYPES:
        raise ValueError(f"unknown load_type {load_type!r}")

    lists: dict[str, tuple[float, ...]] = {}
    for name in _WEIGHT_LISTS:
        raw = d.get(name) or []
        if not isinstance(raw, list):
            raise ValueError(f"{name} must be a list of weights")
        try:
            lists[name] = tuple(float(w) for w in raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{name} contains a non-numeric weight") from exc

    try:
        bar_weight = float(d.get("bar_weight", 0.0))
    except (TypeError, ValueError) as exc:
        raise ValueError("bar_weight must be a number") from exc

    profile = EquipmentProfile(unit=d.get("unit", "kg"), bar_weight=bar_weight, **lists)
    return profile, load_type


def load_profile_config() -> dict[str, dict]:
    """
    Load and merge raw profile entries from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/gym_loadout/equipment.yaml
    2. User override at ~/.gym-loadout/equipment.yaml

    Returns:
        {profile_id: raw entry}.  Empty dict if no YAML available.
    """
    profiles: dict[str, Any] = {}

    sources = [get_bundled_yaml_path(), get_user_yaml_path()]
    for path in sources:
        if path is None or not path.exists():
            continue
        section = _load_yaml_file(path).get("profiles") or {}
        if not isinstance(section, dict):
            warnings.warn(
                f"gym-loadout: ignoring profiles in {path} (expected a mapping of profile IDs)",
                stacklevel=2,
            )
            continue
        profiles = _deep_merge(profiles, section)

    return profiles


def load_profiles() -> dict[str, tuple[EquipmentProfile, str | None]]:
    """Return {profile_id: (EquipmentProfile, default load type)} for every valid entry."""
    result: dict[str, tuple[EquipmentProfile, str | None]] = {}
    for profile_id, raw in load_profile_config().items():
        try:
            result[str(profile_id)] = profile_from_dict(raw)
        except ValueError as exc:
            warnings.warn(
                f"gym-loadout: skipping profile '{profile_id}': {exc}",
                stacklevel=2,
            )
    return result


def get_profile(profile_id: str) -> tuple[EquipmentProfile, str | None]:
    """
    Return (EquipmentProfile, default load type) for a configured profile.

    Raises:
        ValueError: If profile_id is not configured
    """
    profiles = load_profiles()
    if profile_id not in profiles:
        valid = ", ".join(profiles) or "none"
        raise ValueError(f"Unknown profile '{profile_id}'. Valid IDs: {valid}")
    return profiles[profile_id]
