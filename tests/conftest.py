"""Shared fixtures."""

import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point HOME at an empty directory so ~/.gym-loadout overrides never leak in."""
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path
