"""
Smoke tests for the gym-loadout CLI.

Tests basic functionality:
- App runs and shows help
- Weights resolve against bundled profiles
- Warm-ups are planned with and without equipment
- A session file is planned end to end
"""

import json

from typer.testing import CliRunner

from gym_loadout.cli.main import app


runner = CliRunner()

SESSION_YAML = """
exercises:
  - name: Bench press
    top_weight: 100
    primary: chest
    secondary: [triceps]
  - name: Close-grip bench
    top_weight: 80
    primary: triceps
"""


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "resolve" in result.output
        assert "warmup" in result.output

    def test_resolve_json(self):
        result = runner.invoke(app, ["resolve", "102", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["totalSystemWeight"] == 102
        assert data["matchQuality"] == "exact"
        assert data["perSidePlates"] == [25, 15, 0.5, 0.5]

    def test_resolve_stack_profile(self):
        result = runner.invoke(app, ["resolve", "57", "--profile", "cable_stack_kg", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["totalSystemWeight"] == 57.5
        assert data["machineDisplay"] == 55
        assert data["usedAddOns"] == [2.5]

    def test_resolve_table(self):
        result = runner.invoke(app, ["resolve", "100"])
        assert result.exit_code == 0
        assert "Loadout" in result.output

    def test_resolve_unknown_profile(self):
        result = runner.invoke(app, ["resolve", "100", "--profile", "nope"])
        assert result.exit_code == 1

    def test_resolve_invalid_unit(self):
        result = runner.invoke(app, ["resolve", "100", "--unit", "stone"])
        assert result.exit_code == 1

    def test_profiles_json(self):
        result = runner.invoke(app, ["profiles", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["olympic_kg"]["loadType"] == "dual_load"
        assert data["olympic_kg"]["barWeight"] == 20

    def test_profiles_table(self):
        result = runner.invoke(app, ["profiles"])
        assert result.exit_code == 0
        assert "olympic_kg" in result.output


class TestWarmupCommand:
    def _weights(self, args):
        result = runner.invoke(app, ["warmup", *args, "--json"])
        assert result.exit_code == 0
        return [s["weight"] for s in json.loads(result.output)["steps"]]

    def test_default_strategy(self):
        assert self._weights(["100"]) == [40, 60, 80]

    def test_warm_primary_muscle(self):
        assert self._weights(["100", "--muscles", "chest,triceps", "--warm-primary", "chest"]) == [70]

    def test_barbell_profile(self):
        assert self._weights(["100", "--profile", "olympic_kg"]) == [40, 60, 80]

    def test_stack_profile(self):
        assert self._weights(["30", "--profile", "cable_stack_kg"]) == [12.5, 17.5, 25]

    def test_invalid_feedback(self):
        result = runner.invoke(app, ["warmup", "100", "--feedback", "meh"])
        assert result.exit_code == 1

    def test_table_output(self):
        result = runner.invoke(app, ["warmup", "100"])
        assert result.exit_code == 0
        assert "W1" in result.output


class TestSessionCommand:
    def test_session_json(self, tmp_path):
        path = tmp_path / "session.yaml"
        path.write_text(SESSION_YAML)
        result = runner.invoke(app, ["session", str(path), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        bench, close_grip = data["exercises"]
        assert bench["warmupCount"] == 3
        assert close_grip["warmth"] == "secondary"
        # 55 / 75 % of 80
        assert [s["weight"] for s in close_grip["steps"]] == [45, 60]
        assert data["context"] == {"primary": ["chest", "triceps"], "secondary": []}

    def test_session_table(self, tmp_path):
        path = tmp_path / "session.yaml"
        path.write_text(SESSION_YAML)
        result = runner.invoke(app, ["session", str(path)])
        assert result.exit_code == 0
        assert "Bench press" in result.output

    def test_session_missing_file(self, tmp_path):
        result = runner.invoke(app, ["session", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 1
