import json

import pytest
from typer.testing import CliRunner

from apps import stopwatch_cli
from fine_grained import config as config_mod

runner = CliRunner()


@pytest.fixture(autouse=True)
def _fast(monkeypatch):
    """Skip the stand-in work and re-read config for every test."""
    monkeypatch.setattr(stopwatch_cli.time, "sleep", lambda _s: None)
    config_mod._config_singleton = None  # type: ignore[attr-defined]
    yield
    config_mod._config_singleton = None  # type: ignore[attr-defined]


def test_no_args_prints_help():
    result = runner.invoke(stopwatch_cli.app, [])
    assert "repetitive" in result.output


def test_single():
    result = runner.invoke(stopwatch_cli.app, ["single", "--steps", "2", "--sleep-ms", "1"])
    assert result.exit_code == 0, result.output
    assert "Task: .." in result.output
    assert "Duration: " in result.output


def test_repetitive_lists_every_round():
    result = runner.invoke(stopwatch_cli.app, ["repetitive", "--rounds", "3", "--sleep-ms", "1"])
    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert [l.split(":")[0] for l in lines] == ["Round 0", "Round 1", "Round 2", "Total time"]


def test_repetitive_json_report():
    result = runner.invoke(stopwatch_cli.app, ["repetitive", "--rounds", "4", "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["number_of_laps"] == 4
    assert len(data["laps_ns"]) == 4
    assert data["running"] is False
    assert data["total_ns"] >= sum(data["laps_ns"])


def test_repetitive_rounds_from_env(monkeypatch):
    monkeypatch.setenv("FINE_GRAINED_DEMO_ROUNDS", "2")
    result = runner.invoke(stopwatch_cli.app, ["repetitive", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["number_of_laps"] == 2


def test_independent():
    result = runner.invoke(stopwatch_cli.app, ["independent", "--sleep-ms", "2"])
    assert result.exit_code == 0, result.output
    for label in ("Time to do foo:", "Time to do bar:", "Time to do foobar:", "Total time:"):
        assert label in result.output


def test_log_level_option_accepted():
    result = runner.invoke(stopwatch_cli.app, ["--log-level", "debug", "repetitive", "--rounds", "1", "--json"])
    assert result.exit_code == 0, result.output


def test_invalid_rounds_rejected():
    result = runner.invoke(stopwatch_cli.app, ["repetitive", "--rounds", "0"])
    assert result.exit_code != 0


def test_bad_env_setting_is_reported_as_config_error(monkeypatch):
    monkeypatch.setenv("FINE_GRAINED_DEMO_ROUNDS", "abc")
    result = runner.invoke(stopwatch_cli.app, ["repetitive"])
    assert result.exit_code != 0
    assert "--log-level" not in result.output
    assert "FINE_GRAINED_" in result.output
    assert "rounds" in result.output


def test_bad_env_log_level_is_not_blamed_on_option(monkeypatch):
    monkeypatch.setenv("FINE_GRAINED_LOG_LEVEL", "loud")
    result = runner.invoke(stopwatch_cli.app, ["repetitive", "--rounds", "1"])
    assert result.exit_code != 0
    assert "--log-level" not in result.output
    assert "log_level" in result.output


def test_log_level_option_error_names_the_option():
    result = runner.invoke(stopwatch_cli.app, ["--log-level", "loud", "repetitive", "--rounds", "1"])
    assert result.exit_code != 0
    assert "--log-level" in result.output
    assert "'loud'" in result.output
