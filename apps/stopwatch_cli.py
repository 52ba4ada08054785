from __future__ import annotations

import json
import time
from typing import Optional

import typer
from pydantic import ValidationError

from fine_grained.clock import ms_to_s
from fine_grained.config import AppConfig, get_config
from fine_grained.log import setup_logging
from fine_grained.report import report_dump
from fine_grained.stopwatch import Stopwatch

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _work(label: str, steps: int, step_ms: int) -> None:
    """Stand-in for the task being timed: sleeps ``steps`` times, printing progress."""
    typer.echo(f"{label}: ", nl=False)
    for _ in range(steps):
        time.sleep(ms_to_s(step_ms))
        typer.echo(".", nl=False)
    typer.echo()


def _emit(sw: Stopwatch, as_json: bool) -> None:
    report = sw.report()
    if as_json:
        typer.echo(json.dumps(report_dump(report)))
        return
    for line in report.lines():
        typer.echo(line)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override FINE_GRAINED_LOG_LEVEL"),
) -> None:
    """Time sleeping stand-in tasks with a lap stopwatch."""
    try:
        cfg = get_config()
    except ValidationError as exc:
        raise typer.BadParameter(f"invalid FINE_GRAINED_* environment setting:\n{exc}") from exc
    level = cfg.log_level
    if log_level:
        try:
            level = AppConfig(log_level=log_level).log_level
        except ValidationError as exc:
            raise typer.BadParameter(f"unknown log level: {log_level!r}", param_hint="--log-level") from exc
    setup_logging(level)


@app.command()
def single(
    steps: int = typer.Option(6, min=1, help="Number of sleep steps in the task"),
    sleep_ms: Optional[int] = typer.Option(None, "--sleep-ms", min=1, help="Duration of each step"),
) -> None:
    """Time one long task, reading the stopwatch while it still runs."""
    step_ms = sleep_ms or get_config().demo.sleep_ms
    sw = Stopwatch.start_new()
    _work("Task", steps, step_ms)
    typer.echo(f"Duration: {sw}ns")
    sw.stop()


@app.command()
def repetitive(
    rounds: Optional[int] = typer.Option(None, min=1, help="Number of rounds to lap"),
    sleep_ms: Optional[int] = typer.Option(None, "--sleep-ms", min=1, help="Duration of each round"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
) -> None:
    """Lap once per round of a repeated task, then print every round and the total."""
    cfg = get_config().demo
    rounds = rounds or cfg.rounds
    step_ms = sleep_ms or cfg.sleep_ms

    sw = Stopwatch.start_new()
    for _ in range(rounds):
        time.sleep(ms_to_s(step_ms))
        sw.lap()
    sw.stop()
    _emit(sw, as_json)


@app.command()
def independent(
    sleep_ms: Optional[int] = typer.Option(None, "--sleep-ms", min=1, help="Base duration of a task step"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
) -> None:
    """Time three unrelated tasks with one lap each."""
    step_ms = sleep_ms or get_config().demo.sleep_ms
    sw = Stopwatch.start_new()

    _work("   Foo", 3, step_ms)
    foo = sw.lap()
    _work("   Bar", 5, step_ms // 2 or 1)
    bar = sw.lap()
    _work("Foobar", 2, step_ms * 2)
    foobar = sw.lap()
    sw.stop()

    if as_json:
        _emit(sw, as_json)
        return
    typer.echo(f"   Time to do foo: {foo}ns")
    typer.echo(f"   Time to do bar: {bar}ns")
    typer.echo(f"Time to do foobar: {foobar}ns")
    typer.echo(f"       Total time: {sw}ns")


if __name__ == "__main__":
    app()
