"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics
and operation outcomes.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import BridgeError
from .operations.ide import CommandOutcome, LaunchOutcome, RuntimeLogOutcome


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, BridgeError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def exit_not_found(what: str) -> NoReturn:
    """Report an empty discovery result and exit with code 1."""

    typer.secho(f"{what}: not found", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def echo_launch_outcome(outcome: LaunchOutcome) -> None:
    typer.echo(f"App launched: {_yes_no(outcome.open_app)}")
    typer.echo(f"Project opened: {_yes_no(outcome.open_project)}")
    if outcome.message:
        typer.echo(f"Message: {outcome.message.strip()}")


def echo_command_outcome(outcome: CommandOutcome) -> None:
    """Print a compile-condition outcome; failures exit with code 1."""

    if not outcome.success:
        typer.secho(outcome.message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.echo(outcome.message.strip())


def echo_runtime_log(outcome: RuntimeLogOutcome, screenshot_target: str | None) -> None:
    typer.echo(f"Timestamp: {outcome.timestamp}")
    typer.echo(outcome.result)
    if outcome.screenshot is None:
        typer.echo("Screenshot: (not captured)")
    elif screenshot_target is not None:
        typer.echo(f"Screenshot: {screenshot_target}")
    else:
        typer.echo(f"Screenshot: {len(outcome.screenshot)} bytes (pass --screenshot-out to save)")
