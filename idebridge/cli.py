"""Command-line interface for idebridge.

Responsibilities:
- Expose discovery, launch, and bridged CLI operations as Typer commands.
- Resolve effective `BridgeConfig` from `--config`, environment, and options.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .bridge.session import IdeBridge
from .cli_rendering import (
    echo_command_outcome,
    echo_launch_outcome,
    echo_runtime_log,
    exit_not_found,
    exit_with_command_error,
)
from .config import BridgeConfig, ConfigLoader
from .errors import BridgeError
from .operations.ide import IdeOperations

app = typer.Typer(
    name="idebridge",
    no_args_is_help=True,
    help="Locate a desktop IDE and drive its command-line tool.",
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Optional YAML config file."),
]
AppNameOption = Annotated[
    str | None,
    typer.Option("--app-name", help="Application name used for discovery."),
]
InstallPathOption = Annotated[
    Path | None,
    typer.Option("--install-path", help="Directory hint checked before platform probing."),
]
ProjectArgument = Annotated[str, typer.Argument(help="Path to the project directory.")]


def _resolve_config(
    config_file: Path | None,
    app_name: str | None,
    install_path: Path | None = None,
) -> BridgeConfig:
    """Resolve effective config and map loader failures to stage errors."""

    try:
        return ConfigLoader.resolve(
            config_file=config_file,
            app_name=app_name,
            install_path=install_path,
        )
    except FileNotFoundError as exc:
        raise BridgeError(
            stage="config",
            detail=f"Config file not found: `{config_file}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise BridgeError(
            stage="config",
            detail=f"Invalid configuration: {exc}",
            hint="Fix config values or `IDEBRIDGE_*` environment variables and rerun.",
        ) from exc
    except Exception as exc:
        raise BridgeError(
            stage="config",
            detail=f"Failed to load config file `{config_file}`: {exc}",
            hint="Verify YAML syntax and file permissions.",
        ) from exc


def _build_bridge(
    config_file: Path | None,
    app_name: str | None,
    install_path: Path | None = None,
) -> tuple[BridgeConfig, IdeBridge]:
    config = _resolve_config(config_file, app_name, install_path)
    return config, IdeBridge.from_config(config)


def _build_operations(config_file: Path | None, app_name: str | None) -> IdeOperations:
    _, bridge = _build_bridge(config_file, app_name)
    return IdeOperations(bridge)


@app.command("locate")
def locate_command(
    config_file: ConfigOption = None,
    app_name: AppNameOption = None,
    install_path: InstallPathOption = None,
) -> None:
    """Print the installation record of the application."""

    try:
        config, bridge = _build_bridge(config_file, app_name, install_path)
        record = bridge.locate(config.install_path)
    except Exception as exc:
        exit_with_command_error("locate", exc)

    if record is None:
        exit_not_found(config.app_name)
    typer.echo(str(record))


@app.command("check")
def check_command(
    config_file: ConfigOption = None,
    app_name: AppNameOption = None,
) -> None:
    """Report whether the application is installed."""

    try:
        operations = _build_operations(config_file, app_name)
        installed = operations.check_installed()
    except Exception as exc:
        exit_with_command_error("check", exc)

    typer.echo(f"{operations.app_name} installed: {'yes' if installed else 'no'}")


@app.command("cli-path")
def cli_path_command(
    config_file: ConfigOption = None,
    app_name: AppNameOption = None,
) -> None:
    """Print the path of the application's command-line tool."""

    try:
        config, bridge = _build_bridge(config_file, app_name)
        cli_path = bridge.resolve_cli()
    except Exception as exc:
        exit_with_command_error("cli-path", exc)

    if cli_path is None:
        exit_not_found(f"{config.app_name} command-line tool")
    typer.echo(str(cli_path))


@app.command("launch")
def launch_command(
    project: Annotated[
        str | None,
        typer.Argument(help="Optional project directory to open in agent mode."),
    ] = None,
    config_file: ConfigOption = None,
    app_name: AppNameOption = None,
    install_path: InstallPathOption = None,
) -> None:
    """Launch the IDE and optionally open a project."""

    try:
        config, bridge = _build_bridge(config_file, app_name, install_path)
        hint = str(config.install_path) if config.install_path is not None else None
        outcome = IdeOperations(bridge).launch_ide(project, hint)
    except Exception as exc:
        exit_with_command_error("launch", exc)

    echo_launch_outcome(outcome)


@app.command("preview")
def preview_command(
    project: ProjectArgument,
    qr_out: Annotated[
        Path | None,
        typer.Option("--qr-out", help="Write the preview QR code to this PNG file."),
    ] = None,
    config_file: ConfigOption = None,
    app_name: AppNameOption = None,
) -> None:
    """Build a device preview and print or save its QR code."""

    try:
        operations = _build_operations(config_file, app_name)
        outcome = operations.preview(project)
        if qr_out is not None:
            qr_out.parent.mkdir(parents=True, exist_ok=True)
            qr_out.write_bytes(outcome.png_bytes())
    except Exception as exc:
        exit_with_command_error("preview", exc)

    if qr_out is not None:
        typer.echo(f"QR code: {qr_out}")
    else:
        typer.echo(outcome.qr_code_base64)


@app.command("upload")
def upload_command(
    project: ProjectArgument,
    version: Annotated[str, typer.Option("--version", help="Version to upload.")],
    description: Annotated[
        str, typer.Option("--desc", help="Description of the uploaded version.")
    ],
    config_file: ConfigOption = None,
    app_name: AppNameOption = None,
) -> None:
    """Upload a new project version."""

    try:
        outcome = _build_operations(config_file, app_name).upload(project, version, description)
    except Exception as exc:
        exit_with_command_error("upload", exc)

    typer.echo(outcome.detail.strip())


@app.command("set-compile")
def set_compile_command(
    project: ProjectArgument,
    name: Annotated[str, typer.Option("--name", help="Compile condition name.")],
    page: Annotated[str, typer.Option("--page", help="Startup page path.")],
    query: Annotated[
        str | None, typer.Option("--query", help="Startup page query string.")
    ] = None,
    simulate_update: Annotated[
        bool,
        typer.Option("--simulate-update", help="Simulate an update on the next start."),
    ] = False,
    config_file: ConfigOption = None,
    app_name: AppNameOption = None,
) -> None:
    """Set the compile condition used for the next build."""

    try:
        outcome = _build_operations(config_file, app_name).set_compile_condition(
            project, name, page, query, simulate_update
        )
    except Exception as exc:
        exit_with_command_error("set-compile", exc)

    echo_command_outcome(outcome)


@app.command("delete-compile")
def delete_compile_command(
    project: ProjectArgument,
    name: Annotated[str, typer.Option("--name", help="Compile condition name.")],
    config_file: ConfigOption = None,
    app_name: AppNameOption = None,
) -> None:
    """Delete a named compile condition."""

    try:
        outcome = _build_operations(config_file, app_name).delete_compile_condition(
            project, name
        )
    except Exception as exc:
        exit_with_command_error("delete-compile", exc)

    echo_command_outcome(outcome)


@app.command("run-log")
def run_log_command(
    project: ProjectArgument,
    screenshot_out: Annotated[
        Path | None,
        typer.Option("--screenshot-out", help="Write the captured screenshot to this file."),
    ] = None,
    config_file: ConfigOption = None,
    app_name: AppNameOption = None,
) -> None:
    """Print the latest runtime console output of a project."""

    try:
        outcome = _build_operations(config_file, app_name).runtime_log(project)
        if screenshot_out is not None and outcome.screenshot is not None:
            screenshot_out.parent.mkdir(parents=True, exist_ok=True)
            screenshot_out.write_bytes(outcome.screenshot)
    except Exception as exc:
        exit_with_command_error("run-log", exc)

    target = str(screenshot_out) if screenshot_out is not None else None
    echo_runtime_log(outcome, target)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
