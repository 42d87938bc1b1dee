"""Integration tests for the Typer command surface with a stubbed bridge."""

from __future__ import annotations

import base64
from pathlib import Path

from pytest import MonkeyPatch
from typer.testing import CliRunner

from idebridge.cli import app
from idebridge.operations.ide import (
    CommandOutcome,
    LaunchOutcome,
    PreviewOutcome,
    RuntimeLogOutcome,
    UploadOutcome,
)

_PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


def test_locate_prints_record_and_forwards_install_path(
    monkeypatch: MonkeyPatch, tmp_path: Path
) -> None:
    """Locate should print the record and pass `--install-path` as an override hint."""

    seen: dict[str, object] = {}

    def _fake_locate(self, override_path=None):
        seen["app_name"] = self.app_name
        seen["override"] = override_path
        return tmp_path / "Tool.app"

    monkeypatch.setattr("idebridge.cli.IdeBridge.locate", _fake_locate)
    runner = CliRunner()

    result = runner.invoke(
        app, ["locate", "--app-name", "Tool", "--install-path", str(tmp_path)]
    )

    assert result.exit_code == 0
    assert str(tmp_path / "Tool.app") in result.output
    assert seen == {"app_name": "Tool", "override": tmp_path}


def test_locate_reports_not_found(monkeypatch: MonkeyPatch) -> None:
    """Locate should exit with code 1 when discovery yields nothing."""

    monkeypatch.setattr("idebridge.cli.IdeBridge.locate", lambda self, override_path=None: None)
    runner = CliRunner()

    result = runner.invoke(app, ["locate", "--app-name", "Missing IDE"])

    assert result.exit_code == 1
    assert "Missing IDE: not found" in result.output


def test_cli_path_reports_not_found(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr("idebridge.cli.IdeBridge.resolve_cli", lambda self: None)
    runner = CliRunner()

    result = runner.invoke(app, ["cli-path"])

    assert result.exit_code == 1
    assert "TCSAS-Devtools command-line tool: not found" in result.output


def test_app_name_falls_back_to_environment(monkeypatch: MonkeyPatch) -> None:
    """The application name can come from `IDEBRIDGE_APP_NAME`."""

    monkeypatch.setenv("IDEBRIDGE_APP_NAME", "Env IDE")
    monkeypatch.setattr("idebridge.cli.IdeBridge.locate", lambda self, override_path=None: True)
    runner = CliRunner()

    result = runner.invoke(app, ["check"])

    assert result.exit_code == 0
    assert "Env IDE installed: yes" in result.output


def test_launch_prints_outcome(monkeypatch: MonkeyPatch) -> None:
    """Launch should forward the project and report both launch flags."""

    seen: dict[str, object] = {}

    def _fake_launch(self, project_path=None, install_path=None):
        seen["project"] = project_path
        return LaunchOutcome(open_app=True, open_project=True, message="opened\n")

    monkeypatch.setattr("idebridge.cli.IdeOperations.launch_ide", _fake_launch)
    runner = CliRunner()

    result = runner.invoke(app, ["launch", "/work/demo"])

    assert result.exit_code == 0
    assert seen == {"project": "/work/demo"}
    assert "App launched: yes" in result.output
    assert "Project opened: yes" in result.output
    assert "Message: opened" in result.output


def test_preview_writes_qr_png(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """Preview should decode the QR payload into the requested PNG file."""

    encoded = base64.b64encode(_PNG_BYTES).decode("ascii")
    monkeypatch.setattr(
        "idebridge.cli.IdeOperations.preview",
        lambda self, project_path: PreviewOutcome(qr_code_base64=encoded),
    )
    target = tmp_path / "out" / "qr.png"
    runner = CliRunner()

    result = runner.invoke(app, ["preview", "/work/demo", "--qr-out", str(target)])

    assert result.exit_code == 0
    assert target.read_bytes() == _PNG_BYTES
    assert f"QR code: {target}" in result.output


def test_preview_without_cli_reports_stage_error() -> None:
    """A missing CLI should surface as a stage-aware diagnostic with a hint."""

    runner = CliRunner()

    result = runner.invoke(app, ["preview", "/work/demo", "--app-name", "Surely Missing IDE 42"])

    assert result.exit_code == 1
    assert "preview failed at stage `resolve-cli`" in result.output
    assert "Hint:" in result.output


def test_upload_prints_cli_detail(monkeypatch: MonkeyPatch) -> None:
    seen: list[tuple[str, str, str]] = []

    def _fake_upload(self, project_path, version, description):
        seen.append((project_path, version, description))
        return UploadOutcome(detail="upload success\n")

    monkeypatch.setattr("idebridge.cli.IdeOperations.upload", _fake_upload)
    runner = CliRunner()

    result = runner.invoke(
        app, ["upload", "/work/demo", "--version", "1.0.1", "--desc", "first release"]
    )

    assert result.exit_code == 0
    assert seen == [("/work/demo", "1.0.1", "first release")]
    assert "upload success" in result.output


def test_set_compile_failure_exits_with_error(monkeypatch: MonkeyPatch) -> None:
    """Unsuccessful compile-condition outcomes exit with code 1."""

    seen: list[tuple[object, ...]] = []

    def _fake_set(self, project_path, condition_name, page_path, query=None, simulate_update=False):
        seen.append((project_path, condition_name, page_path, query, simulate_update))
        return CommandOutcome(success=False, message="Failed to set compile condition: boom")

    monkeypatch.setattr("idebridge.cli.IdeOperations.set_compile_condition", _fake_set)
    runner = CliRunner()

    result = runner.invoke(
        app,
        [
            "set-compile",
            "/work/demo",
            "--name",
            "home",
            "--page",
            "pages/index",
            "--query",
            "a=1",
            "--simulate-update",
        ],
    )

    assert result.exit_code == 1
    assert seen == [("/work/demo", "home", "pages/index", "a=1", True)]
    assert "Failed to set compile condition: boom" in result.output


def test_delete_compile_prints_message(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr(
        "idebridge.cli.IdeOperations.delete_compile_condition",
        lambda self, project_path, condition_name: CommandOutcome(
            success=True, message=f"Delete compile condition '{condition_name}' result: ok"
        ),
    )
    runner = CliRunner()

    result = runner.invoke(app, ["delete-compile", "/work/demo", "--name", "home"])

    assert result.exit_code == 0
    assert "Delete compile condition 'home' result: ok" in result.output


def test_run_log_saves_screenshot(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """Run-log prints console output and writes the screenshot when requested."""

    monkeypatch.setattr(
        "idebridge.cli.IdeOperations.runtime_log",
        lambda self, project_path: RuntimeLogOutcome(
            result="console: ready",
            timestamp="2026-01-01T00:00:00+00:00",
            screenshot=_PNG_BYTES,
        ),
    )
    target = tmp_path / "shot.png"
    runner = CliRunner()

    result = runner.invoke(app, ["run-log", "/work/demo", "--screenshot-out", str(target)])

    assert result.exit_code == 0
    assert "console: ready" in result.output
    assert f"Screenshot: {target}" in result.output
    assert target.read_bytes() == _PNG_BYTES


def test_configured_log_level_applies_to_operation_commands(monkeypatch: MonkeyPatch) -> None:
    """`IDEBRIDGE_LOG_LEVEL=ERROR` suppresses warning and info discovery events."""

    monkeypatch.setattr("idebridge.platforms._platform.system", lambda: "Linux")
    runner = CliRunner()

    default_result = runner.invoke(app, ["check", "--app-name", "Quiet IDE"])
    monkeypatch.setenv("IDEBRIDGE_LOG_LEVEL", "ERROR")
    quiet_result = runner.invoke(app, ["check", "--app-name", "Quiet IDE"])

    assert default_result.exit_code == 0
    assert "event=unsupported_platform" in default_result.output
    assert quiet_result.exit_code == 0
    assert "Quiet IDE installed: no" in quiet_result.output
    assert "level=WARNING" not in quiet_result.output
    assert "level=INFO" not in quiet_result.output
