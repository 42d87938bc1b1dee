"""Bridged IDE capabilities built on top of `IdeBridge`.

Responsibilities:
- Build the argument vectors for launch, preview, upload, compile-condition,
  and runtime-log operations.
- Interpret the captured CLI output into small result records.
- Own the temporary artifacts those operations ask the CLI to write.

Key types:
- `IdeOperations`: operation entry points for one bridged application.
- `LaunchOutcome`, `CommandOutcome`, `UploadOutcome`, `PreviewOutcome`,
  `RuntimeLogOutcome`: operation results.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
import time
from typing import Callable

from ..bridge.session import IdeBridge
from ..errors import BridgeError, CliExecutionError
from ..parsing import normalize_optional_string
from ..telemetry.logger import BridgeLogger
from .artifacts import encode_output_target, remove_artifact, temporary_file_path
from .compile_conditions import build_compile_condition


_QR_DATA_URI_PREFIX = "data:image/png;base64,"
_PREVIEW_SETTLE_SECONDS = 0.18


@dataclass(frozen=True, slots=True)
class LaunchOutcome:
    """Result of launching the IDE and optionally opening a project."""

    open_app: bool
    open_project: bool
    message: str


@dataclass(frozen=True, slots=True)
class CommandOutcome:
    """Result of a compile-condition command."""

    success: bool
    message: str


@dataclass(frozen=True, slots=True)
class UploadOutcome:
    """Result of an upload; `detail` carries the CLI's response text."""

    detail: str


@dataclass(frozen=True, slots=True)
class PreviewOutcome:
    """Preview QR code as base64-encoded PNG data."""

    qr_code_base64: str

    def png_bytes(self) -> bytes:
        return base64.b64decode(self.qr_code_base64)


@dataclass(frozen=True, slots=True)
class RuntimeLogOutcome:
    """Latest runtime console output and an optional PNG screenshot."""

    result: str
    timestamp: str
    screenshot: bytes | None = None


def _require(value: str | None, label: str) -> str:
    normalized = normalize_optional_string(value)
    if normalized is None:
        raise BridgeError(stage="arguments", detail=f"{label} is required.")
    return normalized


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class IdeOperations:
    """Operations exposed for the bridged IDE."""

    def __init__(
        self,
        bridge: IdeBridge,
        logger: BridgeLogger | None = None,
        home: Path | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._bridge = bridge
        self._logger = logger or bridge.logger
        self._home = home
        self._sleep = sleep

    @property
    def app_name(self) -> str:
        return self._bridge.app_name

    def check_installed(self) -> bool:
        return self._bridge.locate() is not None

    def launch_ide(
        self,
        project_path: str | None = None,
        install_path: str | None = None,
    ) -> LaunchOutcome:
        """Launch the IDE and open `project_path` in agent mode when given."""

        open_app = self._bridge.launch(install_path)
        project = normalize_optional_string(project_path)
        if project is None:
            return LaunchOutcome(open_app=open_app, open_project=False, message="")

        cli_path = self._bridge.resolve_cli()
        if cli_path is None:
            return LaunchOutcome(
                open_app=open_app,
                open_project=False,
                message=f"Could not find the command-line tool for {self.app_name}.",
            )

        try:
            result = self._bridge.run(cli_path, ["--open", project, "--agent"])
        except BridgeError as exc:
            return LaunchOutcome(
                open_app=open_app,
                open_project=False,
                message=f"Failed to open project: {exc}",
            )
        return LaunchOutcome(
            open_app=open_app,
            open_project=not result.stderr,
            message=result.stdout or result.stderr,
        )

    def preview(self, project_path: str) -> PreviewOutcome:
        """Generate a device-preview QR code for a project.

        The IDE typically needs 60-80 seconds to build the preview.
        """

        cli_path = self._bridge.require_cli()
        project = _require(project_path, "Project path")
        qr_path = self._artifact_path("preview-qrcode", "txt")
        try:
            try:
                result = self._bridge.run(
                    cli_path,
                    [
                        "--preview",
                        project,
                        "--preview-qr-output",
                        encode_output_target("base64", qr_path),
                    ],
                )
            except CliExecutionError as exc:
                raise BridgeError(
                    stage="preview",
                    detail=f"Failed to generate preview QR code: {exc}",
                    hint=f"Open the project in the {self.app_name} IDE to diagnose the issue.",
                ) from exc
            if result.stderr:
                self._logger.info("preview", "stderr", length=len(result.stderr))
                raise BridgeError(
                    stage="preview",
                    detail=f"Preview generation failed with the following message: {result.stderr}",
                    hint=f"Open the project in the {self.app_name} IDE to diagnose the issue.",
                )

            self._sleep(_PREVIEW_SETTLE_SECONDS)
            if not qr_path.exists():
                raise BridgeError(
                    stage="preview",
                    detail="Preview command ran, but the QR code file was not generated.",
                    hint="This is usually a build error in the project; check it in the IDE.",
                )

            content = qr_path.read_text(encoding="utf-8").strip()
            return PreviewOutcome(qr_code_base64=content.replace(_QR_DATA_URI_PREFIX, ""))
        finally:
            self._cleanup(qr_path)

    def upload(self, project_path: str, version: str, description: str) -> UploadOutcome:
        """Upload a new project version with a change description."""

        cli_path = self._bridge.require_cli()
        project = _require(project_path, "Project path")
        resolved_version = _require(version, "Version")
        resolved_description = _require(description, "Upload description")

        try:
            result = self._bridge.run(
                cli_path,
                ["-u", f"{resolved_version}@{project}", "--upload-desc", resolved_description],
            )
        except CliExecutionError as exc:
            return UploadOutcome(detail=str(exc))
        if result.stderr:
            self._logger.info("upload", "stderr", length=len(result.stderr))
        return UploadOutcome(detail=result.stdout or "upload fail")

    def set_compile_condition(
        self,
        project_path: str,
        condition_name: str,
        page_path: str,
        query: str | None = None,
        simulate_update: bool = False,
    ) -> CommandOutcome:
        """Set the startup page and page query used for the next compile."""

        cli_path = self._bridge.require_cli()
        project = _require(project_path, "Project path")
        name = _require(condition_name, "Condition name")
        page = _require(page_path, "Page path")
        condition = build_compile_condition(
            name, page, normalize_optional_string(query), simulate_update
        )

        self._logger.info("set-compile", "start", condition=condition)
        try:
            result = self._bridge.run(
                cli_path, ["--set-compile", project, "--compile-condition", condition]
            )
        except CliExecutionError as exc:
            return CommandOutcome(success=False, message=f"Failed to set compile condition: {exc}")
        return CommandOutcome(
            success=True,
            message=(
                f"Compile condition '{name}' has been set. "
                f"result: {result.stderr or result.stdout}"
            ),
        )

    def delete_compile_condition(self, project_path: str, condition_name: str) -> CommandOutcome:
        """Delete a named compile condition from a project."""

        cli_path = self._bridge.require_cli()
        project = _require(project_path, "Project path")
        name = _require(condition_name, "Condition name")

        self._logger.info("delete-compile", "start", condition=name)
        try:
            result = self._bridge.run(
                cli_path, ["--del-compile", project, "--condition-name", name]
            )
        except CliExecutionError as exc:
            return CommandOutcome(
                success=False, message=f"Failed to delete compile condition: {exc}"
            )
        return CommandOutcome(
            success=True,
            message=f"Delete compile condition '{name}' result: {result.stderr or result.stdout}",
        )

    def runtime_log(self, project_path: str) -> RuntimeLogOutcome:
        """Fetch the latest runtime console output and a screenshot of the project."""

        cli_path = self._bridge.require_cli()
        project = _require(project_path, "Project path")
        screenshot_path = self._artifact_path("screenshot", "png")
        try:
            try:
                result = self._bridge.run(
                    cli_path,
                    [
                        "--run-log",
                        project,
                        "--screenshot-output",
                        encode_output_target("png", screenshot_path),
                    ],
                )
            except CliExecutionError as exc:
                return RuntimeLogOutcome(
                    result=f"Failed to get runtime log: {exc}",
                    timestamp=_utc_timestamp(),
                )

            text = (
                result.stdout.strip()
                or result.stderr.strip()
                or "No runtime log available"
            )
            return RuntimeLogOutcome(
                result=text,
                timestamp=_utc_timestamp(),
                screenshot=self._read_screenshot(screenshot_path),
            )
        finally:
            self._cleanup(screenshot_path)

    def _artifact_path(self, prefix: str, extension: str) -> Path:
        path = temporary_file_path(
            self.app_name,
            prefix,
            extension,
            self._bridge.platform.family,
            home=self._home,
        )
        if path is None:
            raise BridgeError(
                stage="artifacts",
                detail="Could not determine a temporary artifact path for this operating system.",
                hint="Only macOS and Windows installations are supported.",
            )
        return path

    def _read_screenshot(self, path: Path) -> bytes | None:
        if not path.exists():
            self._logger.debug("run-log", "screenshot_missing", path=path)
            return None
        try:
            payload = path.read_bytes()
        except OSError as exc:
            self._logger.failure("run-log", type(exc).__name__, path=path)
            return None
        return payload or None

    def _cleanup(self, path: Path) -> None:
        try:
            if remove_artifact(path):
                self._logger.debug("artifacts", "removed", path=path)
        except OSError as exc:
            self._logger.failure("artifacts", type(exc).__name__, path=path)
