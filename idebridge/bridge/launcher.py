"""Start the GUI application as a detached process."""

from __future__ import annotations

from pathlib import Path

from ..discovery.locator import InstallationLocator
from ..telemetry.logger import BridgeLogger, default_logger


class AppLauncher:
    """Launch an application located through the installation locator.

    When discovery fails, the raw application name is handed to the platform
    as the launch identifier (a bundle identifier or a `PATH` command name).
    "Launched" means the process start was requested, not that the
    application is ready.
    """

    def __init__(self, locator: InstallationLocator, logger: BridgeLogger | None = None) -> None:
        self._locator = locator
        self._logger = logger or default_logger()

    def launch(self, app_name: str, override_path: Path | str | None = None) -> bool:
        record = self._locator.locate(app_name, override_path)
        if record is None:
            self._logger.info("launch", "fallback_to_name", app=app_name)

        try:
            return self._locator.platform.launch(app_name, record)
        except OSError as exc:
            self._logger.failure("launch", type(exc).__name__, app=app_name)
            return False
