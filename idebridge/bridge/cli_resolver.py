"""Resolve the companion command-line tool of a located application."""

from __future__ import annotations

from pathlib import Path

from ..discovery.locator import InstallationLocator
from ..telemetry.logger import BridgeLogger, default_logger


class CliResolver:
    """Derive the CLI entry point from the cached or default installation record.

    The resolver never passes an override path to the locator: it works from
    the cache or from a fresh probe of the default locations.
    """

    def __init__(self, locator: InstallationLocator, logger: BridgeLogger | None = None) -> None:
        self._locator = locator
        self._logger = logger or default_logger()

    def resolve(self, app_name: str) -> Path | None:
        """Return the CLI path for `app_name`, or `None` when it cannot be found."""

        record = self._locator.locate(app_name)
        if record is None:
            return None

        try:
            cli_path = self._locator.platform.resolve_cli(record)
        except OSError as exc:
            self._logger.failure("resolve-cli", type(exc).__name__, record=record)
            return None

        if cli_path is None:
            self._logger.info("resolve-cli", "not_found", record=record)
            return None
        self._logger.debug("resolve-cli", "resolved", path=cli_path)
        return cli_path
