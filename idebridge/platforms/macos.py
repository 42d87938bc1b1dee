"""macOS discovery, CLI resolution, and launch support.

Probe order:
1. Scan `/Applications` and `~/Applications` for `.app` bundles whose name
   matches the target.
2. Query Spotlight (`mdfind`) by bundle identifier when the target looks like
   one (contains a dot), otherwise by display name restricted to applications.
"""

from __future__ import annotations

import os
from pathlib import Path
import subprocess
from typing import Sequence

from ..discovery.finder import DEFAULT_MAX_DEPTH
from ..discovery.matching import matches, strip_suffix
from ..discovery.strategies import ProbeStrategy
from ..runtime_tools import resolve_executable
from ..telemetry.logger import BridgeLogger
from .base import PlatformFamily, PlatformSupport, spawn_detached


_BUNDLE_SUFFIX = ".app"
_CLI_RELATIVE_PATH = ("Contents", "MacOS", "cli")


def default_application_dirs() -> list[Path]:
    """Return the system-wide and per-user application directories."""

    return [Path("/Applications"), Path.home() / "Applications"]


def spotlight_query(app_name: str) -> str:
    """Build the `mdfind` query for `app_name`."""

    escaped = app_name.replace("\\", "\\\\").replace("'", "\\'")
    if "." in app_name:
        return f"kMDItemCFBundleIdentifier == '{escaped}'"
    return f"kMDItemDisplayName == '{escaped}' && kMDItemKind == 'Application'"


class MacOSPlatform(PlatformSupport):
    """Platform support for macOS application bundles."""

    family = PlatformFamily.MACOS
    bundle_suffix = _BUNDLE_SUFFIX

    def __init__(
        self,
        logger: BridgeLogger | None = None,
        search_depth: int = DEFAULT_MAX_DEPTH,
        application_dirs: Sequence[Path] | None = None,
    ) -> None:
        super().__init__(logger=logger, search_depth=search_depth)
        self._application_dirs = (
            list(application_dirs) if application_dirs is not None else default_application_dirs()
        )

    def strategies(self) -> list[ProbeStrategy]:
        return [
            ProbeStrategy("application-dirs", self._scan_application_dirs),
            ProbeStrategy("spotlight", self._query_spotlight),
        ]

    def _scan_application_dirs(self, app_name: str) -> Path | None:
        for directory in self._application_dirs:
            try:
                names = os.listdir(directory)
            except OSError:
                continue
            for name in names:
                if not name.lower().endswith(_BUNDLE_SUFFIX):
                    continue
                if matches(strip_suffix(name, _BUNDLE_SUFFIX), app_name):
                    return Path(directory) / name
        return None

    def _query_spotlight(self, app_name: str) -> Path | None:
        try:
            result = subprocess.run(
                [resolve_executable("mdfind"), spotlight_query(app_name)],
                check=False,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except (OSError, ValueError) as exc:
            self._logger.debug("probe", "spotlight_unavailable", error_type=type(exc).__name__)
            return None

        if result.returncode != 0:
            return None
        lines = (result.stdout or "").strip().splitlines()
        first_line = lines[0].strip() if lines else ""
        if not first_line:
            return None
        return Path(first_line)

    def resolve_cli(self, record: Path) -> Path | None:
        cli_path = record.joinpath(*_CLI_RELATIVE_PATH)
        if cli_path.is_file():
            return cli_path
        return None

    def launch(self, app_name: str, record: Path | None) -> bool:
        command = [resolve_executable("open")]
        if record is not None:
            command.extend(["-a", str(record)])
        elif "." in app_name:
            command.extend(["-b", app_name])
        else:
            command.extend(["-a", app_name])
        return spawn_detached(command, self._logger)
