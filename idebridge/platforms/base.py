"""Platform support interface and shared process helpers.

Responsibilities:
- Define the single interface every supported OS family implements.
- Report "not found" on operating systems outside the supported families.
- Start GUI applications as detached, fire-and-forget processes.

Key types:
- `PlatformFamily`: closed set of OS families.
- `PlatformSupport`: base class exposing `locate`, `resolve_cli`, and `launch`.
- `UnsupportedPlatform`: implementation that only warns and reports nothing.
"""

from __future__ import annotations

from enum import Enum
import os
from pathlib import Path
import subprocess
from typing import Sequence

from ..discovery.finder import DEFAULT_MAX_DEPTH
from ..discovery.strategies import ProbeStrategy, first_success
from ..telemetry.logger import BridgeLogger, default_logger


class PlatformFamily(Enum):
    MACOS = "macos"
    WINDOWS = "windows"
    UNSUPPORTED = "unsupported"


class PlatformSupport:
    """Platform-specific discovery, CLI resolution, and launch behavior.

    Attributes:
        family: OS family handled by this implementation.
        bundle_suffix: Suffix stripped from candidate names before matching.
        uses_shell_scripts: Whether batch-script CLIs must run through the shell.
    """

    family = PlatformFamily.UNSUPPORTED
    bundle_suffix = ""
    uses_shell_scripts = False

    def __init__(
        self,
        logger: BridgeLogger | None = None,
        search_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._logger = logger or default_logger()
        self._search_depth = search_depth

    def strategies(self) -> list[ProbeStrategy]:
        """Return the ordered probe strategies for this platform."""

        raise NotImplementedError

    def locate(self, app_name: str) -> Path | None:
        """Run the probe chain and return the first located installation."""

        return first_success(self.strategies(), app_name, self._logger)

    def resolve_cli(self, record: Path) -> Path | None:
        """Derive the command-line tool path from an installation record."""

        raise NotImplementedError

    def launch(self, app_name: str, record: Path | None) -> bool:
        """Request a detached start of the application.

        `record` is the located installation, or `None` when discovery failed
        and the raw `app_name` should be used as the launch identifier.
        """

        raise NotImplementedError


class UnsupportedPlatform(PlatformSupport):
    """Fallback for operating systems outside the supported families."""

    def __init__(self, system: str, logger: BridgeLogger | None = None) -> None:
        super().__init__(logger=logger)
        self.system = system

    def strategies(self) -> list[ProbeStrategy]:
        return []

    def _warn(self, operation: str) -> None:
        self._logger.warning(operation, "unsupported_platform", system=self.system or "unknown")

    def locate(self, app_name: str) -> Path | None:
        self._warn("locate")
        return None

    def resolve_cli(self, record: Path) -> Path | None:
        self._warn("resolve-cli")
        return None

    def launch(self, app_name: str, record: Path | None) -> bool:
        self._warn("launch")
        return False


def _detach_options() -> dict[str, object]:
    """Return platform-specific keyword arguments for detaching a child process."""

    if os.name == "nt":
        flags = getattr(subprocess, "DETACHED_PROCESS", 0) | getattr(
            subprocess, "CREATE_NEW_PROCESS_GROUP", 0
        )
        return {"creationflags": flags}
    return {"start_new_session": True}


def spawn_detached(
    command: Sequence[str],
    logger: BridgeLogger,
    cwd: Path | None = None,
) -> bool:
    """Start `command` detached with discarded standard streams.

    Returns:
        `True` when the process start was requested successfully. No check is
        made that the application actually became ready.
    """

    try:
        subprocess.Popen(
            list(command),
            cwd=str(cwd) if cwd is not None else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            close_fds=True,
            **_detach_options(),
        )
    except (OSError, ValueError) as exc:
        logger.failure("launch", type(exc).__name__, command=command[0] if command else "")
        return False

    logger.info("launch", "spawned", command=command[0])
    return True
