"""Platform support implementations and one-time platform selection."""

from __future__ import annotations

import platform as _platform
from typing import Sequence

from ..discovery.finder import DEFAULT_MAX_DEPTH
from ..telemetry.logger import BridgeLogger
from .base import PlatformFamily, PlatformSupport, UnsupportedPlatform, spawn_detached
from .macos import MacOSPlatform
from .windows import DEFAULT_EXTRA_PROGRAM_DIRS, WindowsPlatform


def select_platform(
    system: str | None = None,
    logger: BridgeLogger | None = None,
    search_depth: int = DEFAULT_MAX_DEPTH,
    extra_program_dirs: Sequence[str] = DEFAULT_EXTRA_PROGRAM_DIRS,
) -> PlatformSupport:
    """Return the platform implementation for `system` (default: the host OS)."""

    resolved_system = system if system is not None else _platform.system()
    normalized = resolved_system.strip().lower()
    if normalized == "darwin":
        return MacOSPlatform(logger=logger, search_depth=search_depth)
    if normalized == "windows":
        return WindowsPlatform(
            logger=logger,
            search_depth=search_depth,
            extra_program_dirs=extra_program_dirs,
        )
    return UnsupportedPlatform(resolved_system, logger=logger)


__all__ = [
    "MacOSPlatform",
    "PlatformFamily",
    "PlatformSupport",
    "UnsupportedPlatform",
    "WindowsPlatform",
    "select_platform",
    "spawn_detached",
]
