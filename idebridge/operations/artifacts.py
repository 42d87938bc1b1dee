"""Locations for temporary artifacts exchanged with the IDE command-line tool.

The IDE writes preview QR codes and screenshots into its own support
directory; these helpers compute where to ask it to write them.
"""

from __future__ import annotations

from pathlib import Path
import time
from urllib.parse import quote

from ..platforms.base import PlatformFamily


# Characters `encodeURIComponent` leaves unescaped.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def app_support_dir(
    app_name: str,
    family: PlatformFamily,
    home: Path | None = None,
) -> Path | None:
    """Return the per-user support directory of `app_name`, if the OS is supported."""

    home_dir = home if home is not None else Path.home()
    if family is PlatformFamily.MACOS:
        return home_dir / "Library" / "Application Support" / app_name
    if family is PlatformFamily.WINDOWS:
        return home_dir / "AppData" / "Local" / app_name
    return None


def temporary_file_path(
    app_name: str,
    prefix: str,
    extension: str,
    family: PlatformFamily,
    home: Path | None = None,
    timestamp_ms: int | None = None,
) -> Path | None:
    """Return a unique artifact path inside the IDE's default profile directory."""

    support_dir = app_support_dir(app_name, family, home)
    if support_dir is None:
        return None

    stamp = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
    file_name = f"{prefix}-{stamp}.{extension.lstrip('.')}"
    if family is PlatformFamily.WINDOWS:
        return support_dir / "User Data" / "Default" / file_name
    return support_dir / "Default" / file_name


def encode_output_target(format_id: str, path: Path) -> str:
    """Encode an output target argument as `<format>@<uri-encoded path>`."""

    return f"{format_id}@{quote(str(path), safe=_URI_COMPONENT_SAFE)}"


def remove_artifact(path: Path | None) -> bool:
    """Delete a temporary artifact if it exists and return whether it was removed."""

    if path is None:
        return False
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True
