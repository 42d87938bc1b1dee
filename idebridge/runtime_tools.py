"""System executable resolution helpers.

Responsibilities:
- Resolve helper tools (`mdfind`, `open`) used by platform probes and launchers.
- Provide the PATH lookup used as the last Windows discovery strategy.
"""

from __future__ import annotations

from pathlib import Path
import shutil


def resolve_executable(command_name: str) -> str:
    """Resolve a helper executable on `PATH`, falling back to the raw name.

    Returning the raw name lets subprocess raise a native missing-binary error.
    """

    normalized = command_name.strip()
    if not normalized:
        return command_name

    resolved_path = shutil.which(normalized)
    if resolved_path is not None:
        return resolved_path
    return normalized


def find_on_path(command_name: str) -> Path | None:
    """Locate `command_name` on `PATH` and confirm the result exists on disk."""

    normalized = command_name.strip()
    if not normalized:
        return None

    for name in _candidate_names(normalized):
        resolved_path = shutil.which(name)
        if resolved_path is None:
            continue
        candidate = Path(resolved_path)
        if candidate.exists():
            return candidate
    return None


def _candidate_names(command_name: str) -> tuple[str, ...]:
    """Return command name variants including Windows `.exe` fallback."""

    lowered = command_name.lower()
    if lowered.endswith(".exe"):
        return (command_name,)
    return (command_name, f"{command_name}.exe")
