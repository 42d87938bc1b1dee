"""Depth-bounded search for an executable by exact file name."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_MAX_DEPTH = 2


def find_executable(
    root_dir: Path | str,
    file_name: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Path | None:
    """Find the first file named `file_name` under `root_dir`.

    Names are compared case-insensitively but exactly. Entries are visited in
    the order the OS lists them; subdirectories are entered while the depth
    budget is positive, so `max_depth=0` inspects only the immediate entries
    of `root_dir`. Unreadable or missing directories count as empty.

    Returns:
        Path to the first match, or `None` when nothing matches within budget.
    """

    wanted = file_name.casefold()
    if not wanted:
        return None
    return _search(Path(root_dir), wanted, max_depth)


def _search(directory: Path, wanted: str, depth_budget: int) -> Path | None:
    try:
        with os.scandir(directory) as iterator:
            entries = list(iterator)
    except OSError:
        return None

    for entry in entries:
        try:
            if entry.is_dir():
                if depth_budget > 0:
                    found = _search(Path(entry.path), wanted, depth_budget - 1)
                    if found is not None:
                        return found
                continue
            if entry.name.casefold() == wanted and entry.is_file():
                return Path(entry.path)
        except OSError:
            continue
    return None
