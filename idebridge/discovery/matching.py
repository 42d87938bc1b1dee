"""Name matching heuristic for installed-application discovery.

Installed display names often carry edition, vendor, or localized text around
the canonical product name, so matching is case-insensitive substring
containment in either direction. Short targets can match unrelated names.
"""

from __future__ import annotations


def matches(candidate: str | None, target: str | None) -> bool:
    """Return whether `candidate` and `target` denote the same application.

    Both strings are compared case-insensitively: equal strings match, and so
    does either one containing the other. Empty values never match.
    """

    if not candidate or not target:
        return False

    left = candidate.casefold()
    right = target.casefold()
    if left == right:
        return True
    return left in right or right in left


def strip_suffix(name: str, suffix: str) -> str:
    """Remove a case-insensitive trailing `suffix` (for example `.app`) from `name`."""

    if suffix and name.lower().endswith(suffix.lower()):
        return name[: -len(suffix)]
    return name
