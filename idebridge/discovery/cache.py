"""Discovery cache for located installation records.

Responsibilities:
- Remember successful lookups for the lifetime of the process.
- Key entries by target name so distinct applications never share a slot.

The cache never stores empty results. Concurrent writers may race, but every
write for a key carries an equivalent path, so no locking is used.
"""

from __future__ import annotations

from pathlib import Path


class DiscoveryCache:
    """Name-keyed store of installation paths."""

    def __init__(self) -> None:
        self._entries: dict[str, Path] = {}

    @staticmethod
    def _key(app_name: str) -> str:
        return app_name.strip().casefold()

    def get(self, app_name: str) -> Path | None:
        """Return the cached path for `app_name`, if any."""

        return self._entries.get(self._key(app_name))

    def put(self, app_name: str, path: Path | None) -> None:
        """Store a successful lookup; empty results are ignored."""

        if path is None or not str(path):
            return
        self._entries[self._key(app_name)] = path

    def evict(self, app_name: str) -> None:
        """Drop the entry for `app_name` when it is known to be stale."""

        self._entries.pop(self._key(app_name), None)

    def __contains__(self, app_name: object) -> bool:
        return isinstance(app_name, str) and self._key(app_name) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


process_cache = DiscoveryCache()
