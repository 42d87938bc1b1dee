"""Installation locator.

Resolution order for `InstallationLocator.locate`:
1. Without an override path, a cached record for the target name is returned
   immediately (after an existence check when re-validation is enabled).
2. With an override path that is an existing directory, its immediate
   children and then its parent's children are matched against the target
   name. A miss falls through; the override is a hint, not a constraint.
3. The platform probe chain runs; a hit is cached.

`locate` never raises. Every failure is reported as `None`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from ..telemetry.logger import BridgeLogger, default_logger
from .cache import DiscoveryCache, process_cache
from .matching import matches, strip_suffix

if TYPE_CHECKING:
    from ..platforms.base import PlatformSupport


class InstallationLocator:
    """Locate an application's installation record on the host."""

    def __init__(
        self,
        platform: PlatformSupport,
        cache: DiscoveryCache | None = None,
        logger: BridgeLogger | None = None,
        revalidate_cache: bool = True,
    ) -> None:
        self._platform = platform
        self._cache = cache if cache is not None else process_cache
        self._logger = logger or default_logger()
        self._revalidate_cache = revalidate_cache

    @property
    def platform(self) -> PlatformSupport:
        return self._platform

    @property
    def cache(self) -> DiscoveryCache:
        return self._cache

    def locate(self, app_name: str, override_path: Path | str | None = None) -> Path | None:
        """Return the installation record for `app_name`, or `None` when not found."""

        if not app_name or not app_name.strip():
            return None

        if override_path is None or not str(override_path).strip():
            cached = self._cached_record(app_name)
            if cached is not None:
                return cached
        else:
            hinted = self._match_override(app_name, Path(override_path))
            if hinted is not None:
                self._logger.info("locate", "override_hit", app=app_name, path=hinted)
                self._cache.put(app_name, hinted)
                return hinted
            self._logger.debug("locate", "override_miss", app=app_name, path=override_path)

        try:
            found = self._platform.locate(app_name)
        except (OSError, ValueError) as exc:
            self._logger.failure("locate", type(exc).__name__, app=app_name)
            return None

        if found is None:
            self._logger.info("locate", "not_found", app=app_name)
            return None

        self._cache.put(app_name, found)
        return found

    def _cached_record(self, app_name: str) -> Path | None:
        cached = self._cache.get(app_name)
        if cached is None:
            return None
        if self._revalidate_cache and not cached.exists():
            self._logger.info("locate", "cache_stale", app=app_name, path=cached)
            self._cache.evict(app_name)
            return None
        self._logger.debug("locate", "cache_hit", app=app_name, path=cached)
        return cached

    def _match_override(self, app_name: str, override_path: Path) -> Path | None:
        """Match children of the override directory, then of its parent."""

        try:
            if not override_path.is_dir():
                return None
        except OSError:
            return None

        for directory in (override_path, override_path.parent):
            match = self._match_children(directory, app_name)
            if match is not None:
                return match
        return None

    def _match_children(self, directory: Path, app_name: str) -> Path | None:
        try:
            names = os.listdir(directory)
        except OSError:
            return None
        suffix = self._platform.bundle_suffix
        for name in names:
            if matches(strip_suffix(name, suffix), app_name):
                return directory / name
        return None
