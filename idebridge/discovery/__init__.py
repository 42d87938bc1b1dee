"""Installation discovery: matching, bounded search, caching, and location."""

from .cache import DiscoveryCache, process_cache
from .finder import DEFAULT_MAX_DEPTH, find_executable
from .locator import InstallationLocator
from .matching import matches, strip_suffix
from .strategies import ProbeStrategy, first_success

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DiscoveryCache",
    "InstallationLocator",
    "ProbeStrategy",
    "find_executable",
    "first_success",
    "matches",
    "process_cache",
    "strip_suffix",
]
