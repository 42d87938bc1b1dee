"""Windows discovery, CLI resolution, and launch support.

Probe order:
1. Immediate subdirectories of the program-files and application-data roots.
2. Uninstall registry entries (native and WOW6432Node views).
3. `PATH` lookup for `<name>.exe`.

Directory-level results are install roots; a concrete binary is reached with
the bounded executable finder.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Sequence

from ..discovery.finder import DEFAULT_MAX_DEPTH, find_executable
from ..discovery.matching import matches, strip_suffix
from ..discovery.strategies import ProbeStrategy
from ..runtime_tools import find_on_path
from ..telemetry.logger import BridgeLogger
from .base import PlatformFamily, PlatformSupport, spawn_detached
from .registry import UNINSTALL_KEYS, UninstallRegistryReader, WinRegUninstallReader


CLI_EXECUTABLE_NAME = "cli.exe"
DEFAULT_EXTRA_PROGRAM_DIRS = (r"D:\Program Files", r"D:\Program Files (x86)")
_EXECUTABLE_SUFFIX = ".exe"


def candidate_search_roots(
    environ: Mapping[str, str],
    extra_program_dirs: Sequence[str] = DEFAULT_EXTRA_PROGRAM_DIRS,
) -> list[Path]:
    """Return existing install roots in probe order, without duplicates."""

    profile = environ.get("USERPROFILE", "")
    local_app_data = environ.get("LOCALAPPDATA") or (
        os.path.join(profile, "AppData", "Local") if profile else ""
    )
    roaming_app_data = environ.get("APPDATA") or (
        os.path.join(profile, "AppData", "Roaming") if profile else ""
    )

    raw_roots: list[str] = [
        environ.get("ProgramFiles") or r"C:\Program Files",
        environ.get("ProgramFiles(x86)") or r"C:\Program Files (x86)",
        *extra_program_dirs,
        local_app_data,
        os.path.join(local_app_data, "Programs") if local_app_data else "",
        roaming_app_data,
        environ.get("ProgramData") or environ.get("ALLUSERSPROFILE") or r"C:\ProgramData",
    ]

    roots: list[Path] = []
    seen: set[str] = set()
    for raw_root in raw_roots:
        if not raw_root or not raw_root.strip():
            continue
        key = os.path.normcase(os.path.normpath(raw_root))
        if key in seen:
            continue
        seen.add(key)
        root = Path(raw_root)
        if root.is_dir():
            roots.append(root)
    return roots


class WindowsPlatform(PlatformSupport):
    """Platform support for Windows installations."""

    family = PlatformFamily.WINDOWS
    bundle_suffix = _EXECUTABLE_SUFFIX
    uses_shell_scripts = True

    def __init__(
        self,
        logger: BridgeLogger | None = None,
        search_depth: int = DEFAULT_MAX_DEPTH,
        environ: Mapping[str, str] | None = None,
        extra_program_dirs: Sequence[str] = DEFAULT_EXTRA_PROGRAM_DIRS,
        registry: UninstallRegistryReader | None = None,
    ) -> None:
        super().__init__(logger=logger, search_depth=search_depth)
        self._environ = environ if environ is not None else os.environ
        self._extra_program_dirs = tuple(extra_program_dirs)
        self._registry = registry if registry is not None else WinRegUninstallReader()

    def strategies(self) -> list[ProbeStrategy]:
        return [
            ProbeStrategy("program-dirs", self._scan_program_dirs),
            ProbeStrategy("registry", self._scan_registry),
            ProbeStrategy("path", self._lookup_path),
        ]

    def search_roots(self) -> list[Path]:
        return candidate_search_roots(self._environ, self._extra_program_dirs)

    def _scan_program_dirs(self, app_name: str) -> Path | None:
        for root in self.search_roots():
            try:
                with os.scandir(root) as iterator:
                    entries = list(iterator)
            except OSError:
                continue
            for entry in entries:
                try:
                    is_dir = entry.is_dir()
                except OSError:
                    continue
                if is_dir and matches(entry.name, app_name):
                    return Path(entry.path)
        return None

    def _scan_registry(self, app_name: str) -> Path | None:
        for key_path in UNINSTALL_KEYS:
            try:
                for entry in self._registry.entries(key_path):
                    if entry.install_location and matches(entry.label, app_name):
                        return Path(entry.install_location)
            except OSError as exc:
                self._logger.debug(
                    "probe", "registry_unreadable", key=key_path, error_type=type(exc).__name__
                )
        return None

    def _lookup_path(self, app_name: str) -> Path | None:
        return find_on_path(f"{app_name}{_EXECUTABLE_SUFFIX}")

    def resolve_cli(self, record: Path) -> Path | None:
        root = record if record.is_dir() else record.parent
        return find_executable(root, CLI_EXECUTABLE_NAME, self._search_depth)

    def launch(self, app_name: str, record: Path | None) -> bool:
        if record is None:
            executable = find_on_path(app_name)
            command = [str(executable)] if executable is not None else [app_name]
            return spawn_detached(command, self._logger)

        executable = record if record.is_file() else self._launchable_executable(record, app_name)
        if executable is None:
            self._logger.warning("launch", "executable_not_found", path=record)
            return False
        return spawn_detached([str(executable)], self._logger, cwd=executable.parent)

    def _launchable_executable(self, install_dir: Path, app_name: str) -> Path | None:
        """Find the GUI executable inside an install directory."""

        exact = find_executable(install_dir, f"{app_name}{_EXECUTABLE_SUFFIX}", self._search_depth)
        if exact is not None:
            return exact

        try:
            names = sorted(os.listdir(install_dir))
        except OSError:
            return None
        for name in names:
            if not name.lower().endswith(_EXECUTABLE_SUFFIX):
                continue
            if name.lower() == CLI_EXECUTABLE_NAME:
                continue
            candidate = install_dir / name
            if candidate.is_file() and matches(strip_suffix(name, _EXECUTABLE_SUFFIX), app_name):
                return candidate
        return None
