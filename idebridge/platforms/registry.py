"""Read-only access to the Windows uninstall registry.

Only `DisplayName`, `InstallLocation`, and `Path` values are read from
`HKEY_LOCAL_MACHINE`. Unreadable locations and subkeys are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Protocol


UNINSTALL_KEYS = (
    r"SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall",
    r"SOFTWARE\WOW6432Node\Microsoft\Windows\CurrentVersion\Uninstall",
)
_READ_VALUES = ("DisplayName", "InstallLocation", "Path")


@dataclass(frozen=True, slots=True)
class UninstallEntry:
    """One uninstall subkey.

    Attributes:
        key_name: Subkey name (often a product code or product name).
        display_name: `DisplayName` value, or an empty string.
        install_location: `InstallLocation` value, falling back to `Path`.
    """

    key_name: str
    display_name: str
    install_location: str

    @property
    def label(self) -> str:
        """Name used for matching: display name, else the subkey name."""

        return self.display_name or self.key_name


class UninstallRegistryReader(Protocol):
    """Protocol for enumerating uninstall entries under one registry location."""

    def entries(self, key_path: str) -> Iterator[UninstallEntry]:
        """Yield readable entries under `key_path`."""


class WinRegUninstallReader:
    """Uninstall reader backed by the standard-library `winreg` module."""

    def entries(self, key_path: str) -> Iterator[UninstallEntry]:
        import winreg

        try:
            root = winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, key_path)
        except OSError:
            return

        with root:
            index = 0
            while True:
                try:
                    subkey_name = winreg.EnumKey(root, index)
                except OSError:
                    break
                index += 1

                try:
                    with winreg.OpenKey(root, subkey_name) as subkey:
                        values = _read_values(winreg, subkey)
                except OSError:
                    continue

                yield UninstallEntry(
                    key_name=subkey_name,
                    display_name=values.get("DisplayName", ""),
                    install_location=values.get("InstallLocation") or values.get("Path", ""),
                )


def _read_values(winreg_module, subkey) -> dict[str, str]:
    """Read the string values of interest from an open subkey."""

    values: dict[str, str] = {}
    for value_name in _READ_VALUES:
        try:
            raw_value, _ = winreg_module.QueryValueEx(subkey, value_name)
        except OSError:
            continue
        text = str(raw_value).strip() if raw_value is not None else ""
        if text:
            values[value_name] = text
    return values
