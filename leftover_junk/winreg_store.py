"""
Live Windows registry accessor built on ``winreg``.

Only available on Windows; the CLI imports this module lazily and falls back to
requiring a snapshot elsewhere.
"""

from __future__ import annotations

import winreg
from typing import Any

from .store import RegistryKey, RegistryStore, StoreAccessError, join_path, split_hive

HIVES = {
    "HKEY_LOCAL_MACHINE": winreg.HKEY_LOCAL_MACHINE,
    "HKEY_CURRENT_USER": winreg.HKEY_CURRENT_USER,
    "HKEY_CLASSES_ROOT": winreg.HKEY_CLASSES_ROOT,
    "HKEY_USERS": winreg.HKEY_USERS,
    "HKEY_CURRENT_CONFIG": winreg.HKEY_CURRENT_CONFIG,
}


def _open(parent: Any, sub_path: str, access: int) -> Any | None:
    """Open a key read-only. None when missing or malformed, StoreAccessError otherwise."""
    try:
        return winreg.OpenKey(parent, sub_path, 0, access)
    except (FileNotFoundError, ValueError):
        return None
    except OSError as exc:
        raise StoreAccessError(f"Cannot open {sub_path}: {exc}") from exc


class WinRegistryKey(RegistryKey):
    """Wrapper around a winreg HKEY handle."""

    def __init__(self, path: str, handle: Any, access: int) -> None:
        super().__init__(path)
        self._handle = handle
        self._access = access

    def _info(self) -> tuple[int, int, int]:
        try:
            return winreg.QueryInfoKey(self._handle)
        except OSError as exc:
            raise StoreAccessError(f"Cannot query {self.path}: {exc}") from exc

    def subkey_names(self) -> list[str]:
        count = self._info()[0]
        names: list[str] = []
        for index in range(count):
            try:
                names.append(winreg.EnumKey(self._handle, index))
            except OSError as exc:
                # Keys removed while enumerating end the listing early
                if getattr(exc, "winerror", None) == 259:
                    break
                raise StoreAccessError(f"Cannot enumerate {self.path}: {exc}") from exc
        return names

    def value_names(self) -> list[str]:
        count = self._info()[1]
        names: list[str] = []
        for index in range(count):
            try:
                names.append(winreg.EnumValue(self._handle, index)[0])
            except OSError as exc:
                if getattr(exc, "winerror", None) == 259:
                    break
                raise StoreAccessError(f"Cannot enumerate values of {self.path}: {exc}") from exc
        return names

    def get_value(self, name: str | None) -> Any:
        try:
            value, _value_type = winreg.QueryValueEx(self._handle, name or "")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StoreAccessError(f"Cannot read {name!r} in {self.path}: {exc}") from exc
        return value

    def open_subkey(self, name: str) -> RegistryKey | None:
        handle = _open(self._handle, name, self._access)
        if handle is None:
            return None
        return WinRegistryKey(join_path(self.path, name), handle, self._access)

    def close(self) -> None:
        if self._handle is not None:
            self._handle.Close()
            self._handle = None


class WinRegistryStore(RegistryStore):
    """Read-only view of the live registry, using the native (64-bit) view by default."""

    def __init__(self, native_view: bool = True) -> None:
        self._access = winreg.KEY_READ | (winreg.KEY_WOW64_64KEY if native_view else 0)

    def open_key(self, path: str) -> RegistryKey | None:
        parts = split_hive(path)
        if parts is None:
            return None
        hive_name, sub_path = parts
        handle = _open(HIVES[hive_name], sub_path, self._access)
        if handle is None:
            return None
        return WinRegistryKey(join_path(hive_name, sub_path), handle, self._access)
