"""
Read-only hierarchical store contract.

The scanners only ever talk to a RegistryStore. "Not found" and malformed paths
are reported as absent (None); transient failures such as access denied or a
key vanishing mid-scan raise StoreAccessError so callers can skip the node.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

SEPARATOR = "\\"

HIVE_ALIASES = {
    "HKLM": "HKEY_LOCAL_MACHINE",
    "HKCU": "HKEY_CURRENT_USER",
    "HKCR": "HKEY_CLASSES_ROOT",
    "HKU": "HKEY_USERS",
    "HKCC": "HKEY_CURRENT_CONFIG",
}
HIVE_NAMES = frozenset(HIVE_ALIASES.values())


class StoreAccessError(OSError):
    """Raised when a key exists but cannot be read right now."""


def join_path(parent: str, name: str) -> str:
    """Join registry path segments with a single backslash."""
    if not parent:
        return name
    if not name:
        return parent
    return parent.rstrip(SEPARATOR) + SEPARATOR + name.lstrip(SEPARATOR)


def split_path(path: str) -> tuple[str, str]:
    """Split a registry path into (parent path, last segment)."""
    trimmed = path.rstrip(SEPARATOR)
    parent, sep, name = trimmed.rpartition(SEPARATOR)
    if not sep:
        return "", trimmed
    return parent, name


def split_hive(path: str) -> tuple[str, str] | None:
    """Return (canonical hive name, sub path) or None when the hive is unknown."""
    if not path:
        return None
    head, _, rest = path.strip().strip(SEPARATOR).partition(SEPARATOR)
    hive = head.upper()
    hive = HIVE_ALIASES.get(hive, hive)
    if hive not in HIVE_NAMES:
        return None
    return hive, rest.strip(SEPARATOR)


class RegistryKey(ABC):
    """An open, read-only key handle. Use as a context manager."""

    def __init__(self, path: str) -> None:
        self.path = path

    @property
    def name(self) -> str:
        return split_path(self.path)[1]

    @property
    def parent_path(self) -> str:
        return split_path(self.path)[0]

    @abstractmethod
    def subkey_names(self) -> list[str]:
        """List child key names."""

    @abstractmethod
    def value_names(self) -> list[str]:
        """List value names; the default value appears as an empty string when set."""

    @abstractmethod
    def get_value(self, name: str | None) -> Any:
        """Read a value by name, None when absent. None or '' reads the default value."""

    @abstractmethod
    def open_subkey(self, name: str) -> RegistryKey | None:
        """Open a child key (may be a relative multi-segment path)."""

    def default_value(self) -> Any:
        return self.get_value(None)

    def close(self) -> None:
        """Release the handle."""

    def __enter__(self) -> RegistryKey:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"


class RegistryStore(ABC):
    """Read-only accessor for a hierarchical key/value store."""

    @abstractmethod
    def open_key(self, path: str) -> RegistryKey | None:
        """Open a key by full path; None when it does not exist or the path is malformed."""

    def key_exists(self, path: str) -> bool:
        """Probe for a key. Transient failures propagate as StoreAccessError."""
        key = self.open_key(path)
        if key is None:
            return False
        key.close()
        return True
