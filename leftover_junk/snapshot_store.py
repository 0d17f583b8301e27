"""
Offline registry snapshot accessor.

A snapshot is a JSON document describing a registry tree, so leftover scans can be
reproduced away from the machine they were captured on:

    {
      "keys": {
        "HKEY_LOCAL_MACHINE": {
          "keys": {"SOFTWARE": {"keys": {"Foo": {"values": {"InstallDir": "C:\\\\Foo"}}}}}
        }
      },
      "files": ["C:\\\\Foo\\\\foo.exe"],
      "environment": {"ProgramFiles": "C:\\\\Program Files"}
    }

The default value of a key is stored under the empty value name. A key carrying
``"denied": true`` raises StoreAccessError when opened.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from .filesystem import SnapshotFileSystem
from .store import (
    HIVE_ALIASES,
    SEPARATOR,
    RegistryKey,
    RegistryStore,
    StoreAccessError,
    join_path,
    split_hive,
)


class SnapshotLoadError(RuntimeError):
    """Raised when a snapshot document cannot be read or is malformed."""


class SnapshotNode:
    """One key of an in-memory registry tree."""

    def __init__(
        self,
        name: str,
        values: Mapping[str, Any] | None = None,
        children: list[SnapshotNode] | None = None,
        *,
        denied: bool = False,
    ) -> None:
        self.name = name
        self.values: dict[str, Any] = dict(values or {})
        self.denied = denied
        self._children: dict[str, SnapshotNode] = {}
        for child in children or []:
            self.add_child(child)

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> SnapshotNode:
        if not isinstance(data, Mapping):
            raise SnapshotLoadError(f"Key {name!r} must be an object, got {type(data).__name__}")
        values = data.get("values") or {}
        if not isinstance(values, Mapping):
            raise SnapshotLoadError(f"Values of key {name!r} must be an object")
        children = [cls.from_dict(child_name, child) for child_name, child in (data.get("keys") or {}).items()]
        return cls(name, values, children, denied=bool(data.get("denied", False)))

    def add_child(self, child: SnapshotNode) -> SnapshotNode:
        self._children[child.name.casefold()] = child
        return child

    def child(self, name: str) -> SnapshotNode | None:
        return self._children.get(name.casefold())

    def children(self) -> list[SnapshotNode]:
        return list(self._children.values())

    def get_value(self, name: str | None) -> Any:
        wanted = (name or "").casefold()
        for value_name, value in self.values.items():
            if value_name.casefold() == wanted:
                return value
        return None


class SnapshotRegistryKey(RegistryKey):
    """Handle onto a SnapshotNode."""

    def __init__(self, path: str, node: SnapshotNode) -> None:
        super().__init__(path)
        self._node: SnapshotNode | None = node

    def _require_node(self) -> SnapshotNode:
        if self._node is None:
            raise StoreAccessError(f"Handle for {self.path} is closed")
        return self._node

    def subkey_names(self) -> list[str]:
        return [child.name for child in self._require_node().children()]

    def value_names(self) -> list[str]:
        return list(self._require_node().values)

    def get_value(self, name: str | None) -> Any:
        return self._require_node().get_value(name)

    def open_subkey(self, name: str) -> RegistryKey | None:
        node = self._require_node()
        path = self.path
        for segment in name.strip(SEPARATOR).split(SEPARATOR):
            if not segment:
                return None
            node = node.child(segment)
            if node is None:
                return None
            path = join_path(path, node.name)
            if node.denied:
                raise StoreAccessError(f"Access denied: {path}")
        return SnapshotRegistryKey(path, node)

    def close(self) -> None:
        self._node = None


class SnapshotRegistryStore(RegistryStore):
    """RegistryStore over an in-memory tree of SnapshotNode hives."""

    def __init__(self, hives: Mapping[str, SnapshotNode] | None = None) -> None:
        self._hives: dict[str, SnapshotNode] = {}
        for name, node in (hives or {}).items():
            canonical = HIVE_ALIASES.get(name.upper(), name.upper())
            node.name = canonical
            self._hives[canonical] = node

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SnapshotRegistryStore:
        keys = data.get("keys") or {}
        if not isinstance(keys, Mapping):
            raise SnapshotLoadError("Snapshot 'keys' must be an object keyed by hive name")
        return cls({name: SnapshotNode.from_dict(name, hive) for name, hive in keys.items()})

    def open_key(self, path: str) -> RegistryKey | None:
        parts = split_hive(path)
        if parts is None:
            return None
        hive_name, sub_path = parts
        hive = self._hives.get(hive_name)
        if hive is None:
            return None
        root = SnapshotRegistryKey(hive_name, hive)
        if not sub_path:
            return root
        return root.open_subkey(sub_path)


def load_snapshot(path: Path) -> tuple[SnapshotRegistryStore, SnapshotFileSystem]:
    """Load a snapshot file into a store and a matching filesystem accessor.

    Raises:
        SnapshotLoadError: If the file is missing, not JSON, or structurally invalid.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise SnapshotLoadError(f"Cannot read snapshot {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SnapshotLoadError(f"Snapshot {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, Mapping):
        raise SnapshotLoadError(f"Snapshot {path} must contain a JSON object")
    store = SnapshotRegistryStore.from_dict(data)
    filesystem = SnapshotFileSystem(
        files=data.get("files") or [],
        environ=data.get("environment") or {},
    )
    return store, filesystem
