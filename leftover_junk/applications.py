"""
Application descriptors: the identity a leftover scan is run for.

Descriptors are either discovered from the uninstall registrations in a store or
loaded from a JSON file written by whatever drives the uninstall.
"""

from __future__ import annotations

import json
import logging
import ntpath
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

from .matching import normalize_path
from .store import RegistryKey, RegistryStore, StoreAccessError, join_path

UNINSTALL_KEYS = (
    r"HKEY_LOCAL_MACHINE\SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall",
    r"HKEY_LOCAL_MACHINE\SOFTWARE\Wow6432Node\Microsoft\Windows\CurrentVersion\Uninstall",
    r"HKEY_CURRENT_USER\SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall",
)


class DescriptorLoadError(RuntimeError):
    """Raised when application descriptors cannot be loaded."""


@dataclass(frozen=True)
class ApplicationDescriptor:
    """Identifying metadata of an application whose leftovers are wanted."""

    display_name: str
    install_location: str | None = None
    executable_path: str | None = None
    uninstall_key_path: str | None = None
    publisher: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.display_name, str) or not self.display_name.strip():
            raise ValueError("ApplicationDescriptor requires a non-blank display_name")

    @property
    def effective_install_location(self) -> str:
        """Install location, falling back to the executable's directory."""
        location = normalize_path(self.install_location)
        if location:
            return location
        executable = normalize_path(self.executable_path)
        if executable:
            return ntpath.dirname(executable)
        return ""

    @property
    def install_directory_name(self) -> str:
        """Last segment of the install location, '' when unknown."""
        return ntpath.basename(self.effective_install_location)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ApplicationDescriptor:
        return cls(
            display_name=data.get("display_name", ""),
            install_location=data.get("install_location"),
            executable_path=data.get("executable_path"),
            uninstall_key_path=data.get("uninstall_key_path"),
            publisher=data.get("publisher"),
        )

    def to_dict(self) -> dict[str, str | None]:
        return {
            "display_name": self.display_name,
            "install_location": self.install_location,
            "executable_path": self.executable_path,
            "uninstall_key_path": self.uninstall_key_path,
            "publisher": self.publisher,
        }


def _string_value(key: RegistryKey, name: str) -> str | None:
    value = key.get_value(name)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def executable_from_display_icon(icon: str | None) -> str | None:
    """Turn a DisplayIcon value ('"C:\\App\\app.exe",0') into an executable path."""
    if not icon:
        return None
    path = icon.strip()
    if path.startswith('"'):
        path = path[1:].split('"', 1)[0]
    elif "," in path:
        path = path.rsplit(",", 1)[0]
    path = path.strip()
    if not path.casefold().endswith(".exe"):
        return None
    return path


def _descriptor_from_key(key: RegistryKey) -> ApplicationDescriptor | None:
    display_name = _string_value(key, "DisplayName")
    if display_name is None:
        return None
    return ApplicationDescriptor(
        display_name=display_name,
        install_location=_string_value(key, "InstallLocation"),
        executable_path=executable_from_display_icon(_string_value(key, "DisplayIcon")),
        uninstall_key_path=key.path,
        publisher=_string_value(key, "Publisher"),
    )


def discover_applications(
    store: RegistryStore,
    uninstall_keys: Iterable[str] = UNINSTALL_KEYS,
) -> list[ApplicationDescriptor]:
    """Build descriptors for every uninstall registration with a display name."""
    applications: list[ApplicationDescriptor] = []
    for root_path in uninstall_keys:
        try:
            root = store.open_key(root_path)
        except StoreAccessError as exc:
            logging.warning("Cannot open %s: %s", root_path, exc)
            continue
        if root is None:
            continue
        with root:
            try:
                subkey_names = root.subkey_names()
            except StoreAccessError as exc:
                logging.warning("Cannot list %s: %s", root_path, exc)
                continue
            for subkey_name in subkey_names:
                try:
                    subkey = root.open_subkey(subkey_name)
                    if subkey is None:
                        continue
                    with subkey:
                        descriptor = _descriptor_from_key(subkey)
                except StoreAccessError as exc:
                    logging.debug("Skipping %s: %s", join_path(root_path, subkey_name), exc)
                    continue
                if descriptor is not None:
                    applications.append(descriptor)
    logging.debug("Discovered %d application(s)", len(applications))
    return applications


def select_applications(applications: Iterable[ApplicationDescriptor], pattern: str) -> list[ApplicationDescriptor]:
    """Keep descriptors whose display name contains pattern (case-insensitive)."""
    wanted = pattern.casefold()
    return [app for app in applications if wanted in app.display_name.casefold()]


def load_descriptors(path: Path) -> list[ApplicationDescriptor]:
    """Load one descriptor object or a list of them from a JSON file.

    Raises:
        DescriptorLoadError: If the file cannot be parsed or a descriptor is invalid.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise DescriptorLoadError(f"Cannot load descriptors from {path}: {exc}") from exc
    entries = data if isinstance(data, list) else [data]
    descriptors: list[ApplicationDescriptor] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise DescriptorLoadError(f"Descriptor #{index} in {path} is not an object")
        try:
            descriptors.append(ApplicationDescriptor.from_dict(entry))
        except ValueError as exc:
            raise DescriptorLoadError(f"Descriptor #{index} in {path} is invalid: {exc}") from exc
    return descriptors
