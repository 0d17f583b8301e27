"""Shared inputs of one leftover scan."""

from __future__ import annotations

from dataclasses import dataclass, field

from .applications import ApplicationDescriptor
from .config import ScanConfig
from .filesystem import FileSystem
from .name_heuristics import NameMatcher
from .store import RegistryStore


@dataclass(frozen=True)
class ScanContext:
    """Everything a strategy scanner needs to look for one application's leftovers."""

    store: RegistryStore
    filesystem: FileSystem
    config: ScanConfig
    application: ApplicationDescriptor
    names: NameMatcher = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", NameMatcher(self.application))

    @property
    def install_location(self) -> str:
        return self.application.effective_install_location

    @property
    def display_name(self) -> str:
        return self.application.display_name
