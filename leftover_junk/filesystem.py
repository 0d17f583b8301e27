"""Filesystem accessor used for value-kind disambiguation and class-server probing."""

from __future__ import annotations

import ntpath
import os
import re
from abc import ABC, abstractmethod
from typing import Iterable, Mapping

_ENV_VAR_PATTERN = re.compile(r"%([^%]+)%")
DEFAULT_WINDOWS_DIRECTORY = "C:\\Windows"


class FileSystem(ABC):
    """Read-only filesystem probe using Windows path conventions."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = {name.casefold(): value for name, value in (environ or {}).items()}

    def expand_environment_variables(self, value: str) -> str:
        """Expand %NAME% references; unknown variables are left as written."""

        def _replace(match: re.Match[str]) -> str:
            return self._environ.get(match.group(1).casefold(), match.group(0))

        return _ENV_VAR_PATTERN.sub(_replace, value)

    def windows_directory(self) -> str:
        return self._environ.get("systemroot") or self._environ.get("windir") or DEFAULT_WINDOWS_DIRECTORY

    @abstractmethod
    def is_file(self, path: str) -> bool:
        """True when path names an existing regular file."""


class LocalFileSystem(FileSystem):
    """Probe the filesystem of the machine we are running on."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        super().__init__(os.environ if environ is None else environ)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)


class SnapshotFileSystem(FileSystem):
    """Probe a fixed set of captured file paths."""

    def __init__(self, files: Iterable[str] = (), environ: Mapping[str, str] | None = None) -> None:
        super().__init__(environ)
        self._files = {self._key(path) for path in files}

    @staticmethod
    def _key(path: str) -> str:
        return ntpath.normpath(path.strip()).casefold()

    def is_file(self, path: str) -> bool:
        if not path or not path.strip():
            return False
        return self._key(path) in self._files
