"""
Path and identity matching between an application and recorded registry values.

All comparisons are prefix tests on normalized Windows paths. Matching never
raises: any failure while reading or probing a value counts as "no match".
"""

from __future__ import annotations

import logging
import ntpath
import unicodedata
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .filesystem import FileSystem

PATH_SEPARATORS = "\\/"


def normalize_path(value: Any) -> str:
    """NFC-normalize, trim whitespace and trailing separators. Non-strings become ''."""
    if not isinstance(value, str):
        return ""
    return unicodedata.normalize("NFC", value).strip().rstrip(PATH_SEPARATORS)


def matches(install_path: Any, candidate_value: Any) -> bool:
    """True when candidate_value lies at or below install_path (case-insensitive)."""
    base = normalize_path(install_path)
    if not base:
        return False
    child = normalize_path(candidate_value)
    if not child:
        return False
    return child.casefold().startswith(base.casefold())


def parent_directory(value: Any) -> str:
    """Windows-style parent directory of a path, '' when there is none."""
    normalized = normalize_path(value)
    if not normalized:
        return ""
    return ntpath.dirname(normalized)


def matches_executable(install_path: Any, candidate_value: Any) -> bool:
    """True when the file named by candidate_value lives inside install_path."""
    return matches(install_path, parent_directory(candidate_value))


def matches_path_or_executable(install_path: Any, candidate_value: Any, filesystem: FileSystem) -> bool:
    """Resolve a value that may name either a directory or an executable.

    An expanded value naming an existing file is matched as an executable path,
    anything else as a directory.
    """
    if not isinstance(candidate_value, str):
        return False
    try:
        expanded = filesystem.expand_environment_variables(candidate_value).strip().strip('"')
        if filesystem.is_file(expanded):
            return matches_executable(install_path, expanded)
        return matches(install_path, expanded)
    except (OSError, ValueError, TypeError) as exc:
        logging.debug("Could not probe %r: %s", candidate_value, exc)
        return False
