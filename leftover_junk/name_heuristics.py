"""
Name-similarity heuristic for registry key names.

Given a short key name, its parent path and the recursion depth it was found
at, produce the name-based evidence tying the key to an application. Evidence
gets weaker the deeper the key sits below a scanned root.
"""

from __future__ import annotations

import re

from .applications import ApplicationDescriptor
from .evidence import Evidence
from .store import split_path

MIN_NAME_LENGTH = 3
MIN_SUBSTRING_RATIO = 0.5

GENERIC_NAMES = frozenset(
    {
        "app",
        "application",
        "applications",
        "cache",
        "common",
        "commonfiles",
        "config",
        "data",
        "default",
        "programfiles",
        "settings",
        "setup",
        "shared",
        "software",
        "system",
        "temp",
        "update",
        "updater",
        "user",
        "users",
    }
)

_PARENTHESISED = re.compile(r"\s*[\(\[].*?[\)\]]")
_TRAILING_VERSION = re.compile(r"\s+v?\d+(\.\d+)*\b.*$", re.IGNORECASE)
_NON_ALNUM = re.compile(r"[\W_]+")


def normalize_name(name: str | None) -> str:
    """Casefold, drop version/edition suffixes and everything non-alphanumeric."""
    if not name:
        return ""
    text = _PARENTHESISED.sub("", name.casefold())
    text = _TRAILING_VERSION.sub("", text)
    return _NON_ALNUM.sub("", text)


def _is_usable(normalized: str) -> bool:
    return len(normalized) >= MIN_NAME_LENGTH and normalized not in GENERIC_NAMES


def _substring_match(key: str, target: str) -> bool:
    if not _is_usable(key) or not _is_usable(target):
        return False
    shorter, longer = sorted((key, target), key=len)
    if shorter not in longer:
        return False
    return longer.startswith(shorter) or len(shorter) / len(longer) >= MIN_SUBSTRING_RATIO


class NameMatcher:
    """Name heuristic bound to one application."""

    def __init__(self, application: ApplicationDescriptor) -> None:
        self.application = application
        self._display = normalize_name(application.display_name)
        self._segment = normalize_name(application.install_directory_name)
        self._publisher = normalize_name(application.publisher)

    def _publisher_in_parent(self, parent_path: str) -> bool:
        parent_segment = normalize_name(split_path(parent_path)[1])
        return _substring_match(parent_segment, self._publisher)

    def generate_evidence(self, name: str, parent_path: str, depth: int) -> set[Evidence]:
        """Return zero or more name-based Evidence tags for a key."""
        key = normalize_name(name)
        if not _is_usable(key):
            return set()

        display_exact = key == self._display
        segment_exact = _is_usable(self._segment) and key == self._segment
        substring = _substring_match(key, self._display) or _substring_match(key, self._segment)
        if not (display_exact or segment_exact or substring):
            return set()

        evidence: set[Evidence] = set()
        if depth <= 0:
            if display_exact:
                evidence.add(Evidence.NAME_EXACT_MATCH)
            if segment_exact:
                evidence.add(Evidence.PATH_PREFIX_MATCH)
            if not evidence:
                evidence.add(Evidence.NAME_SUBSTRING_MATCH)
            return evidence

        evidence.add(Evidence.NAME_SUBSTRING_MATCH)
        if segment_exact:
            evidence.add(Evidence.PATH_PREFIX_MATCH)
        if self._publisher and self._publisher_in_parent(parent_path):
            evidence.add(Evidence.PUBLISHER_MATCH)
        else:
            evidence.add(Evidence.NESTED_LOCATION)
        return evidence
