"""
Evidence tags attached to leftover candidates.

Each tag records one reason a location is suspected to belong to an application.
Tags carry a signed weight; the sum of the weights in an EvidenceSet is the
candidate's confidence score.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator

STRONG_WEIGHT_THRESHOLD = 4


class Evidence(Enum):
    """Closed set of reasons a location is suspected junk."""

    NAME_EXACT_MATCH = ("name-exact", 5)
    NAME_SUBSTRING_MATCH = ("name-substring", 2)
    PATH_PREFIX_MATCH = ("path-prefix", 3)
    PUBLISHER_MATCH = ("publisher", 2)
    NESTED_LOCATION = ("nested-location", -1)
    EXPLICIT_PATH_REFERENCE_MATCH = ("explicit-path-reference", 4)
    IS_OWN_UNINSTALL_ENTRY = ("own-uninstall-entry", 20)

    def __init__(self, label: str, weight: int) -> None:
        self.label = label
        self.weight = weight

    @property
    def is_strong(self) -> bool:
        """True for tags that alone make a candidate worth acting on."""
        return self.weight >= STRONG_WEIGHT_THRESHOLD

    @property
    def is_penalty(self) -> bool:
        return self.weight < 0


_DECLARATION_ORDER = {tag: index for index, tag in enumerate(Evidence)}


class EvidenceSet:
    """Unordered set of Evidence owned by exactly one candidate."""

    __slots__ = ("_tags",)

    def __init__(self, tags: Iterable[Evidence] = ()) -> None:
        self._tags: set[Evidence] = set(tags)

    def add(self, tag: Evidence) -> None:
        self._tags.add(tag)

    def union(self, other: Iterable[Evidence]) -> None:
        """Merge tags from another set in place, never duplicating."""
        self._tags.update(other)

    def copy(self) -> EvidenceSet:
        return EvidenceSet(self._tags)

    @property
    def score(self) -> int:
        return sum(tag.weight for tag in self._tags)

    def labels(self) -> list[str]:
        return [tag.label for tag in self]

    def __iter__(self) -> Iterator[Evidence]:
        return iter(sorted(self._tags, key=_DECLARATION_ORDER.__getitem__))

    def __contains__(self, tag: object) -> bool:
        return tag in self._tags

    def __len__(self) -> int:
        return len(self._tags)

    def __bool__(self) -> bool:
        return bool(self._tags)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EvidenceSet):
            return self._tags == other._tags
        if isinstance(other, (set, frozenset)):
            return self._tags == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"EvidenceSet({', '.join(self.labels())})"
