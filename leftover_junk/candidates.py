"""
Leftover candidates and the result set that keeps their paths unique.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator

from .evidence import Evidence, EvidenceSet
from .store import join_path


class CandidateKind(Enum):
    """What kind of artifact a candidate points at."""

    REGISTRY_KEY = "registry-key"
    REGISTRY_VALUE = "registry-value"
    FILESYSTEM_PATH = "filesystem-path"

    @property
    def is_namespace(self) -> bool:
        return self is not CandidateKind.FILESYSTEM_PATH


class RemovalAction(Enum):
    DELETE_KEY = "delete-key"
    DELETE_VALUE = "delete-value"
    DELETE_PATH = "delete-path"


_REMOVAL_ACTIONS = {
    CandidateKind.REGISTRY_KEY: RemovalAction.DELETE_KEY,
    CandidateKind.REGISTRY_VALUE: RemovalAction.DELETE_VALUE,
    CandidateKind.FILESYSTEM_PATH: RemovalAction.DELETE_PATH,
}


class ConfidenceRating(Enum):
    """Coarse rating derived from a candidate's confidence score."""

    VERY_GOOD = ("very-good", 12)
    GOOD = ("good", 4)
    QUESTIONABLE = ("questionable", 1)
    BAD = ("bad", None)

    def __init__(self, label: str, minimum: int | None) -> None:
        self.label = label
        self.minimum = minimum

    @classmethod
    def from_score(cls, score: int) -> ConfidenceRating:
        for rating in cls:
            if rating.minimum is not None and score >= rating.minimum:
                return rating
        return cls.BAD


@dataclass
class Candidate:
    """A suspected leftover artifact plus the evidence gathered for it."""

    kind: CandidateKind
    parent_path: str
    name: str
    application_name: str
    evidence: EvidenceSet = field(default_factory=EvidenceSet)

    @property
    def full_path(self) -> str:
        return join_path(self.parent_path, self.name)

    @property
    def identity(self) -> tuple[CandidateKind, str]:
        """Key used to decide whether two candidates denote the same location."""
        return self.kind, self.full_path.rstrip("\\").casefold()

    @property
    def removal_action(self) -> RemovalAction:
        return _REMOVAL_ACTIONS[self.kind]

    @property
    def confidence(self) -> int:
        return self.evidence.score

    @property
    def rating(self) -> ConfidenceRating:
        return ConfidenceRating.from_score(self.confidence)

    def add_evidence(self, tags: Iterable[Evidence]) -> None:
        self.evidence.union(tags)

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.full_path} ({', '.join(self.evidence.labels())})"


class CandidateSet:
    """Discovery-ordered candidates with unique (kind, full path) identities.

    Adding a candidate for a location that is already present merges its
    evidence into the existing instance instead of duplicating it.
    """

    def __init__(self, candidates: Iterable[Candidate] = ()) -> None:
        self._by_identity: dict[tuple[CandidateKind, str], Candidate] = {}
        self.extend(candidates)

    def add(self, candidate: Candidate) -> Candidate:
        """Insert or merge; returns the instance held by the set."""
        existing = self._by_identity.get(candidate.identity)
        if existing is None:
            self._by_identity[candidate.identity] = candidate
            return candidate
        if existing is not candidate:
            existing.add_evidence(candidate.evidence)
        return existing

    def extend(self, candidates: Iterable[Candidate]) -> None:
        for candidate in candidates:
            self.add(candidate)

    def get(self, kind: CandidateKind, full_path: str) -> Candidate | None:
        return self._by_identity.get((kind, full_path.rstrip("\\").casefold()))

    def to_list(self) -> list[Candidate]:
        return list(self._by_identity.values())

    def __iter__(self) -> Iterator[Candidate]:
        return iter(list(self._by_identity.values()))

    def __len__(self) -> int:
        return len(self._by_identity)

    def __contains__(self, candidate: object) -> bool:
        return isinstance(candidate, Candidate) and candidate.identity in self._by_identity
