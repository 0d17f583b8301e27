"""Tests for leftover_junk/candidates.py module."""

from __future__ import annotations

import pytest

from leftover_junk.candidates import (  # pylint: disable=no-name-in-module
    Candidate,
    CandidateKind,
    CandidateSet,
    ConfidenceRating,
    RemovalAction,
)
from leftover_junk.evidence import Evidence, EvidenceSet
from tests.assertions import assert_equal


def _candidate(path_parent=r"HKEY_LOCAL_MACHINE\SOFTWARE", name="FooApp", kind=CandidateKind.REGISTRY_KEY, tags=()):
    return Candidate(
        kind=kind,
        parent_path=path_parent,
        name=name,
        application_name="FooApp",
        evidence=EvidenceSet(tags),
    )


def test_candidate_derived_fields():
    """Test full path, removal action and confidence."""
    candidate = _candidate(tags=[Evidence.NAME_EXACT_MATCH, Evidence.NESTED_LOCATION])

    assert_equal(candidate.full_path, r"HKEY_LOCAL_MACHINE\SOFTWARE\FooApp")
    assert_equal(candidate.removal_action, RemovalAction.DELETE_KEY)
    assert_equal(candidate.confidence, 4)
    assert_equal(candidate.rating, ConfidenceRating.GOOD)


def test_value_candidate_removal_action():
    """Test that value candidates are removed as values."""
    candidate = _candidate(name="{rule-id}", kind=CandidateKind.REGISTRY_VALUE)

    assert_equal(candidate.removal_action, RemovalAction.DELETE_VALUE)
    assert candidate.kind.is_namespace
    assert not CandidateKind.FILESYSTEM_PATH.is_namespace


@pytest.mark.parametrize(
    ("score", "rating"),
    [
        (20, ConfidenceRating.VERY_GOOD),
        (12, ConfidenceRating.VERY_GOOD),
        (11, ConfidenceRating.GOOD),
        (4, ConfidenceRating.GOOD),
        (3, ConfidenceRating.QUESTIONABLE),
        (1, ConfidenceRating.QUESTIONABLE),
        (0, ConfidenceRating.BAD),
        (-1, ConfidenceRating.BAD),
    ],
)
def test_confidence_rating_thresholds(score, rating):
    """Test rating boundaries."""
    assert_equal(ConfidenceRating.from_score(score), rating)


def test_candidate_set_merges_duplicate_paths_case_insensitively():
    """Test that one location is held once with the union of evidence."""
    candidates = CandidateSet()
    first = candidates.add(_candidate(tags=[Evidence.NAME_EXACT_MATCH]))
    second = candidates.add(
        _candidate(path_parent=r"hkey_local_machine\software", name="FOOAPP", tags=[Evidence.PUBLISHER_MATCH])
    )

    assert second is first
    assert_equal(len(candidates), 1)
    assert first.evidence == {Evidence.NAME_EXACT_MATCH, Evidence.PUBLISHER_MATCH}


def test_candidate_set_keeps_kinds_apart():
    """Test that a key and a value with the same path are distinct candidates."""
    candidates = CandidateSet([_candidate(), _candidate(kind=CandidateKind.REGISTRY_VALUE)])

    assert_equal(len(candidates), 2)


def test_candidate_set_preserves_discovery_order():
    """Test iteration and lookup."""
    first = _candidate(name="Beta")
    second = _candidate(name="Alpha")
    candidates = CandidateSet([first, second, _candidate(name="beta")])

    assert_equal([c.name for c in candidates], ["Beta", "Alpha"])
    assert candidates.get(CandidateKind.REGISTRY_KEY, r"HKEY_LOCAL_MACHINE\SOFTWARE\ALPHA") is second
    assert candidates.get(CandidateKind.REGISTRY_VALUE, r"HKEY_LOCAL_MACHINE\SOFTWARE\Alpha") is None
    assert _candidate(name="alpha") in candidates
