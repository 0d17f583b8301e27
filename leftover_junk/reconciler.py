"""
Cross-reference candidates across the mirrored software roots.

A leftover may be registered under one root and missing from its siblings, or
found under several roots with different evidence. For every key candidate the
equivalent path under each other root is examined: an existing candidate there
receives the source's evidence; a key that exists in the store but was not
reported gets a new candidate inheriting that evidence. Nothing is created for
paths that cannot be shown to exist.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .candidates import Candidate, CandidateKind, CandidateSet
from .roots import MirroredRoot, find_root, rebase, strip_root
from .store import RegistryStore, StoreAccessError, split_path


def _probe(store: RegistryStore, path: str) -> bool:
    try:
        return store.key_exists(path)
    except StoreAccessError as exc:
        logging.debug("Probe of %s failed: %s", path, exc)
        return False


def reconcile(
    candidates: Iterable[Candidate],
    store: RegistryStore,
    roots: Sequence[MirroredRoot],
) -> list[Candidate]:
    """Return the input candidates followed by candidates synthesized under mirrored roots."""
    found = CandidateSet(candidates)
    sources = found.to_list()
    synthesized: list[Candidate] = []

    for source in sources:
        if source.kind is not CandidateKind.REGISTRY_KEY:
            continue
        source_root = find_root(source.full_path, roots)
        if source_root is None:
            continue
        suffix = strip_root(source.full_path, source_root)
        if not suffix:
            continue

        for root in roots:
            if root == source_root:
                continue
            mirrored_path = rebase(suffix, root)
            existing = found.get(CandidateKind.REGISTRY_KEY, mirrored_path)
            if existing is not None:
                existing.add_evidence(source.evidence)
                continue
            if not _probe(store, mirrored_path):
                continue
            parent_path, name = split_path(mirrored_path)
            mirrored = found.add(
                Candidate(
                    kind=CandidateKind.REGISTRY_KEY,
                    parent_path=parent_path,
                    name=name,
                    application_name=source.application_name,
                    evidence=source.evidence.copy(),
                )
            )
            synthesized.append(mirrored)
            logging.debug("Mirrored %s to %s", source.full_path, mirrored_path)

    return sources + synthesized
