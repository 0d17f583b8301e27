"""Diagnostic tracing registrations (subkeys named '<module>_<suffix>')."""

from __future__ import annotations

import logging

from .candidates import Candidate, CandidateKind
from .context import ScanContext
from .evidence import EvidenceSet
from .store import StoreAccessError, join_path

SUFFIX_SEPARATOR = "_"


def tracing_prefix(subkey_name: str) -> str | None:
    """Name before the last '_'; None when there is no usable separator."""
    index = subkey_name.rfind(SUFFIX_SEPARATOR)
    if index <= 0:
        return None
    return subkey_name[:index]


def scan_tracing(context: ScanContext) -> list[Candidate]:
    results: list[Candidate] = []
    tracing_key_path = context.config.tracing_key
    try:
        tracing_key = context.store.open_key(tracing_key_path)
        if tracing_key is None:
            return results
        with tracing_key:
            subkey_names = tracing_key.subkey_names()
            parent_path = tracing_key.path
    except StoreAccessError as exc:
        logging.debug("Cannot scan tracing registrations at %s: %s", tracing_key_path, exc)
        return results

    for subkey_name in subkey_names:
        prefix = tracing_prefix(subkey_name)
        if prefix is None:
            continue
        evidence = context.names.generate_evidence(prefix, join_path(parent_path, subkey_name), 0)
        if evidence:
            results.append(
                Candidate(
                    kind=CandidateKind.REGISTRY_KEY,
                    parent_path=parent_path,
                    name=subkey_name,
                    application_name=context.display_name,
                    evidence=EvidenceSet(evidence),
                )
            )
    return results
