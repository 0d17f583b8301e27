"""The application's own uninstall registration, if it survived the uninstall."""

from __future__ import annotations

import logging

from .candidates import Candidate, CandidateKind
from .context import ScanContext
from .evidence import Evidence, EvidenceSet
from .store import StoreAccessError, split_path


def scan_self_entry(context: ScanContext) -> list[Candidate]:
    key_path = (context.application.uninstall_key_path or "").strip()
    if not key_path:
        return []
    try:
        key = context.store.open_key(key_path)
    except StoreAccessError as exc:
        logging.debug("Cannot probe uninstall entry %s: %s", key_path, exc)
        return []
    if key is None:
        return []
    with key:
        parent_path, name = split_path(key.path)
    return [
        Candidate(
            kind=CandidateKind.REGISTRY_KEY,
            parent_path=parent_path,
            name=name,
            application_name=context.display_name,
            evidence=EvidenceSet([Evidence.IS_OWN_UNINSTALL_ENTRY]),
        )
    ]
