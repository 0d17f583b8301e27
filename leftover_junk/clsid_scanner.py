"""
COM class registrations whose in-process server lives inside the install location.
"""

from __future__ import annotations

import logging
import ntpath

from .candidates import Candidate, CandidateKind
from .context import ScanContext
from .evidence import Evidence, EvidenceSet
from .matching import matches, matches_executable
from .store import RegistryKey, StoreAccessError, join_path

INPROC_SERVER_KEY = "InprocServer32"


def is_rooted(path: str) -> bool:
    """True for drive-qualified, UNC or separator-rooted Windows paths."""
    drive, rest = ntpath.splitdrive(path)
    return bool(drive) or rest.startswith(("\\", "/"))


def _server_path(context: ScanContext, class_key: RegistryKey, class_id: str) -> str | None:
    server_key = class_key.open_subkey(join_path(class_id, INPROC_SERVER_KEY))
    if server_key is None:
        return None
    with server_key:
        value = server_key.default_value()
    if not isinstance(value, str) or not value:
        return None
    return context.filesystem.expand_environment_variables(value).strip().strip('"')


def _class_matches(context: ScanContext, server_path: str) -> bool:
    if not is_rooted(server_path):
        return False
    if matches(context.filesystem.windows_directory(), server_path):
        return False
    return matches_executable(context.install_location, server_path)


def _scan_class_root(context: ScanContext, class_key: RegistryKey, results: list[Candidate]) -> None:
    for raw_name in class_key.subkey_names():
        # Enumerated names occasionally carry a trailing quote
        class_id = raw_name.rstrip('"')
        try:
            server_path = _server_path(context, class_key, class_id)
        except StoreAccessError as exc:
            logging.debug("Skipping class %s under %s: %s", class_id, class_key.path, exc)
            continue
        if server_path is None or not _class_matches(context, server_path):
            continue
        results.append(
            Candidate(
                kind=CandidateKind.REGISTRY_KEY,
                parent_path=class_key.path,
                name=class_id,
                application_name=context.display_name,
                evidence=EvidenceSet([Evidence.EXPLICIT_PATH_REFERENCE_MATCH]),
            )
        )


def scan_clsid(context: ScanContext) -> list[Candidate]:
    results: list[Candidate] = []
    if not context.install_location:
        return results
    for class_root in context.config.clsid_keys:
        try:
            class_key = context.store.open_key(class_root)
            if class_key is None:
                continue
            with class_key:
                _scan_class_root(context, class_key, results)
        except StoreAccessError as exc:
            logging.debug("Cannot scan class registrations at %s: %s", class_root, exc)
    return results
