"""
Recursive scan of the mirrored software roots.

Each root is walked depth-first. The root itself is never classified; its
children (depth 0) and grandchildren (depth 1) are, and nothing deeper is opened.
A node is reported when its name resembles the application or one of its values
explicitly references the application's install location.
"""

from __future__ import annotations

import logging
from typing import Any

from .candidates import Candidate, CandidateKind
from .context import ScanContext
from .evidence import Evidence, EvidenceSet
from .matching import matches, matches_executable, matches_path_or_executable
from .roots import MirroredRoot
from .store import RegistryKey, StoreAccessError, join_path

MAX_SCAN_DEPTH = 1


def _value_references_install_location(
    context: ScanContext,
    key: RegistryKey,
    value_name: str,
    default_value: Any,
) -> bool:
    """Apply the matching rule selected by the value's name."""
    config = context.config
    install_location = context.install_location
    folded = value_name.casefold()
    try:
        if folded in config.install_dir_value_names:
            return matches(install_location, key.get_value(value_name))
        if folded in config.exe_path_value_names:
            return matches_executable(install_location, key.get_value(value_name))
        if folded in config.exe_or_dir_value_names:
            return matches_path_or_executable(install_location, key.get_value(value_name), context.filesystem)
    except StoreAccessError as exc:
        logging.debug("Cannot read %s in %s: %s", value_name, key.path, exc)
        return False
    return matches(install_location, default_value)


def references_install_location(context: ScanContext, key: RegistryKey) -> bool:
    """True when any value of key points into the install location.

    Scanning stops at the first matching value.
    """
    if not context.install_location:
        return False
    try:
        value_names = key.value_names()
    except StoreAccessError as exc:
        logging.debug("Cannot list values of %s: %s", key.path, exc)
        return False

    if not value_names:
        return False
    try:
        default_value = key.default_value()
    except StoreAccessError:
        default_value = None
    for value_name in value_names:
        if _value_references_install_location(context, key, value_name, default_value):
            return True
    return False


def classify_key(context: ScanContext, key: RegistryKey, depth: int) -> EvidenceSet:
    """Collect name and explicit-reference evidence for one node."""
    evidence = EvidenceSet(context.names.generate_evidence(key.name, key.parent_path, depth))
    if references_install_location(context, key):
        evidence.add(Evidence.EXPLICIT_PATH_REFERENCE_MATCH)
    return evidence


def _visit(context: ScanContext, key: RegistryKey, depth: int, results: list[Candidate]) -> None:
    evidence = classify_key(context, key, depth)
    if evidence:
        results.append(
            Candidate(
                kind=CandidateKind.REGISTRY_KEY,
                parent_path=key.parent_path,
                name=key.name,
                application_name=context.display_name,
                evidence=evidence,
            )
        )
    if depth < MAX_SCAN_DEPTH:
        _scan_children(context, key, depth + 1, results)


def _scan_children(context: ScanContext, key: RegistryKey, depth: int, results: list[Candidate]) -> None:
    try:
        subkey_names = key.subkey_names()
    except StoreAccessError as exc:
        logging.debug("Cannot list subkeys of %s: %s", key.path, exc)
        return

    for subkey_name in subkey_names:
        if context.config.is_blacklisted(subkey_name):
            continue
        try:
            subkey = key.open_subkey(subkey_name)
            if subkey is None:
                continue
            with subkey:
                _visit(context, subkey, depth, results)
        except StoreAccessError as exc:
            logging.debug("Skipping %s: %s", join_path(key.path, subkey_name), exc)


def scan_root(context: ScanContext, root: MirroredRoot) -> list[Candidate]:
    """Scan the subtree of one mirrored root."""
    results: list[Candidate] = []
    try:
        root_key = context.store.open_key(root.prefix)
    except StoreAccessError as exc:
        logging.debug("Cannot open root %s: %s", root.prefix, exc)
        return results
    if root_key is None:
        logging.debug("Root %s is absent", root.prefix)
        return results
    with root_key:
        _scan_children(context, root_key, 0, results)
    return results


def scan_namespace(context: ScanContext) -> list[Candidate]:
    """Scan every configured mirrored root independently."""
    results: list[Candidate] = []
    for root in context.config.roots:
        found = scan_root(context, root)
        logging.debug("Namespace scan of %s found %d candidate(s)", root.prefix, len(found))
        results.extend(found)
    return results
