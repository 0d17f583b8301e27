"""
Firewall rules that still allow the application's executables.

Rules are stored as values of one key; each value is a '|'-delimited rule string
whose 'App=' field holds the program path.
"""

from __future__ import annotations

import logging
import re

from .candidates import Candidate, CandidateKind
from .context import ScanContext
from .evidence import Evidence, EvidenceSet
from .matching import matches
from .store import StoreAccessError

APP_FIELD = re.compile(r"\|app=([^|]*)\|", re.IGNORECASE)


def extract_application_path(rule: str) -> str | None:
    """Return the text between '|App=' and the next '|', or None when either is missing."""
    match = APP_FIELD.search(rule)
    if match is None:
        return None
    return match.group(1)


def scan_firewall_rules(context: ScanContext) -> list[Candidate]:
    """Report rule values whose application path lies inside the install location."""
    results: list[Candidate] = []
    if not context.install_location:
        return results

    rules_key_path = context.config.firewall_rules_key
    try:
        rules_key = context.store.open_key(rules_key_path)
        if rules_key is None:
            return results
        with rules_key:
            for value_name in rules_key.value_names():
                try:
                    rule = rules_key.get_value(value_name)
                except StoreAccessError as exc:
                    logging.debug("Cannot read firewall rule %s: %s", value_name, exc)
                    continue
                if not isinstance(rule, str) or not rule:
                    continue
                app_path = extract_application_path(rule)
                if app_path is None:
                    logging.debug("Firewall rule %s has no application path", value_name)
                    continue
                expanded = context.filesystem.expand_environment_variables(app_path)
                if matches(context.install_location, expanded):
                    results.append(
                        Candidate(
                            kind=CandidateKind.REGISTRY_VALUE,
                            parent_path=rules_key.path,
                            name=value_name,
                            application_name=context.display_name,
                            evidence=EvidenceSet([Evidence.EXPLICIT_PATH_REFERENCE_MATCH]),
                        )
                    )
    except StoreAccessError as exc:
        logging.debug("Cannot scan firewall rules at %s: %s", rules_key_path, exc)
    return results
