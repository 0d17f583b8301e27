"""
Leftover detection engine: the single entry point composing every strategy.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .applications import ApplicationDescriptor
from .candidates import Candidate, CandidateSet
from .clsid_scanner import scan_clsid
from .config import ScanConfig, build_scan_config
from .context import ScanContext
from .filesystem import FileSystem, LocalFileSystem
from .firewall_scanner import scan_firewall_rules
from .namespace_scanner import scan_namespace
from .reconciler import reconcile
from .self_entry_scanner import scan_self_entry
from .store import RegistryStore
from .tracing_scanner import scan_tracing


class JunkEngine:
    """Find leftover registry artifacts of uninstalled applications.

    The engine only reads from the store and filesystem it is given, so one
    instance may serve concurrent scans of different applications.
    """

    def __init__(
        self,
        store: RegistryStore,
        filesystem: Optional[FileSystem] = None,
        config: Optional[ScanConfig] = None,
    ) -> None:
        if store is None:
            raise TypeError("JunkEngine requires a RegistryStore")
        self.store = store
        self.filesystem = filesystem if filesystem is not None else LocalFileSystem()
        self.config = config if config is not None else build_scan_config()

    def find_junk(
        self,
        application: ApplicationDescriptor,
        peer_applications: Iterable[ApplicationDescriptor] = (),
    ) -> list[Candidate]:
        """Return leftover candidates for one application in discovery order.

        peer_applications is accepted for cross-checks against still-installed
        siblings but does not influence matching.
        """
        if not isinstance(application, ApplicationDescriptor):
            raise TypeError(f"find_junk requires an ApplicationDescriptor, got {type(application).__name__}")
        peers = list(peer_applications)
        logging.debug("Scanning leftovers of %s (%d peer application(s))", application.display_name, len(peers))

        context = ScanContext(
            store=self.store,
            filesystem=self.filesystem,
            config=self.config,
            application=application,
        )
        results = CandidateSet()
        results.extend(scan_self_entry(context))
        results.extend(reconcile(scan_namespace(context), self.store, self.config.roots))
        results.extend(scan_firewall_rules(context))
        results.extend(scan_tracing(context))
        results.extend(scan_clsid(context))

        candidates = results.to_list()
        logging.info("Found %d leftover candidate(s) for %s", len(candidates), application.display_name)
        return candidates
