"""
Leftover artifact detection package.

Find registry keys and values an uninstalled application left behind and rank
them by confidence. Candidates are reported only; nothing is deleted.
"""

from . import args_parser, candidates, config, engine, evidence, reconciler, reports, roots, store
from .applications import ApplicationDescriptor, discover_applications
from .candidates import Candidate, CandidateKind, CandidateSet, ConfidenceRating, RemovalAction
from .engine import JunkEngine
from .evidence import Evidence, EvidenceSet
from .snapshot_store import SnapshotRegistryStore, load_snapshot
from .store import RegistryKey, RegistryStore, StoreAccessError

__all__ = [
    "ApplicationDescriptor",
    "Candidate",
    "CandidateKind",
    "CandidateSet",
    "ConfidenceRating",
    "Evidence",
    "EvidenceSet",
    "JunkEngine",
    "RegistryKey",
    "RegistryStore",
    "RemovalAction",
    "SnapshotRegistryStore",
    "StoreAccessError",
    "args_parser",
    "candidates",
    "config",
    "discover_applications",
    "engine",
    "evidence",
    "load_snapshot",
    "reconciler",
    "reports",
    "roots",
    "store",
]
