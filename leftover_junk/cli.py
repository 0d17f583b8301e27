"""
Command-line interface and main entry point for leftover_junk.

Handles workflow orchestration and user interaction.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .applications import (
    ApplicationDescriptor,
    DescriptorLoadError,
    discover_applications,
    load_descriptors,
    select_applications,
)
from .args_parser import parse_args
from .candidates import Candidate
from .config import ConfigurationError, Settings, build_scan_config, load_settings
from .engine import JunkEngine
from .filesystem import FileSystem, LocalFileSystem
from .progress import ProgressTracker
from .reports import (
    filter_candidates,
    order_candidates,
    print_applications,
    print_candidates_report,
    write_reports,
)
from .snapshot_store import SnapshotLoadError, load_snapshot
from .store import RegistryStore

DEFAULT_JSON_REPORT_NAME = "leftovers.json"


def open_sources(snapshot_path: Path | None) -> tuple[RegistryStore, FileSystem]:
    """Return the store and filesystem to scan.

    Raises:
        ConfigurationError: If no snapshot is given and the live registry is unavailable.
        SnapshotLoadError: If the snapshot cannot be loaded.
    """
    if snapshot_path is not None:
        logging.info("Using registry snapshot %s", snapshot_path)
        return load_snapshot(snapshot_path)
    if sys.platform != "win32":
        raise ConfigurationError("The live registry is only available on Windows; pass --snapshot.")
    from .winreg_store import WinRegistryStore  # pylint: disable=import-outside-toplevel

    return WinRegistryStore(), LocalFileSystem()


def _select_targets(
    args: argparse.Namespace,
    applications: list[ApplicationDescriptor],
) -> list[ApplicationDescriptor]:
    """Resolve the applications to scan for. Raises DescriptorLoadError for bad descriptor files."""
    targets: list[ApplicationDescriptor] = []
    if args.descriptor:
        targets.extend(load_descriptors(args.descriptor))
    if args.name:
        targets.extend(select_applications(applications, args.name))
    return list(dict.fromkeys(targets))


def _resolve_json_report(args: argparse.Namespace, settings: Settings) -> Path | None:
    if args.report_json is not None:
        return args.report_json
    if settings.report_dir is not None:
        return settings.report_dir / DEFAULT_JSON_REPORT_NAME
    return None


def scan_applications(
    engine: JunkEngine,
    targets: list[ApplicationDescriptor],
    installed: list[ApplicationDescriptor],
    args: argparse.Namespace,
) -> list[Candidate]:
    """Scan each target in turn, print its report and return every reported candidate."""
    progress = ProgressTracker(total=len(targets), label="Scanning applications") if len(targets) > 1 else None
    reported: list[Candidate] = []
    for index, target in enumerate(targets, start=1):
        peers = [app for app in installed if app != target]
        candidates = engine.find_junk(target, peers)
        candidates = filter_candidates(candidates, args.min_confidence)
        candidates = order_candidates(candidates, order=args.sort)
        if progress is not None:
            progress.update(index, target.display_name)
        reported.extend(candidates)
        print_candidates_report(target, candidates)
    if progress is not None:
        progress.finish()
    return reported


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the leftover_junk CLI."""
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    try:
        settings = load_settings(args.env_file)
        store, filesystem = open_sources(args.snapshot or settings.snapshot_path)
    except (ConfigurationError, SnapshotLoadError) as exc:
        logging.error("%s", exc)
        return 1

    applications = discover_applications(store)
    if args.list_applications:
        print_applications(applications)
        return 0

    try:
        targets = _select_targets(args, applications)
    except DescriptorLoadError:
        logging.exception("Failed to load application descriptors")
        return 1
    if not targets:
        print("No applications matched the selection.")
        return 0

    include_wow64 = False if args.no_wow64 else settings.include_wow64
    engine = JunkEngine(store, filesystem, build_scan_config(include_wow64))
    reported = scan_applications(engine, targets, applications, args)

    write_reports(reported, json_path=_resolve_json_report(args, settings), csv_path=args.report_csv)
    print("\nReport only: nothing was deleted.")
    return 0
