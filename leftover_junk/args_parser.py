"""
Argument parsing for the leftover_junk CLI.

Handles command-line argument definition, parsing, and validation.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from .reports import ORDERS


def add_source_arguments(parser: argparse.ArgumentParser) -> None:
    """Add arguments selecting the registry source and configuration."""
    parser.add_argument(
        "--snapshot",
        type=Path,
        help="Scan a JSON registry snapshot instead of the live registry (default: $LEFTOVER_SNAPSHOT).",
    )
    parser.add_argument(
        "--env-file",
        help="Path to a .env file with LEFTOVER_* settings (default: $LEFTOVER_ENV_FILE or ~/.env).",
    )
    parser.add_argument(
        "--no-wow64",
        action="store_true",
        help="Do not scan the Wow6432Node mirrors of the software roots.",
    )


def add_selection_arguments(parser: argparse.ArgumentParser) -> None:
    """Add arguments choosing which applications to scan for."""
    parser.add_argument(
        "--name",
        help="Scan applications whose display name contains NAME (case-insensitive).",
    )
    parser.add_argument(
        "--descriptor",
        type=Path,
        help="JSON file describing one or more applications to scan for.",
    )
    parser.add_argument(
        "--list-applications",
        action="store_true",
        help="List applications found in the uninstall registrations and exit.",
    )


def add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    """Add filtering and sorting arguments."""
    parser.add_argument(
        "--min-confidence",
        type=int,
        help="Only report candidates with at least this confidence score.",
    )
    parser.add_argument(
        "--sort",
        choices=ORDERS,
        default="confidence",
        help="Order used when reporting (default: confidence).",
    )


def add_output_arguments(parser: argparse.ArgumentParser) -> None:
    """Add output and reporting arguments."""
    parser.add_argument("--report-json", type=Path, help="Optional path to write the full candidate list as JSON.")
    parser.add_argument("--report-csv", type=Path, help="Optional path to write the report as CSV.")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find registry leftovers of uninstalled applications. Report only; nothing is deleted."
    )
    add_source_arguments(parser)
    add_selection_arguments(parser)
    add_filter_arguments(parser)
    add_output_arguments(parser)
    return parser


def _validate_args(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Validate parsed arguments."""
    if not args.list_applications and not args.name and not args.descriptor:
        parser.error("one of --name, --descriptor or --list-applications is required.")
    if args.name is not None and not args.name.strip():
        parser.error("--name must not be blank.")


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse and validate command-line arguments."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _validate_args(args, parser)
    return args
