"""
Ranking and report output for leftover candidates.

Handles ordering, filtering, console display and JSON/CSV reports. Nothing here
acts on the candidates; removal is left to whoever consumes the reports.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from leftover_junk.applications import ApplicationDescriptor
    from leftover_junk.candidates import Candidate

ORDERS = ("discovery", "confidence", "path")
REPORT_FIELDS = ["application", "kind", "path", "evidence", "confidence", "rating", "removal_action"]


def order_candidates(candidates: list[Candidate], *, order: str) -> list[Candidate]:
    """Sort candidates by confidence or path; 'discovery' keeps the engine's order."""
    if order == "confidence":
        return sorted(candidates, key=lambda c: c.confidence, reverse=True)
    if order == "path":
        return sorted(candidates, key=lambda c: c.full_path.casefold())
    if order == "discovery":
        return list(candidates)
    raise ValueError(f"Unknown order {order!r}; expected one of {', '.join(ORDERS)}")


def filter_candidates(candidates: list[Candidate], min_confidence: int | None) -> list[Candidate]:
    if min_confidence is None:
        return list(candidates)
    return [c for c in candidates if c.confidence >= min_confidence]


def summarise(candidates: list[Candidate]) -> list[tuple[str, int, int]]:
    """Return per-kind summary of (kind, count, total confidence)."""
    summary: dict[str, tuple[int, int]] = {}
    for candidate in candidates:
        count, total = summary.get(candidate.kind.value, (0, 0))
        summary[candidate.kind.value] = (count + 1, total + candidate.confidence)
    return sorted((kind, count, total) for kind, (count, total) in summary.items())


def candidate_row(candidate: Candidate) -> dict[str, object]:
    return {
        "application": candidate.application_name,
        "kind": candidate.kind.value,
        "path": candidate.full_path,
        "evidence": ";".join(candidate.evidence.labels()),
        "confidence": candidate.confidence,
        "rating": candidate.rating.label,
        "removal_action": candidate.removal_action.value,
    }


def write_reports(
    candidates: list[Candidate],
    *,
    json_path: Path | None,
    csv_path: Path | None,
) -> None:
    """Write candidate list to JSON and/or CSV report files."""
    rows = [candidate_row(c) for c in candidates]
    if json_path:
        json_path.parent.mkdir(parents=True, exist_ok=True)
        json_rows = [dict(row, evidence=row["evidence"].split(";") if row["evidence"] else []) for row in rows]
        json_path.write_text(json.dumps(json_rows, indent=2), encoding="utf-8")
    if csv_path:
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        with csv_path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.DictWriter(handle, fieldnames=REPORT_FIELDS)
            writer.writeheader()
            writer.writerows(rows)


def print_applications(applications: list[ApplicationDescriptor]) -> None:
    for app in applications:
        location = app.install_location or "-"
        print(f"{app.display_name:40} {location}")


def print_candidates_report(application: ApplicationDescriptor, candidates: list[Candidate]) -> None:
    """Print candidate list and per-kind summary for one application."""
    print(f"\n{application.display_name}: {len(candidates)} leftover candidate(s)")
    for candidate in candidates:
        print(
            f"- [{candidate.rating.label:12}] {candidate.full_path} "
            f"(score {candidate.confidence}, {', '.join(candidate.evidence.labels())})"
        )
    if not candidates:
        return
    print("  Per-kind totals:")
    for kind, count, total in summarise(candidates):
        print(f"    {kind:16} count={count:4d} confidence={total}")
