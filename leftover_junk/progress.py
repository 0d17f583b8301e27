"""Console progress display for batch scans."""

from __future__ import annotations

import time


class ProgressTracker:
    """Tracks progress over a fixed number of items with time-based updates."""

    def __init__(self, total: int, label: str, update_interval: float = 0.5):
        self.total = total
        self.label = label
        self.update_interval = update_interval
        self.last_update = time.time()

    def update(self, current: int, detail: str | None = None) -> None:
        """Redraw the progress line when the interval has elapsed or the batch is complete."""
        now = time.time()
        if current == self.total or now - self.last_update >= self.update_interval:
            if self.total:
                pct = (current / self.total) * 100
                status = f"{current:,}/{self.total:,} ({pct:5.1f}%)"
            else:
                status = f"{current:,}"
            suffix = f" {detail}" if detail else ""
            print(f"\r{self.label}: {status}{suffix}", end="", flush=True)
            self.last_update = now

    def finish(self) -> None:
        """Print final newline to complete progress display."""
        print()
