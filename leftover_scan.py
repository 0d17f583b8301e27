#!/usr/bin/env python3
"""
Report registry leftovers of uninstalled Windows applications.

Looks for keys and values under the software roots, firewall rules, tracing
keys and COM registrations that still point at an application, and ranks them
by confidence. Candidates are reported only; nothing is deleted.

This is a thin wrapper around the leftover_junk package.
"""
from __future__ import annotations

from leftover_junk.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
