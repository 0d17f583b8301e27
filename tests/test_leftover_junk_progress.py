"""Tests for leftover_junk/progress.py module."""

from __future__ import annotations

from unittest.mock import patch

from leftover_junk.progress import ProgressTracker  # pylint: disable=no-name-in-module


def test_update_throttles_until_interval(mock_print):
    """Test that intermediate updates wait for the interval."""
    with patch("leftover_junk.progress.time.time", side_effect=[100.0, 100.0, 100.1, 101.0]):
        tracker = ProgressTracker(total=3, label="Scanning applications", update_interval=0.5)
        tracker.update(1, "FooApp")
        tracker.update(2, "Bar Tool")

    mock_print.assert_called_once_with("\rScanning applications: 2/3 ( 66.7%) Bar Tool", end="", flush=True)


def test_update_always_prints_completion(mock_print):
    """Test that the final item is always shown."""
    with patch("leftover_junk.progress.time.time", side_effect=[100.0, 100.0, 100.1]):
        tracker = ProgressTracker(total=1, label="Scanning")
        tracker.update(1)

    mock_print.assert_called_once_with("\rScanning: 1/1 (100.0%)", end="", flush=True)


def test_finish_prints_newline(mock_print):
    """Test the closing newline."""
    ProgressTracker(total=0, label="Scanning").finish()

    mock_print.assert_called_once_with()
