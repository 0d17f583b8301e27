"""Tests for leftover_junk/matching.py module."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from leftover_junk.filesystem import FileSystem, SnapshotFileSystem
from leftover_junk.matching import (  # pylint: disable=no-name-in-module
    matches,
    matches_executable,
    matches_path_or_executable,
    normalize_path,
    parent_directory,
)
from tests.assertions import assert_equal


def test_normalize_path_trims_whitespace_and_trailing_separators():
    """Test normalization of surrounding noise."""
    assert_equal(normalize_path("  C:\\App\\  "), "C:\\App")
    assert_equal(normalize_path("C:/App//"), "C:/App")
    assert_equal(normalize_path(None), "")
    assert_equal(normalize_path(42), "")


def test_normalize_path_applies_nfc():
    """Test that decomposed characters compare equal to composed ones."""
    assert_equal(normalize_path("C:\\Cafe\u0301"), "C:\\Caf\u00e9")


@pytest.mark.parametrize(
    ("install", "value"),
    [
        ("C:\\App\\", "C:\\app"),
        ("C:\\App", "c:\\APP\\bin\\tool.exe"),
        ("C:\\Program Files\\FooApp", "C:\\Program Files\\FooApp\\"),
    ],
)
def test_matches_is_case_and_trailing_separator_insensitive(install, value):
    """Test prefix matching ignoring case and trailing separators."""
    assert matches(install, value)


@pytest.mark.parametrize("install", ["", "   ", None, "\\"])
def test_blank_install_path_never_matches(install):
    """Test that an empty install location matches nothing."""
    assert not matches(install, "C:\\App")


def test_matches_rejects_unrelated_and_non_string_values():
    """Test negative matches."""
    assert not matches("C:\\App", "D:\\App")
    assert not matches("C:\\App", "")
    assert not matches("C:\\App", 5)


def test_matches_executable_uses_parent_directory():
    """Test executable matching against the containing directory."""
    assert_equal(parent_directory("C:\\App\\bin\\app.exe"), "C:\\App\\bin")
    assert matches_executable("C:\\App", "C:\\App\\app.exe")
    assert not matches_executable("C:\\App\\bin", "C:\\App\\app.exe")
    assert not matches_executable("C:\\App", None)


def test_matches_path_or_executable_existing_file():
    """Test that an existing file is matched through its directory."""
    filesystem = SnapshotFileSystem(files=["C:\\App\\app.exe"])

    assert matches_path_or_executable("C:\\App", "C:\\App\\app.exe", filesystem)
    assert matches_path_or_executable("C:\\App", '"C:\\App\\app.exe"', filesystem)
    assert not matches_path_or_executable("C:\\App\\app.exe", "C:\\App\\app.exe", filesystem)


def test_matches_path_or_executable_directory_and_environment():
    """Test directory matching after environment expansion."""
    filesystem = SnapshotFileSystem(environ={"ProgramFiles": "C:\\Program Files"})

    assert matches_path_or_executable("C:\\Program Files\\FooApp", "%ProgramFiles%\\FooApp", filesystem)
    assert not matches_path_or_executable("C:\\Program Files\\FooApp", "%ProgramFiles%\\Other", filesystem)


def test_matches_path_or_executable_swallows_probe_errors():
    """Test that filesystem failures count as no match."""
    filesystem = MagicMock(spec=FileSystem)
    filesystem.expand_environment_variables.side_effect = lambda value: value
    filesystem.is_file.side_effect = OSError("device not ready")

    assert not matches_path_or_executable("C:\\App", "C:\\App\\app.exe", filesystem)
    assert not matches_path_or_executable("C:\\App", None, filesystem)
