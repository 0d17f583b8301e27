"""Shared pytest fixtures for test files."""

from __future__ import annotations

import pytest

from leftover_junk.applications import ApplicationDescriptor
from leftover_junk.config import build_scan_config
from leftover_junk.context import ScanContext
from leftover_junk.filesystem import SnapshotFileSystem
from tests.registry_fixtures import FOO_INSTALL_DIR, FOO_UNINSTALL_KEY


@pytest.fixture(name="app")
def fixture_app():
    """Descriptor of the application whose leftovers the tests look for."""
    return ApplicationDescriptor(
        display_name="FooApp",
        install_location=FOO_INSTALL_DIR,
        executable_path=FOO_INSTALL_DIR + r"\foo.exe",
        uninstall_key_path=FOO_UNINSTALL_KEY,
        publisher="Acme Corp",
    )


@pytest.fixture(name="filesystem")
def fixture_filesystem():
    """Snapshot filesystem holding the application's executable."""
    return SnapshotFileSystem(
        files=[FOO_INSTALL_DIR + r"\foo.exe"],
        environ={"ProgramFiles": r"C:\Program Files", "SystemRoot": r"C:\Windows"},
    )


@pytest.fixture(name="make_context")
def fixture_make_context(app, filesystem):
    """Factory building a ScanContext over a store, native roots only by default."""

    def _make(store, application=None, *, include_wow64=False, fs=None):
        return ScanContext(
            store=store,
            filesystem=fs or filesystem,
            config=build_scan_config(include_wow64),
            application=application or app,
        )

    return _make
