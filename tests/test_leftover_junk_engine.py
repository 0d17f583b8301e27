"""Tests for leftover_junk/engine.py module."""

from __future__ import annotations

import pytest

from leftover_junk.applications import ApplicationDescriptor
from leftover_junk.candidates import CandidateKind
from leftover_junk.config import FIREWALL_RULES_KEY, TRACING_KEY, build_scan_config
from leftover_junk.engine import JunkEngine  # pylint: disable=no-name-in-module
from leftover_junk.evidence import Evidence
from tests.assertions import assert_equal, assert_paths
from tests.registry_fixtures import FOO_INSTALL_DIR, FOO_UNINSTALL_KEY, foo_uninstall_values, make_store

MACHINE_CLSID = r"HKEY_LOCAL_MACHINE\SOFTWARE\Classes\CLSID"


def _engine(store, filesystem, include_wow64=False):
    return JunkEngine(store, filesystem, build_scan_config(include_wow64))


def test_engine_requires_store(filesystem):
    """Test constructor validation."""
    with pytest.raises(TypeError):
        JunkEngine(None, filesystem)


def test_find_junk_requires_descriptor(filesystem):
    """Test argument validation."""
    engine = _engine(make_store({}), filesystem)

    with pytest.raises(TypeError):
        engine.find_junk(None)
    with pytest.raises(TypeError):
        engine.find_junk({"display_name": "FooApp"})


def test_store_with_only_the_uninstall_entry(app, filesystem):
    """Test that a clean machine reports exactly the surviving registration."""
    store = make_store({FOO_UNINSTALL_KEY: foo_uninstall_values()})

    candidates = _engine(store, filesystem).find_junk(app)

    assert_equal(len(candidates), 1)
    assert_equal(candidates[0].full_path, FOO_UNINSTALL_KEY)
    assert_equal(candidates[0].evidence, {Evidence.IS_OWN_UNINSTALL_ENTRY})


def test_empty_store_yields_nothing(app, filesystem):
    """Test a store without any trace of the application."""
    assert_equal(_engine(make_store({}), filesystem).find_junk(app), [])


def test_full_scan_in_discovery_order(app, filesystem):
    """Test the composition of every strategy."""
    store = make_store(
        {
            FOO_UNINSTALL_KEY: foo_uninstall_values(),
            r"HKEY_LOCAL_MACHINE\SOFTWARE\FooApp": {"InstallDir": FOO_INSTALL_DIR},
            r"HKEY_CURRENT_USER\SOFTWARE\FooApp\Settings": {"Theme": "dark"},
            r"HKEY_LOCAL_MACHINE\SOFTWARE\Wow6432Node\FooApp": None,
            FIREWALL_RULES_KEY: {"{rule}": "v2.30|App=" + FOO_INSTALL_DIR + r"\foo.exe|Name=Foo|"},
            TRACING_KEY + r"\FooApp_RASAPI32": None,
            MACHINE_CLSID + r"\{class}\InprocServer32": {"": FOO_INSTALL_DIR + r"\foo.dll"},
        }
    )

    candidates = _engine(store, filesystem, include_wow64=True).find_junk(app)

    assert_paths(
        candidates,
        [
            FOO_UNINSTALL_KEY,
            r"HKEY_LOCAL_MACHINE\SOFTWARE\FooApp",
            r"HKEY_CURRENT_USER\SOFTWARE\FooApp",
            r"HKEY_LOCAL_MACHINE\SOFTWARE\Wow6432Node\FooApp",
            FIREWALL_RULES_KEY + r"\{rule}",
            TRACING_KEY + r"\FooApp_RASAPI32",
            MACHINE_CLSID + r"\{class}",
        ],
    )
    assert_equal(candidates[4].kind, CandidateKind.REGISTRY_VALUE)
    mirrored = candidates[1:4]
    expected = {Evidence.NAME_EXACT_MATCH, Evidence.PATH_PREFIX_MATCH, Evidence.EXPLICIT_PATH_REFERENCE_MATCH}
    for candidate in mirrored:
        assert_equal(candidate.evidence, expected)


def test_full_paths_are_unique(app, filesystem):
    """Test that no location is reported twice even when strategies overlap."""
    store = make_store(
        {
            FOO_UNINSTALL_KEY: foo_uninstall_values(),
            r"HKEY_LOCAL_MACHINE\SOFTWARE\FooApp": {"InstallDir": FOO_INSTALL_DIR},
            r"HKEY_CURRENT_USER\SOFTWARE\FooApp": {"InstallDir": FOO_INSTALL_DIR},
        }
    )
    engine = _engine(store, filesystem)

    candidates = engine.find_junk(app)
    identities = [candidate.identity for candidate in candidates]

    assert_equal(len(identities), len(set(identities)))
    assert_equal(engine.find_junk(app), candidates)


def test_peer_applications_do_not_change_results(app, filesystem):
    """Test that peers are accepted without influencing matching."""
    store = make_store({r"HKEY_LOCAL_MACHINE\SOFTWARE\FooApp": None})
    engine = _engine(store, filesystem)
    peer = ApplicationDescriptor("FooApp Helper", install_location=FOO_INSTALL_DIR + r"\Helper")

    assert_equal(engine.find_junk(app, [peer]), engine.find_junk(app))
