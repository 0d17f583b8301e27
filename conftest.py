"""Pytest configuration and shared fixtures for the leftover scanner."""

# pylint: disable=wrong-import-position

import sys
from pathlib import Path
from unittest import mock

PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest


@pytest.fixture(autouse=True)
def isolated_env_file(tmp_path_factory, monkeypatch):
    """Auto-use fixture that points LEFTOVER_ENV_FILE at an empty .env file.

    Keeps a developer's ~/.env and LEFTOVER_* variables out of the tests.
    """
    env_file = tmp_path_factory.mktemp("env") / ".env"
    env_file.write_text("", encoding="utf-8")
    monkeypatch.setenv("LEFTOVER_ENV_FILE", str(env_file))
    for name in ("LEFTOVER_SNAPSHOT", "LEFTOVER_INCLUDE_WOW64", "LEFTOVER_REPORT_DIR"):
        monkeypatch.delenv(name, raising=False)
    yield str(env_file)


@pytest.fixture(name="mock_print")
def fixture_mock_print(monkeypatch):
    """Patch builtins.print and return the mock for assertions."""
    patched = mock.Mock()
    monkeypatch.setattr("builtins.print", patched)
    return patched
