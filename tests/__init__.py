"""Test suite package marker."""

import pytest

# Ensure helper modules used as pytest plugins are assertion-rewritten before import.
pytest.register_assert_rewrite("tests.assertions")
pytest.register_assert_rewrite("tests.registry_fixtures")
