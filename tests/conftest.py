"""
Pytest configuration and shared fixtures for airdrop tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_schedule = _common.make_schedule
make_claims = _common.make_claims
make_initialized_machine = _common.make_initialized_machine
make_registered_machine = _common.make_registered_machine


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def schedule():
    """Provide the default half-instant, half-linear schedule."""
    return make_schedule()


@pytest.fixture
def claims():
    """Provide built claims for the default recipient list."""
    return make_claims()


@pytest.fixture
def initialized_machine():
    """Provide an in-memory state machine after initialize."""
    return make_initialized_machine()


@pytest.fixture
def registered_machine():
    """Provide (machine, claims) with the default root registered."""
    return make_registered_machine()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep AIRDROP_* variables from the developer's shell out of tests."""
    for name in ("AIRDROP_LEDGER_PATH", "AIRDROP_LOG_LEVEL", "AIRDROP_LOG_FILE",
                 "AIRDROP_API_HOST", "AIRDROP_API_PORT"):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


# =============================================================================
# Test Helpers (available to all tests via fixtures)
# =============================================================================

@pytest.fixture
def assert_check_passed():
    """Helper to assert a CheckResult passed."""
    def _assert(check, check_id: str):
        assert check.check_id == check_id, f"Expected check '{check_id}', got '{check.check_id}'"
        assert check.ok, f"Check '{check_id}' failed: {check.message}"
    return _assert


@pytest.fixture
def assert_check_failed():
    """Helper to assert a CheckResult failed."""
    def _assert(check, check_id: str):
        assert check.check_id == check_id, f"Expected check '{check_id}', got '{check.check_id}'"
        assert not check.ok, f"Check '{check_id}' unexpectedly passed"
    return _assert
