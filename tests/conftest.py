"""
Pytest configuration and shared fixtures for Merkle forest tests.

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

identity_digest = _common.identity_digest
letters = _common.letters
make_forest = _common.make_forest


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def identity():
    """Provide the identity digest stub."""
    return identity_digest


@pytest.fixture
def scenario_forest():
    """Forest over [a, b, a, a, c, d] with the identity digest."""
    return make_forest([b"a", b"b", b"a", b"a", b"c", b"d"])


@pytest.fixture
def clean_env(monkeypatch):
    """Remove FOREST_* variables so tests see default configuration."""
    for var in ("FOREST_HASH_ALGORITHM", "FOREST_LOG_LEVEL", "FOREST_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
