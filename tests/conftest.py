"""
Shared test fixtures and helpers for the autowire test suite.
"""

import sys
from pathlib import Path

import pytest

# Sample applications scanned by the tests live in tests/fixtures.
FIXTURES_DIR = Path(__file__).parent / "fixtures"
collect_ignore = ["fixtures"]
if str(FIXTURES_DIR) not in sys.path:
    sys.path.insert(0, str(FIXTURES_DIR))

# Import fixtures so pytest can discover them
from autowire.testing import (  # noqa: F401,E402
    injector,
    environment,
    bootstrap,
    recorder,
)
from autowire.diagnostics import RegistrationDiagnostics  # noqa: E402


@pytest.fixture
def diagnostics(recorder):
    """Diagnostics sink that only records, without the logging listener."""
    return RegistrationDiagnostics([recorder])


@pytest.fixture
def clean_env(monkeypatch):
    """Strip AUTOWIRE_* variables from the process environment."""
    import os
    for key in list(os.environ):
        if key.startswith("AUTOWIRE_"):
            monkeypatch.delenv(key)
    return monkeypatch
