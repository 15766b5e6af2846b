"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path
from typing import Any

import pytest

from obrafin.core.config import reload_config
from obrafin.core.state import LedgerState
from tests.fixtures.ledger_data import synthetic_state_dict, write_synthetic_state


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def sample_state_dict() -> dict[str, Any]:
    """Synthetic ledger state in the host's JSON shape."""
    return synthetic_state_dict()


@pytest.fixture
def sample_state(sample_state_dict) -> LedgerState:
    """Synthetic ledger state as a snapshot."""
    return LedgerState.from_dict(sample_state_dict)


@pytest.fixture
def state_file(tmp_path) -> Path:
    """Synthetic ledger state written to a state.json file."""
    return write_synthetic_state(tmp_path / "state.json")


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests don't touch real ledger data
    monkeypatch.setenv("OBRAFIN_ENV", "test")
    monkeypatch.setenv("OBRAFIN_DATA_DIR", str(tmp_path / "obrafin_data"))
    monkeypatch.delenv("OBRAFIN_RECONCILE_TOLERANCE_DAYS", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    reload_config()


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for peso handling and rounding")
    config.addinivalue_line("markers", "ledger: Tests for cash projection, cashflow and state commands")
    config.addinivalue_line("markers", "bank: Tests for statement import and reconciliation")
    config.addinivalue_line("markers", "tax: Tests for IVA, RUT and document validation")
    config.addinivalue_line("markers", "projects: Tests for payment plans, profitability and alerts")
    config.addinivalue_line("markers", "purchasing: Tests for vendors, purchase orders and quotes")
    config.addinivalue_line("markers", "slow: Tests that take significant time to run")
