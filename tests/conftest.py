"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import pytest
from pathlib import Path

from smsledger.core.models import RawMessage
from smsledger.storage import InMemoryRecordStore
from tests.fixtures.sms_samples import UPI_DEBIT_SMS, make_message


@pytest.fixture
def temp_dir(tmp_path) -> Path:
    """Temporary directory for test files."""
    return tmp_path


@pytest.fixture
def store() -> InMemoryRecordStore:
    """Empty in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture
def upi_debit_message() -> RawMessage:
    """The canonical UPI debit SMS, received 20-May-2025."""
    return make_message(UPI_DEBIT_SMS, "2025-05-20")


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests don't use real data
    monkeypatch.setenv('SMSLEDGER_ENV', 'test')
    monkeypatch.setenv('SMSLEDGER_DATA_DIR', str(tmp_path / 'smsledger_data'))
    monkeypatch.delenv('SMSLEDGER_STORE_FILE', raising=False)
    monkeypatch.delenv('SMSLEDGER_MAX_MESSAGES', raising=False)
    monkeypatch.delenv('SMSLEDGER_CARD_SENDERS', raising=False)
    monkeypatch.delenv('LOG_LEVEL', raising=False)

    # Every test loads configuration from its own environment
    monkeypatch.setattr('smsledger.core.config._config', None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for complete workflows"
    )
    config.addinivalue_line(
        "markers", "currency: Tests for rupee handling and precision"
    )
    config.addinivalue_line(
        "markers", "parsing: Tests for SMS categorization and field extraction"
    )
    config.addinivalue_line(
        "markers", "cards: Tests for credit-card statements and payments"
    )
    config.addinivalue_line(
        "markers", "matching: Tests for bill/payment reconciliation"
    )
    config.addinivalue_line(
        "markers", "storage: Tests for record stores and message sources"
    )
