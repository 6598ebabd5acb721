"""
Global pytest configuration and fixtures.
"""
import datetime as dt
import os
from decimal import Decimal
from typing import Dict

import pytest

from src.config import InvoicingConfig, reload_config
from src.models import Client, Employee, Timesheet


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        'COMPANY_NAME': 'Test Staffing Co',
        'COMPANY_ADDRESS_LINE1': '1 Test Street',
        'COMPANY_ADDRESS_LINE2': 'Testville, TS 00000',
        'PAYMENT_TERMS_DAYS': '30',
        'DEFAULT_PAGE_SIZE': '10',
        'ENVIRONMENT': 'testing',
        'DEBUG': 'false',
        'LOG_LEVEL': 'DEBUG'
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch, tmp_path):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)
    monkeypatch.setenv('INVOICE_OUTPUT_DIR', str(tmp_path / 'invoices'))
    monkeypatch.delenv('SEED_DATA_FILE', raising=False)

    # Clear the global config to force reload with test values
    import src.config.settings
    src.config.settings._config = None

    yield test_env_vars

    # Clean up
    src.config.settings._config = None


@pytest.fixture
def test_config(mock_env) -> InvoicingConfig:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def sample_clients():
    """Two clients, one without an email."""
    return [
        Client(id='client-1', name='Acme Corporation', email='billing@acme.com'),
        Client(id='client-2', name='Globex Industries'),
    ]


@pytest.fixture
def sample_employees():
    """Three employees across two clients."""
    return [
        Employee(id='emp-1', name='John Doe', rate=Decimal('50'), client_id='client-1'),
        Employee(id='emp-2', name='Jane Smith', rate=Decimal('65'), client_id='client-1'),
        Employee(id='emp-3', name='Bob Johnson', rate=Decimal('45'), client_id='client-2'),
    ]


@pytest.fixture
def sample_week():
    """Week-ending date the sample timesheets belong to."""
    return dt.date(2023, 3, 17)


@pytest.fixture
def sample_timesheets(sample_week):
    """Timesheets for the sample week; emp-3 has not submitted."""
    submitted = dt.datetime(2023, 3, 17, 17, 0, tzinfo=dt.timezone.utc)
    return [
        Timesheet(
            id='ts-1', employee_id='emp-1', week_ending=sample_week,
            hours=Decimal('40'), status='approved', submitted_at=submitted,
        ),
        Timesheet(
            id='ts-2', employee_id='emp-2', week_ending=sample_week,
            hours=Decimal('30'), status='pending',
            submitted_at=submitted + dt.timedelta(hours=1),
        ),
        Timesheet(
            id='ts-3', employee_id='emp-1', week_ending=sample_week - dt.timedelta(days=7),
            hours=Decimal('38'), status='approved',
            submitted_at=submitted - dt.timedelta(days=7),
        ),
    ]


@pytest.fixture(autouse=True)
def cleanup_test_files():
    """Clean up any test files created during testing."""
    yield

    # Remove test coverage files in case they're created
    test_files = ['coverage.xml', '.coverage']
    for file in test_files:
        if os.path.exists(file):
            os.remove(file)


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
    config.addinivalue_line(
        "markers", "pdf: mark test as rendering a PDF"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        # Add unit marker for tests in tests/unit/
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Add pdf marker for tests that render invoices
        if "pdf" in item.name.lower():
            item.add_marker(pytest.mark.pdf)
