"""Shared fixtures for CLI tests."""

import json

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def seed_file(tmp_path):
    """Seed data with fixed dates: two clients, three employees, four timesheets."""
    document = {
        "clients": [
            {"id": "client-1", "name": "Acme Corporation", "email": "billing@acme.com"},
            {"id": "client-2", "name": "Globex Industries"},
        ],
        "employees": [
            {"id": "emp-1", "name": "John Doe", "rate": 50, "clientId": "client-1"},
            {"id": "emp-2", "name": "Jane Smith", "rate": 65, "clientId": "client-1"},
            {"id": "emp-3", "name": "Bob Johnson", "rate": 45, "clientId": "client-2"},
        ],
        "timesheets": [
            {"id": "ts-1", "employeeId": "emp-1", "weekEnding": "2023-03-17", "hours": 40,
             "status": "approved", "submittedAt": "2023-03-15T14:30:00Z"},
            {"id": "ts-2", "employeeId": "emp-2", "weekEnding": "2023-03-17", "hours": 38,
             "status": "approved", "submittedAt": "2023-03-15T16:45:00Z"},
            {"id": "ts-3", "employeeId": "emp-1", "weekEnding": "2023-03-24", "hours": 42,
             "status": "pending", "submittedAt": "2023-03-22T09:15:00Z"},
            {"id": "ts-4", "employeeId": "emp-3", "weekEnding": "2023-03-17", "hours": 35,
             "status": "rejected", "comments": "Over contract limit",
             "submittedAt": "2023-03-14T11:20:00Z"},
        ],
        "invoices": [
            {"id": "inv-1", "clientId": "client-1", "timesheets": ["ts-1", "ts-2"],
             "totalAmount": 3970, "status": "sent", "createdAt": "2023-03-16T10:00:00Z",
             "periodStart": "2023-03-06", "periodEnd": "2023-03-17"},
        ],
    }
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return str(path)
