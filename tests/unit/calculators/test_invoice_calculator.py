"""Unit tests for invoice amount calculations."""

import datetime as dt
from decimal import Decimal

import pytest

from src.calculators.invoice_calculator import (
    calculate_invoice_total,
    calculate_line_amount,
    index_by_id,
    resolve_lines,
)
from src.models import Employee, Timesheet


@pytest.fixture
def employees_by_id():
    return index_by_id(
        [
            Employee(id="emp-1", name="John Doe", rate=50, client_id="client-1"),
            Employee(id="emp-2", name="Jane Smith", rate=65, client_id="client-1"),
        ]
    )


@pytest.fixture
def timesheets_by_id():
    submitted = dt.datetime(2023, 3, 15, tzinfo=dt.timezone.utc)
    return index_by_id(
        [
            Timesheet(id="ts-1", employee_id="emp-1", week_ending="2023-03-10",
                      hours=40, status="approved", submitted_at=submitted),
            Timesheet(id="ts-2", employee_id="emp-2", week_ending="2023-03-10",
                      hours=30, status="approved", submitted_at=submitted),
            Timesheet(id="ts-3", employee_id="emp-7", week_ending="2023-03-10",
                      hours=10, status="approved", submitted_at=submitted),
        ]
    )


class TestLineAmount:
    """Test line amount calculation."""

    def test_hours_times_rate(self):
        """Test a basic line amount."""
        assert calculate_line_amount(Decimal("38"), Decimal("65")) == Decimal("2470")

    def test_fractional_amount_is_exact(self):
        """Test that fractional hours do not drift."""
        assert calculate_line_amount(Decimal("37.5"), Decimal("33.33")) == Decimal("1249.875")


class TestInvoiceTotal:
    """Test invoice total calculation."""

    def test_total_of_two_timesheets(self, timesheets_by_id, employees_by_id):
        """Test 40h at 50 plus 30h at 65."""
        total = calculate_invoice_total(["ts-1", "ts-2"], timesheets_by_id, employees_by_id)
        assert total == Decimal("3950")

    def test_unknown_timesheet_contributes_zero(self, timesheets_by_id, employees_by_id):
        """Test that missing timesheet ids are skipped."""
        total = calculate_invoice_total(["ts-1", "ts-404"], timesheets_by_id, employees_by_id)
        assert total == Decimal("2000")

    def test_unknown_employee_contributes_zero(self, timesheets_by_id, employees_by_id):
        """Test that timesheets of unknown employees are skipped."""
        total = calculate_invoice_total(["ts-3"], timesheets_by_id, employees_by_id)
        assert total == Decimal("0")

    def test_unresolved_ids_are_logged(self, timesheets_by_id, employees_by_id, caplog):
        """Test that every skipped id produces a warning."""
        with caplog.at_level("WARNING"):
            resolve_lines(["ts-404", "ts-3"], timesheets_by_id, employees_by_id)

        assert "ts-404" in caplog.text
        assert "emp-7" in caplog.text


class TestResolveLines:
    """Test line resolution."""

    def test_lines_keep_invoice_order(self, timesheets_by_id, employees_by_id):
        """Test that lines follow the given id order."""
        lines = resolve_lines(["ts-2", "ts-1"], timesheets_by_id, employees_by_id)

        assert [line.timesheet.id for line in lines] == ["ts-2", "ts-1"]
        assert [line.amount for line in lines] == [Decimal("1950"), Decimal("2000")]
        assert lines[0].employee.name == "Jane Smith"
