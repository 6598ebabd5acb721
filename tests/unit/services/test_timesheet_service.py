"""Unit tests for TimesheetService."""

import datetime as dt
from decimal import Decimal

import pytest

from src.data.sample_data import build_sample_dataset
from src.errors import InvalidParameterError
from src.models import AppUser
from src.services.timesheet_service import UNKNOWN_CLIENT, TimesheetService

CURRENT_WEEK = dt.date(2023, 3, 24)
LAST_WEEK = dt.date(2023, 3, 17)


@pytest.fixture
def service(test_config):
    data = build_sample_dataset(CURRENT_WEEK)
    service = TimesheetService(
        clients=data.clients,
        employees=data.employees,
        timesheets=data.timesheets,
        settings=test_config,
    )
    service.set_query(selected_week=LAST_WEEK)
    return service


def ids(items):
    return [ts.id for ts in items]


class TestDerivedViews:
    """Test the derived pipeline stores."""

    def test_default_view_sorted_by_week_desc(self, service):
        """Test the last-week view with the default sort."""
        assert ids(service.by_week.get()) == ["ts-7", "ts-5", "ts-4", "ts-2", "ts-1"]
        assert service.total_pages.get() == 1

    def test_missing_employees(self, service):
        """Test that everyone submitted for last week."""
        assert service.missing.get() == []
        service.set_query(selected_week=CURRENT_WEEK)
        assert [emp.id for emp in service.missing.get()] == ["emp-2", "emp-4"]

    def test_client_user_scope(self, service):
        """Test that switching to a client user narrows every view."""
        service.set_user(AppUser(role="client", client_id="client-1"))

        assert ids(service.filtered.get()) == ["ts-1", "ts-2", "ts-3"]
        assert ids(service.by_week.get()) == ["ts-2", "ts-1"]

    def test_pagination(self, service):
        """Test paging through the week."""
        service.set_query(page_size=2, sort_field="hours", sort_direction="asc")

        assert service.total_pages.get() == 3
        assert ids(service.paginated.get()) == ["ts-4", "ts-2"]
        service.set_query(page=3)
        assert ids(service.paginated.get()) == ["ts-7"]

    def test_set_query_keeps_other_parameters(self, service):
        """Test that a partial query change keeps the rest."""
        query = service.set_query(status_filter="approved")

        assert query.selected_week == LAST_WEEK
        assert "ts-5" not in ids(service.by_week.get())

    def test_set_query_rejects_invalid_values(self, service):
        """Test that invalid parameters raise and leave the query unchanged."""
        with pytest.raises(InvalidParameterError):
            service.set_query(page=0)
        with pytest.raises(InvalidParameterError):
            service.set_query(colour="blue")

        assert service.query.get().page == 1

    def test_subscribers_follow_mutations(self, service):
        """Test that a status change is pushed to the filtered view."""
        service.set_query(status_filter="pending", selected_week=CURRENT_WEEK)
        seen = []
        service.by_week.subscribe(lambda value: seen.append(ids(value)))

        service.update_timesheet_status("ts-3", "approved")

        assert seen[0] == ["ts-8", "ts-6", "ts-3"]
        assert seen[-1] == ["ts-8", "ts-6"]


class TestLookups:
    """Test lookups and name fallbacks."""

    def test_names(self, service):
        """Test name lookups with and without a match."""
        assert service.get_employee_name("emp-1") == "John Doe"
        assert service.get_employee_name("emp-404") == "Unknown Employee"
        assert service.get_client_name("client-404") == UNKNOWN_CLIENT

    def test_client_for_employee(self, service):
        """Test resolving an employee's client."""
        assert service.get_client_for_employee("emp-3").name == "Globex Industries"
        assert service.get_client_for_employee("emp-404") is None

    def test_approved_timesheets_for_client(self, service):
        """Test picking approved timesheets of one client in a period."""
        result = service.approved_timesheets_for_client("client-1", LAST_WEEK, CURRENT_WEEK)
        assert ids(result) == ["ts-1", "ts-2"]


class TestMutators:
    """Test timesheet creation and updates."""

    def test_create_timesheet(self, service):
        """Test that a new timesheet is pending and appended."""
        ts_id = service.create_timesheet("emp-2", CURRENT_WEEK, 37.5)
        created = service.get_timesheet(ts_id)

        assert ts_id.startswith("ts-")
        assert created.status == "pending"
        assert created.hours == Decimal("37.5")
        assert service.timesheets.get()[-1].id == ts_id

    def test_create_timesheet_ids_are_unique(self, service):
        """Test that generated ids do not repeat."""
        first = service.create_timesheet("emp-2", CURRENT_WEEK, 10)
        second = service.create_timesheet("emp-2", CURRENT_WEEK, 10)
        assert first != second

    def test_create_with_negative_hours_rejected(self, service):
        """Test that invalid submissions raise and store nothing."""
        before = len(service.timesheets.get())
        with pytest.raises(InvalidParameterError):
            service.create_timesheet("emp-2", CURRENT_WEEK, -4)
        assert len(service.timesheets.get()) == before

    def test_create_for_unknown_employee_is_allowed(self, service, caplog):
        """Test that unknown employees are warned about but stored."""
        with caplog.at_level("WARNING"):
            ts_id = service.create_timesheet("emp-404", CURRENT_WEEK, 8)

        assert service.get_timesheet(ts_id) is not None
        assert "emp-404" in caplog.text

    def test_update_timesheet(self, service):
        """Test a partial content update."""
        updated = service.update_timesheet("ts-3", hours=41, comments="Corrected")

        assert updated.hours == Decimal("41")
        assert updated.comments == "Corrected"
        assert service.get_timesheet("ts-3").status == "pending"

    def test_update_unknown_timesheet(self, service):
        """Test that updating an unknown id changes nothing."""
        before = service.timesheets.get()
        assert service.update_timesheet("ts-404", hours=1) is None
        assert service.timesheets.get() is before

    def test_update_immutable_fields_rejected(self, service):
        """Test that id and submission time cannot change."""
        with pytest.raises(InvalidParameterError):
            service.update_timesheet("ts-3", id="ts-99")

    def test_update_invalid_status_rejected(self, service):
        """Test that unknown statuses raise."""
        with pytest.raises(InvalidParameterError):
            service.update_timesheet_status("ts-3", "archived")

    def test_status_update_keeps_comments_without_new_ones(self, service):
        """Test that comments survive a status change without comments."""
        updated = service.update_timesheet_status("ts-1", "rejected")
        assert updated.comments == "Approved on time"

        updated = service.update_timesheet_status("ts-1", "rejected", "Wrong week")
        assert updated.comments == "Wrong week"

    def test_status_update_is_idempotent(self, service):
        """Test that setting the current status leaves the record equal."""
        before = service.get_timesheet("ts-1")
        after = service.update_timesheet_status("ts-1", "approved")
        assert after == before

    def test_snapshots_are_not_mutated(self, service):
        """Test that updates replace records instead of mutating them."""
        snapshot = service.timesheets.get()
        original = service.get_timesheet("ts-3")
        service.update_timesheet("ts-3", hours=10)

        assert original.hours == Decimal("42")
        assert snapshot[2].hours == Decimal("42")
