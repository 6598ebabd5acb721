"""Timesheet collection service.

This module owns the timesheet, employee and client collections of a
session, the session user and the selected view parameters. It exposes each
collection and every pipeline stage as an observable store and implements
the timesheet mutators.
"""

import datetime as dt
import logging
import uuid
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Tuple, Union

from pydantic import ValidationError

from src.aggregators.timesheet_pipeline import (
    UNKNOWN_EMPLOYEE,
    apply_filters,
    filter_by_week,
    find_missing_employees,
    paginate,
    sort_timesheets,
    total_pages,
)
from src.config.settings import InvoicingConfig, get_config
from src.errors import InvalidParameterError, describe_validation_error
from src.models.client import Client, Employee
from src.models.query import TimesheetQuery
from src.models.timesheet import Timesheet
from src.models.user import AppUser
from src.services.reactive_store import DerivedStore, WritableStore
from src.utils.logging_utils import log_function_call

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "Unknown Client"

# Fields a content update may not touch
_IMMUTABLE_FIELDS = {"id", "submitted_at"}


def _generate_timesheet_id() -> str:
    return f"ts-{uuid.uuid4().hex[:12]}"


class TimesheetService:
    """Holds timesheet data for a session and derives the reviewer's view.

    Raw collections are tuples replaced on every write. Derived stores are
    recomputed from the current values whenever they are read, and pushed to
    subscribers whenever an upstream store changes.

    Attributes:
        clients: Store of all clients
        employees: Store of all employees
        timesheets: Store of all timesheets
        current_user: Store of the session user
        query: Store of the selected filter/sort/page parameters
        filtered: Role/status/employee/client filtered timesheets
        by_week: Filtered timesheets of the selected week, sorted
        paginated: Current page of ``by_week``
        missing: Employees without a timesheet in the selected week
        total_pages: Number of pages of ``by_week``

    Example:
        >>> service = TimesheetService(clients, employees, timesheets)
        >>> service.set_query(selected_week=dt.date(2023, 3, 17))
        >>> [ts.id for ts in service.paginated.get()]
        ['ts-7', 'ts-5', 'ts-4', 'ts-2', 'ts-1']
    """

    def __init__(
        self,
        clients: Iterable[Client] = (),
        employees: Iterable[Employee] = (),
        timesheets: Iterable[Timesheet] = (),
        user: Optional[AppUser] = None,
        query: Optional[TimesheetQuery] = None,
        settings: Optional[InvoicingConfig] = None,
    ):
        settings = settings or get_config()

        self.clients: WritableStore[Tuple[Client, ...]] = WritableStore(
            "clients", tuple(clients)
        )
        self.employees: WritableStore[Tuple[Employee, ...]] = WritableStore(
            "employees", tuple(employees)
        )
        self.timesheets: WritableStore[Tuple[Timesheet, ...]] = WritableStore(
            "timesheets", tuple(timesheets)
        )
        self.current_user: WritableStore[AppUser] = WritableStore(
            "current_user", user or AppUser(role="admin")
        )
        self.query: WritableStore[TimesheetQuery] = WritableStore(
            "query", query or TimesheetQuery(page_size=settings.default_page_size)
        )

        self.filtered = DerivedStore(
            "filtered",
            [self.timesheets, self.current_user, self.employees, self.query],
            lambda timesheets, user, employees, query: apply_filters(
                timesheets, employees, user, query
            ),
        )
        self.by_week = DerivedStore(
            "by_week",
            [self.filtered, self.employees, self.query],
            lambda filtered, employees, query: sort_timesheets(
                filter_by_week(filtered, query.selected_week),
                employees,
                query.sort_field,
                query.sort_direction,
            ),
        )
        self.missing = DerivedStore(
            "missing",
            [self.employees, self.by_week, self.query],
            lambda employees, by_week, query: find_missing_employees(
                by_week, employees, query.selected_week
            ),
        )
        self.paginated = DerivedStore(
            "paginated",
            [self.by_week, self.query],
            lambda by_week, query: paginate(by_week, query.page, query.page_size),
        )
        self.total_pages = DerivedStore(
            "total_pages",
            [self.by_week, self.query],
            lambda by_week, query: total_pages(len(by_week), query.page_size),
        )

        logger.info(
            f"Timesheet service initialized with {len(self.timesheets.get())} "
            f"timesheets, {len(self.employees.get())} employees, "
            f"{len(self.clients.get())} clients"
        )

    # ------------------------------------------------------------------
    # Session and view parameters
    # ------------------------------------------------------------------

    def set_user(self, user: AppUser) -> None:
        """Replace the session user."""
        logger.info(f"Session user set to role={user.role}, client={user.client_id}")
        self.current_user.set(user)

    def set_query(self, **changes: Any) -> TimesheetQuery:
        """Change some view parameters, keeping the others.

        Raises:
            InvalidParameterError: If a value is invalid or a name is unknown
        """
        merged = {**self.query.get().model_dump(), **changes}
        try:
            query = TimesheetQuery.model_validate(merged)
        except ValidationError as e:
            raise InvalidParameterError(
                f"Invalid view parameters: {describe_validation_error(e)}"
            ) from e

        self.query.set(query)
        return query

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_timesheet(self, timesheet_id: str) -> Optional[Timesheet]:
        return next((ts for ts in self.timesheets.get() if ts.id == timesheet_id), None)

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        return next((emp for emp in self.employees.get() if emp.id == employee_id), None)

    def get_client(self, client_id: str) -> Optional[Client]:
        return next((c for c in self.clients.get() if c.id == client_id), None)

    def get_employee_name(self, employee_id: str) -> str:
        """Employee name, or "Unknown Employee" when the id is unknown."""
        employee = self.get_employee(employee_id)
        return employee.name if employee else UNKNOWN_EMPLOYEE

    def get_client_name(self, client_id: str) -> str:
        """Client name, or "Unknown Client" when the id is unknown."""
        client = self.get_client(client_id)
        return client.name if client else UNKNOWN_CLIENT

    def get_client_for_employee(self, employee_id: str) -> Optional[Client]:
        """Client an employee is billed to, or None if either is unknown."""
        employee = self.get_employee(employee_id)
        if employee is None:
            return None
        return self.get_client(employee.client_id)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    @log_function_call(include_args=True, level="DEBUG")
    def create_timesheet(
        self,
        employee_id: str,
        week_ending: Union[dt.date, str],
        hours: Union[Decimal, int, float, str],
        status: str = "pending",
        comments: Optional[str] = None,
    ) -> str:
        """Record a new timesheet submission.

        Returns:
            The generated timesheet id

        Raises:
            InvalidParameterError: If hours are negative, the status is
                unknown or the date cannot be parsed
        """
        try:
            timesheet = Timesheet(
                id=_generate_timesheet_id(),
                employee_id=employee_id,
                week_ending=week_ending,
                hours=hours,
                status=status,
                comments=comments,
                submitted_at=dt.datetime.now(dt.timezone.utc),
            )
        except (ValidationError, ValueError) as e:
            detail = describe_validation_error(e) if isinstance(e, ValidationError) else e
            raise InvalidParameterError(f"Invalid timesheet: {detail}") from e

        if self.get_employee(employee_id) is None:
            logger.warning(f"Timesheet {timesheet.id} references unknown employee '{employee_id}'")

        self.timesheets.update(lambda items: items + (timesheet,))
        logger.info(
            f"Created timesheet {timesheet.id} for {employee_id}, "
            f"week ending {timesheet.week_ending}, {timesheet.hours} hours"
        )
        return timesheet.id

    def update_timesheet(self, timesheet_id: str, **changes: Any) -> Optional[Timesheet]:
        """Apply a partial update to a timesheet.

        Returns:
            The updated timesheet, or None if the id is unknown

        Raises:
            InvalidParameterError: If a change is invalid or touches id or
                submitted_at
        """
        forbidden = _IMMUTABLE_FIELDS & set(changes)
        if forbidden:
            raise InvalidParameterError(
                f"Cannot change {', '.join(sorted(forbidden))} of a timesheet"
            )

        current = self.get_timesheet(timesheet_id)
        if current is None:
            logger.warning(f"Timesheet '{timesheet_id}' not found; update ignored")
            return None

        try:
            updated = Timesheet.model_validate({**current.model_dump(), **changes})
        except ValidationError as e:
            raise InvalidParameterError(
                f"Invalid update for timesheet {timesheet_id}: "
                f"{describe_validation_error(e)}"
            ) from e

        self.timesheets.update(
            lambda items: tuple(updated if ts.id == timesheet_id else ts for ts in items)
        )
        logger.info(f"Updated timesheet {timesheet_id}: {sorted(changes)}")
        return updated

    def update_timesheet_status(
        self, timesheet_id: str, status: str, comments: Optional[str] = None
    ) -> Optional[Timesheet]:
        """Set a timesheet's review status.

        Existing comments are kept unless new, non-empty comments are given.
        Setting the status a timesheet already has leaves it unchanged.
        """
        changes: dict = {"status": status}
        if comments:
            changes["comments"] = comments
        return self.update_timesheet(timesheet_id, **changes)

    # ------------------------------------------------------------------
    # Convenience reads
    # ------------------------------------------------------------------

    def employees_of_client(self, client_id: str) -> List[Employee]:
        return [emp for emp in self.employees.get() if emp.client_id == client_id]

    def approved_timesheets_for_client(
        self, client_id: str, period_start: dt.date, period_end: dt.date
    ) -> List[Timesheet]:
        """Approved timesheets of a client's employees within a period.

        Used to pick invoice lines when no explicit ids are given.
        """
        employee_ids = {emp.id for emp in self.employees_of_client(client_id)}
        return [
            ts
            for ts in self.timesheets.get()
            if ts.employee_id in employee_ids
            and ts.status == "approved"
            and period_start <= ts.week_ending <= period_end
        ]
