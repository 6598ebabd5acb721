"""Timesheet filtering, sorting and pagination pipeline.

This module turns the full timesheet collection into the ordered page a
reviewer sees. The stages always run in the same order, because each later
stage works on the narrower result of the previous one:

1. Role filter (client users only see their own employees)
2. Status filter
3. Employee filter
4. Client filter (admin convenience filter)
5. Week filter
6. Sort
7. Paginate

Every stage is a pure function returning a new list; inputs are never
modified.
"""

import datetime as dt
import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from src.errors import InvalidParameterError
from src.models.client import Employee
from src.models.query import TimesheetQuery
from src.models.timesheet import Timesheet
from src.models.user import AppUser

logger = logging.getLogger(__name__)

UNKNOWN_EMPLOYEE = "Unknown Employee"


@dataclass
class TimesheetView:
    """All derived views of one pipeline run.

    Attributes:
        filtered: Timesheets after role/status/employee/client filtering
        by_week: Filtered timesheets of the selected week, sorted
        page_items: The requested page of ``by_week``
        missing: Employees without a timesheet in ``by_week``
        total_pages: Number of pages ``by_week`` spans

    Example:
        >>> view = build_timesheet_view(timesheets, employees, user, query)
        >>> [ts.id for ts in view.page_items]
        ['ts-3', 'ts-6']
    """

    filtered: List[Timesheet] = field(default_factory=list)
    by_week: List[Timesheet] = field(default_factory=list)
    page_items: List[Timesheet] = field(default_factory=list)
    missing: List[Employee] = field(default_factory=list)
    total_pages: int = 0


def _employee_ids_for_client(employees: Iterable[Employee], client_id: str) -> set:
    return {emp.id for emp in employees if emp.client_id == client_id}


def filter_by_role(
    timesheets: Sequence[Timesheet],
    employees: Sequence[Employee],
    user: AppUser,
) -> List[Timesheet]:
    """Restrict a client user to timesheets of that client's employees.

    Admin users are not restricted at this stage.
    """
    if user.role != "client" or not user.client_id:
        return list(timesheets)

    allowed = _employee_ids_for_client(employees, user.client_id)
    return [ts for ts in timesheets if ts.employee_id in allowed]


def filter_by_status(
    timesheets: Sequence[Timesheet], status_filter: str
) -> List[Timesheet]:
    """Keep timesheets with the given status; 'all' keeps everything."""
    if status_filter == "all":
        return list(timesheets)
    return [ts for ts in timesheets if ts.status == status_filter]


def filter_by_employee(
    timesheets: Sequence[Timesheet], employee_id: Optional[str]
) -> List[Timesheet]:
    """Keep timesheets of one employee; an empty id keeps everything."""
    if not employee_id:
        return list(timesheets)
    return [ts for ts in timesheets if ts.employee_id == employee_id]


def filter_by_client(
    timesheets: Sequence[Timesheet],
    employees: Sequence[Employee],
    user: AppUser,
    client_id: Optional[str],
) -> List[Timesheet]:
    """Keep timesheets of one client's employees.

    This is an optional admin filter; it is ignored for client users, whose
    scope is already fixed by ``filter_by_role``.
    """
    if user.role != "admin" or not client_id:
        return list(timesheets)

    allowed = _employee_ids_for_client(employees, client_id)
    return [ts for ts in timesheets if ts.employee_id in allowed]


def apply_filters(
    timesheets: Sequence[Timesheet],
    employees: Sequence[Employee],
    user: AppUser,
    query: TimesheetQuery,
) -> List[Timesheet]:
    """Run the role, status, employee and client filters in order."""
    filtered = filter_by_role(timesheets, employees, user)
    filtered = filter_by_status(filtered, query.status_filter)
    filtered = filter_by_employee(filtered, query.employee_filter)
    filtered = filter_by_client(filtered, employees, user, query.client_filter)

    logger.debug(
        f"Filtered {len(timesheets)} timesheets to {len(filtered)} "
        f"(role={user.role}, status={query.status_filter})"
    )
    return filtered


def filter_by_week(
    timesheets: Sequence[Timesheet], week_ending: dt.date
) -> List[Timesheet]:
    """Keep timesheets whose week-ending date equals ``week_ending``."""
    return [ts for ts in timesheets if ts.week_ending == week_ending]


def _sort_key(
    field_name: str, employees_by_id: Dict[str, Employee]
) -> Callable[[Timesheet], object]:
    if field_name == "employee":

        def employee_name(ts: Timesheet) -> str:
            employee = employees_by_id.get(ts.employee_id)
            return (employee.name if employee else UNKNOWN_EMPLOYEE).casefold()

        return employee_name
    if field_name == "hours":
        return lambda ts: ts.hours
    if field_name == "week_ending":
        return lambda ts: ts.week_ending
    if field_name == "status":
        return lambda ts: ts.status
    return lambda ts: ts.submitted_at


def sort_timesheets(
    timesheets: Sequence[Timesheet],
    employees: Sequence[Employee],
    sort_field: str,
    direction: str = "asc",
) -> List[Timesheet]:
    """Sort timesheets by one field.

    Supported fields are 'employee' (case-insensitive name), 'hours',
    'week_ending' and 'status'. Any other value orders by submission time.

    The ascending sort is stable. The descending order is the exact reverse
    of the ascending order, so reversing an ascending result always gives
    the descending one, ties included.

    Raises:
        InvalidParameterError: If direction is not 'asc' or 'desc'
    """
    if direction not in ("asc", "desc"):
        raise InvalidParameterError(
            f"Sort direction must be 'asc' or 'desc', got {direction!r}"
        )

    employees_by_id = {emp.id: emp for emp in employees}
    ordered = sorted(timesheets, key=_sort_key(sort_field, employees_by_id))

    if direction == "desc":
        ordered.reverse()
    return ordered


def paginate(
    timesheets: Sequence[Timesheet], page: int, page_size: int
) -> List[Timesheet]:
    """Return the 1-based ``page`` of ``timesheets``.

    Pages past the end are empty rather than an error.

    Raises:
        InvalidParameterError: If page or page_size is below 1
    """
    if page < 1:
        raise InvalidParameterError(f"page must be at least 1, got {page}")
    if page_size < 1:
        raise InvalidParameterError(f"page_size must be at least 1, got {page_size}")

    start = (page - 1) * page_size
    return list(timesheets[start : start + page_size])


def total_pages(item_count: int, page_size: int) -> int:
    """Number of pages needed for ``item_count`` items (0 when empty)."""
    if page_size < 1:
        raise InvalidParameterError(f"page_size must be at least 1, got {page_size}")
    return max(0, math.ceil(item_count / page_size))


def find_missing_employees(
    week_timesheets: Sequence[Timesheet],
    employees: Sequence[Employee],
    week_ending: dt.date,
) -> List[Employee]:
    """List employees that have no timesheet for ``week_ending``.

    ``week_timesheets`` is the filtered view, so the result follows the
    active role/status/employee/client filters: with a status filter of
    'approved', an employee whose timesheet is still pending counts as
    missing. The roster itself is not filtered.
    """
    submitted = {ts.employee_id for ts in week_timesheets if ts.week_ending == week_ending}
    return [emp for emp in employees if emp.id not in submitted]


def build_timesheet_view(
    timesheets: Sequence[Timesheet],
    employees: Sequence[Employee],
    user: AppUser,
    query: TimesheetQuery,
) -> TimesheetView:
    """Run the whole pipeline and return every derived view.

    Example:
        >>> query = TimesheetQuery(selected_week=dt.date(2023, 3, 17), page_size=2)
        >>> view = build_timesheet_view(timesheets, employees, AppUser(), query)
        >>> view.total_pages
        3
    """
    filtered = apply_filters(timesheets, employees, user, query)
    week = filter_by_week(filtered, query.selected_week)
    by_week = sort_timesheets(week, employees, query.sort_field, query.sort_direction)

    view = TimesheetView(
        filtered=filtered,
        by_week=by_week,
        page_items=paginate(by_week, query.page, query.page_size),
        missing=find_missing_employees(week, employees, query.selected_week),
        total_pages=total_pages(len(by_week), query.page_size),
    )

    logger.info(
        f"Timesheet view for week {query.selected_week}: {len(by_week)} rows, "
        f"page {query.page}/{view.total_pages}, {len(view.missing)} missing"
    )
    return view
