"""Invoice amount calculations.

This module implements the monetary side of invoicing:
- Line amounts (hours x hourly rate)
- Resolution of invoice timesheet ids into billable lines
- Invoice totals over resolvable lines

Amounts are exact Decimal products; rounding to cents only happens when an
amount is displayed.

Unresolvable references (an id with no timesheet, or a timesheet whose
employee is unknown) are excluded from lines and totals alike, with a
warning logged for each.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping

from src.models.client import Employee
from src.models.timesheet import Timesheet

logger = logging.getLogger(__name__)


@dataclass
class ResolvedLine:
    """A timesheet paired with the employee whose rate bills it.

    Attributes:
        timesheet: The referenced timesheet
        employee: The employee who submitted it
        amount: hours x rate

    Example:
        >>> line = ResolvedLine(timesheet=ts, employee=emp, amount=Decimal("2000"))
        >>> line.amount
        Decimal('2000')
    """

    timesheet: Timesheet
    employee: Employee
    amount: Decimal


def calculate_line_amount(hours: Decimal, rate: Decimal) -> Decimal:
    """Calculate the billed amount for one timesheet.

    Example:
        >>> calculate_line_amount(Decimal("38"), Decimal("65"))
        Decimal('2470')
    """
    return hours * rate


def resolve_lines(
    timesheet_ids: Iterable[str],
    timesheets_by_id: Mapping[str, Timesheet],
    employees_by_id: Mapping[str, Employee],
) -> List[ResolvedLine]:
    """Resolve timesheet ids into billable lines, keeping the given order.

    Ids that do not resolve to both a timesheet and its employee are
    skipped.

    Args:
        timesheet_ids: Timesheet identifiers in invoice order
        timesheets_by_id: Lookup of all known timesheets
        employees_by_id: Lookup of all known employees

    Returns:
        One ResolvedLine per resolvable id
    """
    lines = []

    for ts_id in timesheet_ids:
        timesheet = timesheets_by_id.get(ts_id)
        if timesheet is None:
            logger.warning(f"Timesheet '{ts_id}' not found; excluded from invoice")
            continue

        employee = employees_by_id.get(timesheet.employee_id)
        if employee is None:
            logger.warning(
                f"Employee '{timesheet.employee_id}' of timesheet '{ts_id}' "
                f"not found; excluded from invoice"
            )
            continue

        lines.append(
            ResolvedLine(
                timesheet=timesheet,
                employee=employee,
                amount=calculate_line_amount(timesheet.hours, employee.rate),
            )
        )

    return lines


def calculate_invoice_total(
    timesheet_ids: Iterable[str],
    timesheets_by_id: Mapping[str, Timesheet],
    employees_by_id: Mapping[str, Employee],
) -> Decimal:
    """Sum hours x rate over the resolvable timesheet ids.

    Unresolvable ids contribute zero.

    Example:
        >>> calculate_invoice_total(["ts-1", "ts-2"], timesheets, employees)
        Decimal('4470')
    """
    lines = resolve_lines(timesheet_ids, timesheets_by_id, employees_by_id)
    return sum((line.amount for line in lines), Decimal("0"))


def index_by_id(records: Iterable) -> Dict[str, object]:
    """Build an id -> record lookup for any collection of records with ``id``."""
    return {record.id: record for record in records}
