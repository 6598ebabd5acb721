"""Built-in sample dataset.

Three clients, five employees, eight timesheets spread over the current and
the previous week, and three invoices. Week-ending dates are relative to
``today`` so the default view (selected week = today) always has data.
"""

import datetime as dt
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from src.models.client import Client, Employee
from src.models.invoice import Invoice
from src.models.timesheet import Timesheet


@dataclass
class Dataset:
    """All records a session starts with."""

    clients: List[Client] = field(default_factory=list)
    employees: List[Employee] = field(default_factory=list)
    timesheets: List[Timesheet] = field(default_factory=list)
    invoices: List[Invoice] = field(default_factory=list)


def build_sample_dataset(today: Optional[dt.date] = None) -> Dataset:
    """Build the sample dataset relative to ``today``.

    Example:
        >>> data = build_sample_dataset(dt.date(2023, 3, 24))
        >>> data.invoices[0].total_amount
        Decimal('3970')
    """
    current_week = today or dt.date.today()
    last_week = current_week - dt.timedelta(days=7)

    clients = [
        Client(id="client-1", name="Acme Corporation", email="billing@acme.com"),
        Client(id="client-2", name="Globex Industries", email="accounts@globex.com"),
        Client(id="client-3", name="Stark Enterprises", email="finance@stark.com"),
    ]

    employees = [
        Employee(id="emp-1", name="John Doe", rate=50, client_id="client-1"),
        Employee(id="emp-2", name="Jane Smith", rate=65, client_id="client-1"),
        Employee(id="emp-3", name="Bob Johnson", rate=45, client_id="client-2"),
        Employee(id="emp-4", name="Alice Williams", rate=55, client_id="client-2"),
        Employee(id="emp-5", name="Michael Brown", rate=70, client_id="client-3"),
    ]

    rows = [
        ("ts-1", "emp-1", last_week, 40, "approved", "Approved on time", "2023-03-15T14:30:00Z"),
        ("ts-2", "emp-2", last_week, 38, "approved", None, "2023-03-15T16:45:00Z"),
        ("ts-3", "emp-1", current_week, 42, "pending", None, "2023-03-22T09:15:00Z"),
        ("ts-4", "emp-3", last_week, 35, "approved", None, "2023-03-14T11:20:00Z"),
        (
            "ts-5",
            "emp-4",
            last_week,
            42,
            "rejected",
            "Hours exceed contract limit",
            "2023-03-15T10:10:00Z",
        ),
        ("ts-6", "emp-3", current_week, 38, "pending", None, "2023-03-22T08:30:00Z"),
        ("ts-7", "emp-5", last_week, 45, "approved", None, "2023-03-15T15:00:00Z"),
        ("ts-8", "emp-5", current_week, 40, "pending", None, "2023-03-22T14:25:00Z"),
    ]
    timesheets = [
        Timesheet(
            id=ts_id,
            employee_id=employee_id,
            week_ending=week_ending,
            hours=hours,
            status=status,
            comments=comments,
            submitted_at=submitted_at,
        )
        for ts_id, employee_id, week_ending, hours, status, comments, submitted_at in rows
    ]

    period_start = min(dt.date(2023, 3, 8), last_week)
    invoices = [
        Invoice(
            id="inv-1",
            client_id="client-1",
            timesheets=["ts-1", "ts-2"],
            total_amount=Decimal("3970"),
            status="sent",
            created_at="2023-03-16T10:00:00Z",
            period_start=period_start,
            period_end=last_week,
        ),
        Invoice(
            id="inv-2",
            client_id="client-2",
            timesheets=["ts-4"],
            total_amount=Decimal("1575"),
            status="paid",
            created_at="2023-03-16T11:30:00Z",
            period_start=period_start,
            period_end=last_week,
        ),
        Invoice(
            id="inv-3",
            client_id="client-3",
            timesheets=["ts-7"],
            total_amount=Decimal("3150"),
            status="draft",
            created_at="2023-03-16T14:15:00Z",
            period_start=period_start,
            period_end=last_week,
        ),
    ]

    return Dataset(
        clients=clients, employees=employees, timesheets=timesheets, invoices=invoices
    )
