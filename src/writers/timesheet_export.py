"""Timesheet view export.

This module turns a list of timesheets (usually one page or one week of the
pipeline output) into a pandas DataFrame with resolved employee and client
names, ready to print or save as CSV.
"""

import logging
from pathlib import Path
from typing import Dict, List, Sequence, Union

import pandas as pd

from src.calculators.invoice_calculator import calculate_line_amount
from src.models.client import Client, Employee
from src.models.timesheet import Timesheet

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "Timesheet ID",
    "Employee",
    "Client",
    "Week Ending",
    "Hours",
    "Rate",
    "Amount",
    "Status",
    "Comments",
    "Submitted At",
]


class TimesheetExporter:
    """Build export DataFrames for timesheets.

    Rows keep the order of the timesheets passed in, so an exported page
    matches what the reviewer sees. Unknown employees or clients are shown
    as "Unknown Employee"/"Unknown Client" with empty rate and amount.

    Example:
        >>> exporter = TimesheetExporter(employees, clients)
        >>> df = exporter.to_dataframe(view.by_week)
        >>> list(df.columns)[:3]
        ['Timesheet ID', 'Employee', 'Client']
    """

    def __init__(self, employees: Sequence[Employee], clients: Sequence[Client]):
        self._employees: Dict[str, Employee] = {emp.id: emp for emp in employees}
        self._clients: Dict[str, Client] = {c.id: c for c in clients}

    def to_dataframe(self, timesheets: Sequence[Timesheet]) -> pd.DataFrame:
        """Build a DataFrame with one row per timesheet."""
        if not timesheets:
            return pd.DataFrame(columns=EXPORT_COLUMNS)

        rows = [self._build_row(ts) for ts in timesheets]
        return pd.DataFrame(rows, columns=EXPORT_COLUMNS)

    def to_csv(self, timesheets: Sequence[Timesheet], path: Union[str, Path]) -> Path:
        """Write the timesheets to a CSV file and return its path."""
        output = Path(path)
        output.parent.mkdir(parents=True, exist_ok=True)
        df = self.to_dataframe(timesheets)
        df.to_csv(output, index=False)
        logger.info(f"Exported {len(df)} timesheets to {output}")
        return output

    def _build_row(self, ts: Timesheet) -> Dict[str, object]:
        employee = self._employees.get(ts.employee_id)
        client = self._clients.get(employee.client_id) if employee else None

        return {
            "Timesheet ID": ts.id,
            "Employee": employee.name if employee else "Unknown Employee",
            "Client": client.name if client else "Unknown Client",
            "Week Ending": ts.week_ending.isoformat(),
            "Hours": float(ts.hours),
            "Rate": float(employee.rate) if employee else None,
            "Amount": (
                float(calculate_line_amount(ts.hours, employee.rate)) if employee else None
            ),
            "Status": ts.status,
            "Comments": ts.comments or "",
            "Submitted At": ts.submitted_at.strftime("%Y-%m-%d %H:%M"),
        }


def summarize_hours_by_status(timesheets: Sequence[Timesheet]) -> List[Dict[str, object]]:
    """Total hours and count per status, in status order.

    Example:
        >>> summarize_hours_by_status(timesheets)
        [{'Status': 'approved', 'Timesheets': 5, 'Hours': 200.0}, ...]
    """
    if not timesheets:
        return []

    df = pd.DataFrame(
        [{"Status": ts.status, "Hours": float(ts.hours)} for ts in timesheets]
    )
    summary = (
        df.groupby("Status", sort=True)
        .agg(Timesheets=("Hours", "size"), Hours=("Hours", "sum"))
        .reset_index()
    )
    return summary.to_dict(orient="records")
