"""Timesheet view parameters.

This module defines TimesheetQuery, the set of filter, sort and paging
parameters a reviewer selects when browsing timesheets.
"""

import datetime as dt
from typing import Literal

from pydantic import Field

from src.models.base import BaseDataModel

StatusFilter = Literal["all", "pending", "approved", "rejected"]
SortDirection = Literal["asc", "desc"]

SORT_FIELDS = ("employee", "hours", "week_ending", "status")


class TimesheetQuery(BaseDataModel):
    """Filter, sort and pagination parameters for the timesheet view.

    ``sort_field`` is deliberately a free string: values outside
    ``SORT_FIELDS`` fall back to ordering by submission time.

    Attributes:
        status_filter: Status to keep, or 'all'
        employee_filter: Employee id to keep, or '' for everyone
        client_filter: Client id to keep (admin only), or '' for every client
        selected_week: Week-ending date being reviewed
        sort_field: 'employee', 'hours', 'week_ending' or 'status'
        sort_direction: 'asc' or 'desc'
        page: 1-based page index
        page_size: Rows per page

    Example:
        >>> query = TimesheetQuery(selected_week="2023-03-17", sort_field="hours")
        >>> query.page, query.page_size
        (1, 10)
    """

    status_filter: StatusFilter = "all"
    employee_filter: str = ""
    client_filter: str = ""
    selected_week: dt.date = Field(default_factory=dt.date.today)
    sort_field: str = "week_ending"
    sort_direction: SortDirection = "desc"
    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1)
