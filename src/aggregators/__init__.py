"""Aggregators module for deriving timesheet views.

This module provides the filter/sort/paginate pipeline that turns the full
timesheet collection into what a reviewer sees.
"""

from src.aggregators.timesheet_pipeline import (
    TimesheetView,
    apply_filters,
    build_timesheet_view,
    filter_by_client,
    filter_by_employee,
    filter_by_role,
    filter_by_status,
    filter_by_week,
    find_missing_employees,
    paginate,
    sort_timesheets,
    total_pages,
)

__all__ = [
    "TimesheetView",
    "apply_filters",
    "build_timesheet_view",
    "filter_by_client",
    "filter_by_employee",
    "filter_by_role",
    "filter_by_status",
    "filter_by_week",
    "find_missing_employees",
    "paginate",
    "sort_timesheets",
    "total_pages",
]
