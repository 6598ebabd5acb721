"""Timesheet data model.

This module defines the Timesheet model which represents the hours an
employee submitted for one work-week, identified by its week-ending date.
"""

import datetime as dt
from decimal import Decimal
from typing import Literal, Optional, Union

from pydantic import Field, field_validator

from src.models.base import BaseDataModel, to_decimal

TimesheetStatus = Literal["pending", "approved", "rejected"]

TIMESHEET_STATUSES = ("pending", "approved", "rejected")


class Timesheet(BaseDataModel):
    """Represents a weekly timesheet submitted by an employee.

    Timesheets are created by an employee submission (status defaults to
    ``pending``), then updated by administrators who approve or reject them.
    They are never deleted.

    Attributes:
        id: Unique timesheet identifier (e.g., "ts-1")
        employee_id: Identifier of the submitting employee
        week_ending: Date identifying the end of the work-week
        hours: Hours worked in the week (non-negative)
        status: Review status ('pending', 'approved' or 'rejected')
        comments: Optional reviewer comments
        submitted_at: Submission timestamp

    Example:
        >>> ts = Timesheet(
        ...     id="ts-1",
        ...     employee_id="emp-1",
        ...     week_ending="2023-03-17",
        ...     hours=40,
        ...     submitted_at="2023-03-15T14:30:00Z",
        ... )
        >>> ts.week_ending
        datetime.date(2023, 3, 17)
        >>> ts.status
        'pending'
    """

    id: str = Field(..., min_length=1, description="Unique timesheet identifier")
    employee_id: str = Field(..., min_length=1, description="Submitting employee")
    week_ending: dt.date = Field(..., description="End date of the work-week")
    hours: Decimal = Field(..., ge=0, description="Hours worked in the week")
    status: TimesheetStatus = Field("pending", description="Review status")
    comments: Optional[str] = Field(None, description="Reviewer comments")
    submitted_at: dt.datetime = Field(..., description="Submission timestamp")

    @field_validator("id", "employee_id")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        """Validate that identifier fields are not empty or whitespace only.

        Raises:
            ValueError: If the value is empty or whitespace only
        """
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty or whitespace")
        return v.strip()

    @field_validator("hours", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Union[str, int, float, Decimal]) -> Decimal:
        """Convert hours to Decimal so amounts multiply without float drift."""
        return to_decimal(v)

    @field_validator("submitted_at")
    @classmethod
    def assume_utc(cls, v: dt.datetime) -> dt.datetime:
        """Treat naive timestamps as UTC so submissions stay comparable."""
        if v.tzinfo is None:
            return v.replace(tzinfo=dt.timezone.utc)
        return v
