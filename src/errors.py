"""Exceptions raised by the timesheet and invoicing core.

Lookup misses (unknown employee, client or timesheet ids) are never raised;
they are logged and resolved by placeholder or exclusion at the call site.
"""

from pydantic import ValidationError


class TimesheetInvoicingError(Exception):
    """Base exception for the core."""

    pass


class InvalidParameterError(TimesheetInvoicingError, ValueError):
    """A mutation received a value that violates the domain rules.

    Examples are negative hours, an unknown status string, a page index
    below 1, or an invoice referencing another client's timesheets.
    """

    pass


class RenderingError(TimesheetInvoicingError):
    """The PDF library failed while rendering a document.

    The whole render fails; no partial document is returned.
    """

    pass


def describe_validation_error(error: ValidationError) -> str:
    """Turn a pydantic ValidationError into a one-line description.

    Example:
        "hours: Input should be greater than or equal to 0"
    """
    parts = []
    for err in error.errors():
        location = ".".join(str(part) for part in err.get("loc", ())) or "value"
        parts.append(f"{location}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)
