"""Base model for all timesheet and invoicing records.

This module provides a base Pydantic model with the configuration shared by
clients, employees, timesheets and invoices, plus the decimal coercion helper
used for hours and monetary values.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

from pydantic import BaseModel, ConfigDict


class BaseDataModel(BaseModel):
    """Base class for all domain records.

    Provides common configuration:
    - Validation with type checking on creation and assignment
    - Unknown fields are rejected
    - Arbitrary types support for dates and decimals

    Records are replaced rather than mutated by the services (see
    ``model_copy``), so instances handed out to readers stay stable.

    Example:
        >>> class Tag(BaseDataModel):
        ...     label: str
        >>> Tag(label="urgent").model_dump()
        {'label': 'urgent'}
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
        strict=False,
        extra="forbid",
        frozen=False,
    )


def to_decimal(v: Union[str, int, float, Decimal]) -> Decimal:
    """Convert a numeric value to Decimal for precision.

    Floats go through ``str`` so that ``38.5`` becomes ``Decimal("38.5")``
    rather than its binary expansion.

    Raises:
        ValueError: If the value cannot be converted to Decimal
    """
    if isinstance(v, Decimal):
        return v
    if isinstance(v, bool):
        raise ValueError(f"Cannot convert {v!r} to Decimal")
    try:
        return Decimal(str(v))
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValueError(f"Cannot convert {v!r} to Decimal: {e}")
