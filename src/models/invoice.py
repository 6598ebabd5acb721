"""Invoice data models.

This module defines the Invoice record stored by the invoicing service and
the flat InvoiceData projection handed to the PDF writer.
"""

import datetime as dt
from decimal import Decimal
from typing import List, Literal, Optional, Tuple, Union

from pydantic import Field, field_validator, model_validator

from src.models.base import BaseDataModel, to_decimal

InvoiceStatus = Literal["draft", "sent", "paid"]

INVOICE_STATUSES = ("draft", "sent", "paid")


class Invoice(BaseDataModel):
    """Represents an invoice issued to a client.

    ``total_amount`` is a frozen snapshot: it is computed once, when the
    invoice is created, and is not recomputed if the referenced timesheets or
    employee rates change afterwards.

    Attributes:
        id: Unique invoice identifier (e.g., "inv-1")
        client_id: Identifier of the billed client
        timesheets: Ordered timesheet identifiers included in the invoice
        total_amount: Sum of hours x rate at creation time
        status: Invoice status ('draft', 'sent' or 'paid')
        created_at: Creation timestamp
        period_start: First day of the billed period
        period_end: Last day of the billed period

    Example:
        >>> invoice = Invoice(
        ...     id="inv-1",
        ...     client_id="client-1",
        ...     timesheets=["ts-1", "ts-2"],
        ...     total_amount=3970,
        ...     created_at="2023-03-16T10:00:00Z",
        ...     period_start="2023-03-08",
        ...     period_end="2023-03-17",
        ... )
        >>> invoice.status
        'draft'
    """

    id: str = Field(..., min_length=1, description="Unique invoice identifier")
    client_id: str = Field(..., min_length=1, description="Billed client")
    timesheets: Tuple[str, ...] = Field(
        default_factory=tuple, description="Included timesheet identifiers"
    )
    total_amount: Decimal = Field(..., ge=0, description="Frozen invoice total")
    status: InvoiceStatus = Field("draft", description="Invoice status")
    created_at: dt.datetime = Field(..., description="Creation timestamp")
    period_start: dt.date = Field(..., description="Billed period start")
    period_end: dt.date = Field(..., description="Billed period end")

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Union[str, int, float, Decimal]) -> Decimal:
        return to_decimal(v)

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: dt.datetime) -> dt.datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=dt.timezone.utc)
        return v

    @model_validator(mode="after")
    def validate_period(self) -> "Invoice":
        """Validate that the billed period is not inverted.

        Raises:
            ValueError: If period_end is before period_start
        """
        if self.period_end < self.period_start:
            raise ValueError(
                f"period_end ({self.period_end}) must not be before "
                f"period_start ({self.period_start})"
            )
        return self


class InvoiceLineItem(BaseDataModel):
    """One table row of a rendered invoice.

    ``amount`` is always ``hours * rate`` computed from current data, which
    can differ from the share of the invoice's frozen total.
    """

    employee: str
    week_ending: dt.date
    hours: Decimal
    rate: Decimal
    amount: Decimal


class InvoiceData(BaseDataModel):
    """Flat, renderer-ready projection of an invoice.

    Attributes:
        invoice_number: Invoice id without its "inv-" prefix
        client_name: Resolved client name ("Unknown Client" when missing)
        client_email: Resolved client email, if any
        period_start: Billed period start
        period_end: Billed period end
        items: Line items in invoice order
        total_amount: The invoice's frozen total
        generated_at: Invoice creation timestamp
        notes: Optional free-text notes printed below the total
    """

    invoice_number: str
    client_name: str
    client_email: Optional[str] = None
    period_start: dt.date
    period_end: dt.date
    items: List[InvoiceLineItem] = Field(default_factory=list)
    total_amount: Decimal
    generated_at: dt.datetime
    notes: Optional[str] = None

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Union[str, int, float, Decimal]) -> Decimal:
        return to_decimal(v)

    @property
    def items_total(self) -> Decimal:
        """Sum of the recomputed line amounts."""
        return sum((item.amount for item in self.items), Decimal("0"))
