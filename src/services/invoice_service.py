"""Invoice collection service.

This module creates invoices from timesheets, tracks their status and
projects them into the flat InvoiceData structure the PDF writer renders.

Two totals exist for an invoice and they are allowed to disagree:

- ``Invoice.total_amount`` is frozen when the invoice is created.
- Each ``InvoiceLineItem.amount`` in ``format_invoice_data_for_pdf`` is
  recomputed from the current hours and rates.

If hours or rates change after creation, the rendered lines reflect the new
values while the printed total stays the frozen one.
"""

import datetime as dt
import logging
import uuid
from typing import Iterable, List, Optional, Tuple, Union

from pydantic import ValidationError

from src.calculators.invoice_calculator import (
    calculate_invoice_total,
    index_by_id,
    resolve_lines,
)
from src.errors import InvalidParameterError, describe_validation_error
from src.models.invoice import (
    INVOICE_STATUSES,
    Invoice,
    InvoiceData,
    InvoiceLineItem,
)
from src.services.reactive_store import WritableStore
from src.services.timesheet_service import UNKNOWN_CLIENT, TimesheetService
from src.utils.logging_utils import LogContext, generate_operation_id, log_function_call

logger = logging.getLogger(__name__)

INVOICE_ID_PREFIX = "inv-"


def _generate_invoice_id() -> str:
    return f"{INVOICE_ID_PREFIX}{uuid.uuid4().hex[:8]}"


def invoice_number_for(invoice_id: str) -> str:
    """Printed invoice number: the id without its "inv-" prefix."""
    if invoice_id.startswith(INVOICE_ID_PREFIX):
        return invoice_id[len(INVOICE_ID_PREFIX) :]
    return invoice_id


class InvoiceService:
    """Creates and tracks invoices for the timesheets of a session.

    Attributes:
        timesheet_service: Source of timesheets, employees and clients
        invoices: Store of all invoices

    Example:
        >>> service = InvoiceService(timesheet_service)
        >>> invoice_id = service.create_invoice(
        ...     "client-1", ["ts-1", "ts-2"], dt.date(2023, 3, 6), dt.date(2023, 3, 17)
        ... )
        >>> service.get_invoice_by_id(invoice_id).total_amount
        Decimal('4470')
    """

    def __init__(
        self, timesheet_service: TimesheetService, invoices: Iterable[Invoice] = ()
    ):
        self.timesheet_service = timesheet_service
        self.invoices: WritableStore[Tuple[Invoice, ...]] = WritableStore(
            "invoices", tuple(invoices)
        )

    @log_function_call(include_args=True, level="DEBUG")
    def create_invoice(
        self,
        client_id: str,
        timesheet_ids: Iterable[str],
        period_start: Union[dt.date, str],
        period_end: Union[dt.date, str],
    ) -> str:
        """Create a draft invoice for a client.

        The total is the sum of hours x rate over the timesheet ids that
        resolve to a known timesheet and employee; ids that do not resolve
        stay on the invoice but add nothing. The total is frozen: it is not
        recomputed when timesheets or rates change later.

        Returns:
            The generated invoice id

        Raises:
            InvalidParameterError: If no timesheet ids are given, the period
                is invalid, or a timesheet belongs to another client's
                employee
        """
        ids = tuple(timesheet_ids)
        if not ids:
            raise InvalidParameterError("An invoice needs at least one timesheet")

        timesheets_by_id = index_by_id(self.timesheet_service.timesheets.get())
        employees_by_id = index_by_id(self.timesheet_service.employees.get())

        foreign = [
            line.timesheet.id
            for line in resolve_lines(ids, timesheets_by_id, employees_by_id)
            if line.employee.client_id != client_id
        ]
        if foreign:
            raise InvalidParameterError(
                f"Timesheets {', '.join(foreign)} do not belong to employees "
                f"of client '{client_id}'"
            )

        if self.timesheet_service.get_client(client_id) is None:
            logger.warning(f"Creating invoice for unknown client '{client_id}'")

        invoice_id = _generate_invoice_id()
        with LogContext(invoice_id=invoice_id, client_id=client_id):
            total = calculate_invoice_total(ids, timesheets_by_id, employees_by_id)

            try:
                invoice = Invoice(
                    id=invoice_id,
                    client_id=client_id,
                    timesheets=ids,
                    total_amount=total,
                    status="draft",
                    created_at=dt.datetime.now(dt.timezone.utc),
                    period_start=period_start,
                    period_end=period_end,
                )
            except ValidationError as e:
                raise InvalidParameterError(
                    f"Invalid invoice: {describe_validation_error(e)}"
                ) from e

            self.invoices.update(lambda items: items + (invoice,))
            logger.info(
                f"Created invoice {invoice_id} for client {client_id}: "
                f"{len(ids)} timesheets, total {total}"
            )

        return invoice_id

    def update_invoice_status(self, invoice_id: str, status: str) -> Optional[Invoice]:
        """Set an invoice's status.

        Any status may move to any other; only the value itself is checked.

        Returns:
            The updated invoice, or None if the id is unknown

        Raises:
            InvalidParameterError: If status is not 'draft', 'sent' or 'paid'
        """
        if status not in INVOICE_STATUSES:
            raise InvalidParameterError(
                f"Invoice status must be one of {', '.join(INVOICE_STATUSES)}, "
                f"got {status!r}"
            )

        current = self.get_invoice_by_id(invoice_id)
        if current is None:
            logger.warning(f"Invoice '{invoice_id}' not found; status update ignored")
            return None

        updated = current.model_copy(update={"status": status})
        self.invoices.update(
            lambda items: tuple(updated if inv.id == invoice_id else inv for inv in items)
        )
        logger.info(f"Invoice {invoice_id} status: {current.status} -> {status}")
        return updated

    def get_invoice_by_id(self, invoice_id: str) -> Optional[Invoice]:
        return next((inv for inv in self.invoices.get() if inv.id == invoice_id), None)

    def invoices_for_client(self, client_id: str) -> List[Invoice]:
        return [inv for inv in self.invoices.get() if inv.client_id == client_id]

    def format_invoice_data_for_pdf(
        self, invoice: Invoice, notes: Optional[str] = None
    ) -> InvoiceData:
        """Project an invoice into the structure the PDF writer renders.

        The client falls back to "Unknown Client" without an email. Timesheet
        ids that do not resolve are left out, the same way they were left
        out of the invoice total. Line amounts are recomputed from current
        data; the total is the invoice's frozen ``total_amount``.
        """
        operation_id = generate_operation_id()
        with LogContext(invoice_id=invoice.id, operation_id=operation_id):
            client = self.timesheet_service.get_client(invoice.client_id)
            if client is None:
                logger.warning(f"Client '{invoice.client_id}' not found for invoice")

            lines = resolve_lines(
                invoice.timesheets,
                index_by_id(self.timesheet_service.timesheets.get()),
                index_by_id(self.timesheet_service.employees.get()),
            )
            items = [
                InvoiceLineItem(
                    employee=line.employee.name,
                    week_ending=line.timesheet.week_ending,
                    hours=line.timesheet.hours,
                    rate=line.employee.rate,
                    amount=line.amount,
                )
                for line in lines
            ]

            data = InvoiceData(
                invoice_number=invoice_number_for(invoice.id),
                client_name=client.name if client else UNKNOWN_CLIENT,
                client_email=client.email if client else None,
                period_start=invoice.period_start,
                period_end=invoice.period_end,
                items=items,
                total_amount=invoice.total_amount,
                generated_at=invoice.created_at,
                notes=notes or None,
            )

            if data.items_total != invoice.total_amount:
                logger.info(
                    f"Line items sum to {data.items_total} but the frozen total "
                    f"is {invoice.total_amount}"
                )

        return data
