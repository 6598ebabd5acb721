"""
Services module for the timesheet and invoicing system.

This module provides the stateful collections of a session: observable
stores, the timesheet service and the invoice service.
"""

from .invoice_service import InvoiceService, invoice_number_for
from .reactive_store import DerivedStore, WritableStore
from .timesheet_service import TimesheetService

__all__ = [
    "DerivedStore",
    "InvoiceService",
    "TimesheetService",
    "WritableStore",
    "invoice_number_for",
]
