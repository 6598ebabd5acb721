"""Writers for rendered invoices and timesheet exports."""

from src.writers.invoice_pdf_writer import (
    InvoicePdfWriter,
    build_invoice_filename,
    format_currency,
    format_date,
    generate_invoice_pdf,
    save_invoice_pdf,
    write_to_directory,
)
from src.writers.timesheet_export import TimesheetExporter, summarize_hours_by_status

__all__ = [
    "InvoicePdfWriter",
    "TimesheetExporter",
    "build_invoice_filename",
    "format_currency",
    "format_date",
    "generate_invoice_pdf",
    "save_invoice_pdf",
    "summarize_hours_by_status",
    "write_to_directory",
]
