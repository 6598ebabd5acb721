"""CLI commands."""

from src.cli.commands.generate import generate_invoice, list_invoices, render_invoice
from src.cli.commands.list import list_timesheets

__all__ = ["generate_invoice", "list_invoices", "list_timesheets", "render_invoice"]
