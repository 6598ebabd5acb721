"""Calculator modules for invoicing."""

from src.calculators.invoice_calculator import (
    ResolvedLine,
    calculate_invoice_total,
    calculate_line_amount,
    index_by_id,
    resolve_lines,
)

__all__ = [
    "ResolvedLine",
    "calculate_invoice_total",
    "calculate_line_amount",
    "index_by_id",
    "resolve_lines",
]
