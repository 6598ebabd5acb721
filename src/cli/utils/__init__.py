"""CLI utility functions."""

from src.cli.utils.formatters import (
    format_error,
    format_info,
    format_success,
    format_table,
    format_warning,
)
from src.cli.utils.session import Session, open_session

__all__ = [
    "format_error",
    "format_info",
    "format_success",
    "format_table",
    "format_warning",
    "Session",
    "open_session",
]
