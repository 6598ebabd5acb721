"""Unit tests for CLI output formatters."""

from src.cli.utils.formatters import (
    format_error,
    format_info,
    format_success,
    format_table,
    format_warning,
)


class TestFormatters:
    """Test suite for CLI output formatters."""

    def test_messages_contain_text(self):
        """Test that every formatter includes the message."""
        assert "Operation completed" in format_success("Operation completed")
        assert "Something went wrong" in format_error("Something went wrong")
        assert "This is a warning" in format_warning("This is a warning")
        assert "Information message" in format_info("Information message")

    def test_format_table_with_headers_and_rows(self):
        """Test table formatting with headers and data."""
        result = format_table(["Employee", "Hours"], [["John Doe", "40"], ["Jane Smith", "38"]])
        lines = result.split("\n")

        assert lines[0].startswith("+")
        assert "Employee" in lines[1]
        assert "John Doe" in result
        assert len(lines) == 6

    def test_format_table_with_empty_rows(self):
        """Test table formatting with no data rows."""
        result = format_table(["Employee", "Hours"], [])
        assert "Employee" in result
        assert len(result.split("\n")) == 3

    def test_format_table_truncates_long_values(self):
        """Test that cells are cut at max_width."""
        result = format_table(["Comments"], [["x" * 60]], max_width=10)
        assert "x" * 10 in result
        assert "x" * 11 not in result

    def test_format_table_right_alignment(self):
        """Test right-aligned numeric columns."""
        result = format_table(["Hours"], [["5"], ["40.5"]], align_right=[0])
        assert "|     5 |" in result

    def test_format_table_without_headers(self):
        """Test that no headers give an empty string."""
        assert format_table([], [["a"]]) == ""
