"""Unit tests for the invoice PDF writer."""

import datetime as dt
from decimal import Decimal
from io import BytesIO
from unittest.mock import patch

import pytest
from pypdf import PdfReader

from src.errors import RenderingError
from src.models import InvoiceData, InvoiceLineItem
from src.writers.invoice_pdf_writer import (
    CONTINUED_MARKER,
    THANK_YOU_TEXT,
    InvoicePdfWriter,
    build_invoice_filename,
    format_currency,
    format_date,
    format_hours,
    generate_invoice_pdf,
    save_invoice_pdf,
    wrap_text,
)


def make_invoice_data(item_count=2, **overrides):
    items = [
        InvoiceLineItem(
            employee=f"Employee {i + 1}",
            week_ending=dt.date(2023, 3, 17),
            hours=Decimal("40"),
            rate=Decimal("50"),
            amount=Decimal("2000"),
        )
        for i in range(item_count)
    ]
    data = {
        "invoice_number": "1a2b3c4d",
        "client_name": "Acme Corporation",
        "client_email": "billing@acme.com",
        "period_start": dt.date(2023, 3, 6),
        "period_end": dt.date(2023, 3, 17),
        "items": items,
        "total_amount": Decimal("2000") * item_count,
        "generated_at": dt.datetime(2023, 3, 15, 10, 0, tzinfo=dt.timezone.utc),
    }
    data.update(overrides)
    return InvoiceData(**data)


def read_pages(pdf_bytes):
    reader = PdfReader(BytesIO(pdf_bytes))
    return [page.extract_text() or "" for page in reader.pages]


class TestFormatting:
    """Test display helpers."""

    def test_format_date(self):
        """Test short month, day and year."""
        assert format_date(dt.date(2023, 3, 5)) == "Mar 5, 2023"
        assert format_date(dt.datetime(2023, 12, 15, 8, 0)) == "Dec 15, 2023"

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (Decimal("3970"), "$3,970.00"),
            (Decimal("1249.875"), "$1,249.88"),
            (Decimal("0"), "$0.00"),
            (Decimal("1234567.5"), "$1,234,567.50"),
        ],
    )
    def test_format_currency(self, amount, expected):
        """Test dollars with cents and thousands separators."""
        assert format_currency(amount) == expected

    def test_format_hours(self):
        """Test that trailing zeros are dropped."""
        assert format_hours(Decimal("40.00")) == "40"
        assert format_hours(Decimal("37.50")) == "37.5"

    def test_filename(self):
        """Test the suggested download name."""
        data = make_invoice_data(client_name="Acme  Corp / East")
        assert build_invoice_filename(data) == "invoice-acme-corp--east-1a2b3c4d.pdf"

    def test_wrap_text_keeps_line_breaks(self):
        """Test that explicit newlines start new lines."""
        lines = wrap_text("first\nsecond", "Helvetica", 10, 500)
        assert lines == ["first", "second"]


class TestInvoicePdfWriter:
    """Test PDF rendering."""

    def test_single_page_invoice(self, test_config):
        """Test that a short invoice fits on one page with all sections."""
        writer = InvoicePdfWriter(test_config)
        pdf_bytes = writer.render(make_invoice_data(2, notes="Thanks for the quick turnaround"))
        pages = read_pages(pdf_bytes)

        assert pdf_bytes.startswith(b"%PDF-")
        assert len(pages) == 1
        assert writer.page_count == 1
        text = pages[0]
        assert "Test Staffing Co" in text
        assert "#1a2b3c4d" in text
        assert "Acme Corporation" in text
        assert "Mar 6, 2023 to Mar 17, 2023" in text
        assert "$4,000.00" in text
        assert "Thanks for the quick turnaround" in text
        assert THANK_YOU_TEXT in text
        assert "Payment due within 30 days" in text
        assert CONTINUED_MARKER not in text

    def test_long_invoice_spans_pages(self, test_config):
        """Test that 30 items break onto a second page."""
        writer = InvoicePdfWriter(test_config)
        pages = read_pages(writer.render(make_invoice_data(30)))

        assert len(pages) >= 2
        assert writer.page_count == len(pages)
        assert "INVOICE (Continued)" in pages[1]

    def test_one_marker_per_page_break(self, test_config):
        """Test that every break, and only a break, prints the marker."""
        writer = InvoicePdfWriter(test_config)
        pages = read_pages(writer.render(make_invoice_data(70)))

        markers = sum(text.count(CONTINUED_MARKER) for text in pages)
        assert markers == len(pages) - 1 == writer.page_breaks
        assert CONTINUED_MARKER not in pages[-1]

    def test_footer_on_last_page_only(self, test_config):
        """Test that the total and footer close the document."""
        pages = read_pages(generate_invoice_pdf(make_invoice_data(30), test_config))

        assert THANK_YOU_TEXT in pages[-1]
        assert THANK_YOU_TEXT not in pages[0]
        assert "$60,000.00" in pages[-1]

    def test_empty_invoice_renders(self, test_config):
        """Test that an invoice without items still renders."""
        pages = read_pages(generate_invoice_pdf(make_invoice_data(0), test_config))
        assert len(pages) == 1
        assert "$0.00" in pages[0]

    def test_library_failure_raises_rendering_error(self, test_config):
        """Test that PDF library failures are wrapped."""
        with patch(
            "src.writers.invoice_pdf_writer.canvas.Canvas",
            side_effect=RuntimeError("font cache broken"),
        ):
            with pytest.raises(RenderingError) as exc_info:
                generate_invoice_pdf(make_invoice_data(1), test_config)

        assert "font cache broken" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestSaveInvoicePdf:
    """Test handing rendered PDFs to a sink."""

    def test_custom_sink(self, test_config):
        """Test that the sink receives bytes and the suggested filename."""
        received = {}

        def sink(pdf_bytes, filename):
            received["bytes"] = pdf_bytes
            received["filename"] = filename
            return "stored"

        result = save_invoice_pdf(make_invoice_data(1), sink=sink, settings=test_config)

        assert result == "stored"
        assert received["filename"] == "invoice-acme-corporation-1a2b3c4d.pdf"
        assert received["bytes"].startswith(b"%PDF-")

    def test_default_sink_writes_to_output_dir(self, test_config):
        """Test writing into INVOICE_OUTPUT_DIR."""
        path = save_invoice_pdf(make_invoice_data(1), settings=test_config)

        assert path.exists()
        assert path.parent.name == "invoices"
        assert path.read_bytes().startswith(b"%PDF-")
