"""Invoice PDF writer.

This module lays out InvoiceData on US-Letter pages (612 x 792 points) with
a reportlab canvas and returns the serialized document:

- Header with company details, invoice number and date
- "Bill to" and billed period
- A five column table (Employee, Week Ending, Hours, Rate, Amount) that
  continues over as many pages as the line items need
- Total, optional notes and a footer on the last page

Coordinates are measured from the bottom-left corner, as in PDF.
"""

import datetime as dt
import logging
import re
from decimal import ROUND_HALF_UP, Decimal
from io import BytesIO
from pathlib import Path
from typing import Callable, List, Optional, Union

from reportlab.lib.colors import Color
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from src.config.settings import InvoicingConfig, get_config
from src.errors import RenderingError
from src.models.invoice import InvoiceData, InvoiceLineItem
from src.utils.logging_utils import LogContext

logger = logging.getLogger(__name__)

PAGE_SIZE = (612, 792)
MARGIN = 50
CONTENT_WIDTH = PAGE_SIZE[0] - 2 * MARGIN

FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"

TITLE_COLOR = Color(0.1, 0.1, 0.4)
RULE_COLOR = Color(0.8, 0.8, 0.8)
MUTED_COLOR = Color(0.5, 0.5, 0.5)
TEXT_COLOR = Color(0, 0, 0)

TABLE_HEADERS = ["Employee", "Week Ending", "Hours", "Rate", "Amount"]
COLUMN_WIDTHS = [200, 100, 70, 70, 80]

TABLE_TOP = 600
CONTINUED_TABLE_TOP = 730
ROW_HEIGHT = 20
FIRST_ROW_OFFSET = 25
MIN_ROW_Y = 100

CONTINUED_MARKER = "(Continued on next page)"
THANK_YOU_TEXT = "Thank you for your business!"

PdfSink = Callable[[bytes, str], object]


def format_date(value: Union[dt.date, dt.datetime]) -> str:
    """Format a date as short month, day and year.

    Example:
        >>> format_date(dt.date(2023, 3, 15))
        'Mar 15, 2023'
    """
    return f"{value:%b} {value.day}, {value.year}"


def format_currency(amount: Union[Decimal, int, float]) -> str:
    """Format an amount as US dollars with cents and thousands separators.

    Example:
        >>> format_currency(Decimal("3970"))
        '$3,970.00'
    """
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_hours(hours: Decimal) -> str:
    """Format hours without trailing zeros ("40", "37.5")."""
    return f"{Decimal(hours).normalize():f}"


def build_invoice_filename(invoice_data: InvoiceData) -> str:
    """Suggested download name, e.g. ``invoice-acme-corporation-123456.pdf``."""
    slug = re.sub(r"\s+", "-", invoice_data.client_name.strip().lower())
    slug = re.sub(r'[\\/*?:"<>|]', "", slug) or "client"
    return f"invoice-{slug}-{invoice_data.invoice_number}.pdf"


class InvoicePdfWriter:
    """Render InvoiceData into a PDF document.

    The writer keeps the vertical cursor of the page being drawn. Rows are
    drawn top to bottom; whenever the cursor drops below ``MIN_ROW_Y`` a
    continuation marker is printed, a new page is started and the table
    header is drawn again.

    Attributes:
        settings: Company details and payment terms for header and footer
        page_count: Pages in the last rendered document
        page_breaks: Continuation markers in the last rendered document

    Example:
        >>> writer = InvoicePdfWriter()
        >>> pdf_bytes = writer.render(invoice_data)
        >>> pdf_bytes[:5]
        b'%PDF-'
    """

    def __init__(self, settings: Optional[InvoicingConfig] = None):
        self.settings = settings or get_config()
        self.page_count = 0
        self.page_breaks = 0

    def render(self, invoice_data: InvoiceData) -> bytes:
        """Render the invoice and return the serialized PDF.

        Raises:
            RenderingError: If the PDF library fails at any stage
        """
        with LogContext(invoice_number=invoice_data.invoice_number):
            logger.info(
                f"Rendering invoice {invoice_data.invoice_number} with "
                f"{len(invoice_data.items)} line items"
            )
            buffer = BytesIO()
            try:
                pdf = canvas.Canvas(buffer, pagesize=PAGE_SIZE)
                pdf.setTitle(f"Invoice {invoice_data.invoice_number}")
                pdf.setAuthor(self.settings.company_name)
                self.page_count = 1
                self.page_breaks = 0

                self._draw_header(pdf, invoice_data)
                self._draw_parties(pdf, invoice_data)
                y = self._draw_table_header(pdf, TABLE_TOP) - FIRST_ROW_OFFSET + 5

                for item in invoice_data.items:
                    self._draw_row(pdf, item, y)
                    y -= ROW_HEIGHT
                    if y < MIN_ROW_Y:
                        y = self._start_continuation_page(pdf)

                y = self._draw_total(pdf, invoice_data, y)
                if invoice_data.notes:
                    self._draw_notes(pdf, invoice_data.notes, y)
                self._draw_footer(pdf)

                pdf.showPage()
                pdf.save()
            except Exception as e:
                logger.error(f"Failed to render invoice {invoice_data.invoice_number}: {e}")
                raise RenderingError(
                    f"Failed to render invoice {invoice_data.invoice_number}: {e}"
                ) from e

            pdf_bytes = buffer.getvalue()
            logger.info(
                f"Rendered invoice {invoice_data.invoice_number}: "
                f"{self.page_count} page(s), {len(pdf_bytes)} bytes"
            )
            return pdf_bytes

    def _draw_text(self, pdf, x, y, text, size=10, bold=False, color=TEXT_COLOR):
        pdf.setFillColor(color)
        pdf.setFont(BOLD_FONT if bold else FONT, size)
        pdf.drawString(x, y, text)

    def _draw_rule(self, pdf, y: float) -> None:
        pdf.setStrokeColor(RULE_COLOR)
        pdf.setLineWidth(1)
        pdf.line(MARGIN, y, MARGIN + CONTENT_WIDTH, y)

    def _draw_header(self, pdf, data: InvoiceData) -> None:
        self._draw_text(pdf, MARGIN, 730, self.settings.company_name, 24, True, TITLE_COLOR)
        y = 710
        for line in self.settings.get_company_address_lines():
            self._draw_text(pdf, MARGIN, y, line)
            y -= 15

        right = MARGIN + 400
        self._draw_text(pdf, right, 730, "INVOICE", 18, True)
        self._draw_text(pdf, right, 710, f"#{data.invoice_number}", 12)
        self._draw_text(pdf, right, 695, f"Date: {format_date(data.generated_at)}")

        self._draw_rule(pdf, 680)

    def _draw_parties(self, pdf, data: InvoiceData) -> None:
        self._draw_text(pdf, MARGIN, 660, "BILL TO:", 12, True)
        self._draw_text(pdf, MARGIN, 645, data.client_name, 11)
        if data.client_email:
            self._draw_text(pdf, MARGIN, 630, data.client_email)

        period_x = MARGIN + 300
        self._draw_text(pdf, period_x, 660, "PERIOD:", 12, True)
        self._draw_text(
            pdf,
            period_x,
            645,
            f"{format_date(data.period_start)} to {format_date(data.period_end)}",
            11,
        )

    def _draw_table_header(self, pdf, top: float) -> float:
        """Draw column titles at ``top``; returns the y of the rule below."""
        x = MARGIN
        for header, width in zip(TABLE_HEADERS, COLUMN_WIDTHS):
            self._draw_text(pdf, x, top, header, 10, True)
            x += width

        rule_y = top - 5
        self._draw_rule(pdf, rule_y)
        return rule_y

    def _draw_row(self, pdf, item: InvoiceLineItem, y: float) -> None:
        x = MARGIN
        self._draw_text(pdf, x, y, item.employee)
        x += COLUMN_WIDTHS[0]
        self._draw_text(pdf, x, y, format_date(item.week_ending))
        x += COLUMN_WIDTHS[1]
        # Hours are right aligned within their column
        pdf.drawRightString(x + COLUMN_WIDTHS[2] - 20, y, format_hours(item.hours))
        x += COLUMN_WIDTHS[2]
        self._draw_text(pdf, x, y, format_currency(item.rate))
        x += COLUMN_WIDTHS[3]
        self._draw_text(pdf, x, y, format_currency(item.amount))

    def _start_continuation_page(self, pdf) -> float:
        """Close the current page and open the next; returns the first row y."""
        self._draw_text(pdf, MARGIN, 80, CONTINUED_MARKER, 10, color=MUTED_COLOR)
        pdf.showPage()
        self.page_count += 1
        self.page_breaks += 1
        logger.debug(f"Starting invoice page {self.page_count}")

        self._draw_text(pdf, MARGIN, 750, "INVOICE (Continued)", 14, True)
        rule_y = self._draw_table_header(pdf, CONTINUED_TABLE_TOP)
        return rule_y + 5 - FIRST_ROW_OFFSET

    def _draw_total(self, pdf, data: InvoiceData, y: float) -> float:
        self._draw_rule(pdf, y - 5)
        y -= 25
        self._draw_text(pdf, MARGIN + 370, y, "Total:", 12, True)
        self._draw_text(pdf, MARGIN + 460, y, format_currency(data.total_amount), 12, True)
        return y

    def _draw_notes(self, pdf, notes: str, y: float) -> float:
        y -= 40
        self._draw_text(pdf, MARGIN, y, "Notes:", 11, True)
        y -= 20
        for line in wrap_text(notes, FONT, 10, CONTENT_WIDTH):
            self._draw_text(pdf, MARGIN, y, line)
            y -= 14
        return y

    def _draw_footer(self, pdf) -> None:
        center = MARGIN + CONTENT_WIDTH / 2
        pdf.setFillColor(TEXT_COLOR)
        pdf.setFont(FONT, 10)
        pdf.drawCentredString(center, 60, THANK_YOU_TEXT)
        pdf.drawCentredString(center, 45, self.settings.payment_terms_text)


def wrap_text(text: str, font: str, size: float, max_width: float) -> List[str]:
    """Split text into lines no wider than ``max_width``, keeping line breaks."""
    lines: List[str] = []
    for paragraph in str(text).splitlines() or [""]:
        lines.extend(simpleSplit(paragraph, font, size, max_width) or [""])
    return lines


def generate_invoice_pdf(
    invoice_data: InvoiceData, settings: Optional[InvoicingConfig] = None
) -> bytes:
    """Render an invoice to PDF bytes.

    Raises:
        RenderingError: If the PDF library fails
    """
    return InvoicePdfWriter(settings).render(invoice_data)


def write_to_directory(output_dir: Union[str, Path]) -> PdfSink:
    """Sink that writes the PDF into ``output_dir`` and returns its path."""

    def sink(pdf_bytes: bytes, filename: str) -> Path:
        directory = Path(output_dir)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        path.write_bytes(pdf_bytes)
        logger.info(f"Wrote {len(pdf_bytes)} bytes to {path}")
        return path

    return sink


def save_invoice_pdf(
    invoice_data: InvoiceData,
    sink: Optional[PdfSink] = None,
    settings: Optional[InvoicingConfig] = None,
):
    """Render an invoice and hand it to a sink under its suggested filename.

    Without a sink the file is written to ``settings.invoice_output_dir``.

    Returns:
        Whatever the sink returns (the written path for the default sink)
    """
    settings = settings or get_config()
    pdf_bytes = generate_invoice_pdf(invoice_data, settings)
    sink = sink or write_to_directory(settings.invoice_output_dir)
    return sink(pdf_bytes, build_invoice_filename(invoice_data))
