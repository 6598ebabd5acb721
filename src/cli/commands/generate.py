"""Invoice commands: list, generate and render invoices."""

import datetime as dt
from typing import Optional, Tuple

import click

from src.cli.commands.list import is_debug
from src.cli.error_handlers import (
    DataValidationError,
    ProcessingError,
    with_error_handling,
)
from src.cli.utils.formatters import (
    format_info,
    format_success,
    format_table,
    format_warning,
)
from src.cli.utils.session import Session, open_session
from src.writers.invoice_pdf_writer import (
    format_currency,
    format_date,
    save_invoice_pdf,
    write_to_directory,
)


def _save_pdf(session: Session, invoice_id: str, notes: Optional[str], output_dir: Optional[str]):
    invoice = session.invoices.get_invoice_by_id(invoice_id)
    if invoice is None:
        raise DataValidationError(
            f"Invoice '{invoice_id}' not found",
            recovery_hint="Run 'list-invoices' to see the available invoice ids",
        )

    data = session.invoices.format_invoice_data_for_pdf(invoice, notes=notes)
    if not data.items:
        click.echo(format_warning("None of the invoice's timesheets could be resolved"))

    sink = write_to_directory(output_dir) if output_dir else None
    path = save_invoice_pdf(data, sink=sink, settings=session.settings)
    click.echo(format_success(f"Invoice {data.invoice_number} saved to {path}"))
    return path


@click.command(name="list-invoices")
@click.option("--seed-file", type=click.Path(dir_okay=False), default=None,
              help="JSON seed data file (optional, uses built-in sample data)")
@click.option("--client-id", type=str, default=None, help="Only show this client's invoices")
@click.pass_context
def list_invoices(ctx: click.Context, seed_file: Optional[str], client_id: Optional[str]):
    """List invoices with their client, period, total and status."""
    with with_error_handling(is_debug(ctx)):
        session = open_session(seed_file=seed_file)
        service = session.invoices

        invoices = (
            service.invoices_for_client(client_id) if client_id else list(service.invoices.get())
        )
        if not invoices:
            click.echo(format_info("No invoices found."))
            return

        rows = [
            [
                inv.id,
                session.timesheets.get_client_name(inv.client_id),
                f"{format_date(inv.period_start)} - {format_date(inv.period_end)}",
                str(len(inv.timesheets)),
                format_currency(inv.total_amount),
                inv.status,
            ]
            for inv in invoices
        ]
        click.echo(
            format_table(
                ["ID", "Client", "Period", "Timesheets", "Total", "Status"],
                rows,
                align_right=[3, 4],
            )
        )
        click.echo()
        click.echo(format_success(f"Found {len(invoices)} invoice(s)"))


@click.command(name="generate-invoice")
@click.option("--seed-file", type=click.Path(dir_okay=False), default=None,
              help="JSON seed data file (optional, uses built-in sample data)")
@click.option("--client-id", required=True, type=str, help="Client to invoice")
@click.option("--timesheet", "timesheet_ids", multiple=True,
              help="Timesheet id to bill (repeatable, default: approved timesheets in the period)")
@click.option("--period-start", required=True, type=click.DateTime(formats=["%Y-%m-%d"]),
              help="First day of the billing period (YYYY-MM-DD)")
@click.option("--period-end", required=True, type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Last day of the billing period (YYYY-MM-DD)")
@click.option("--notes", type=str, default=None, help="Notes printed under the total")
@click.option("--output-dir", type=click.Path(file_okay=False), default=None,
              help="Directory for the PDF (default from INVOICE_OUTPUT_DIR)")
@click.pass_context
def generate_invoice(
    ctx: click.Context,
    seed_file: Optional[str],
    client_id: str,
    timesheet_ids: Tuple[str, ...],
    period_start: dt.datetime,
    period_end: dt.datetime,
    notes: Optional[str],
    output_dir: Optional[str],
):
    """Create a draft invoice for a client and save it as a PDF.

    Example:
        timesheet-cli generate-invoice --client-id client-1 \\
            --period-start 2023-03-06 --period-end 2023-03-17
        timesheet-cli generate-invoice --client-id client-1 \\
            --timesheet ts-1 --timesheet ts-2 \\
            --period-start 2023-03-06 --period-end 2023-03-17
    """
    with with_error_handling(is_debug(ctx)):
        session = open_session(seed_file=seed_file)
        start, end = period_start.date(), period_end.date()

        ids = list(timesheet_ids)
        if not ids:
            ids = [
                ts.id
                for ts in session.timesheets.approved_timesheets_for_client(client_id, start, end)
            ]
            if not ids:
                raise ProcessingError(
                    f"No approved timesheets for client '{client_id}' between "
                    f"{start.isoformat()} and {end.isoformat()}",
                    recovery_hint="Pass --timesheet explicitly or widen the period",
                )
            click.echo(format_info(f"Billing {len(ids)} approved timesheet(s)"))

        invoice_id = session.invoices.create_invoice(client_id, ids, start, end)
        invoice = session.invoices.get_invoice_by_id(invoice_id)
        click.echo(
            format_success(
                f"Created invoice {invoice_id} for "
                f"{session.timesheets.get_client_name(client_id)}: "
                f"{format_currency(invoice.total_amount)}"
            )
        )

        _save_pdf(session, invoice_id, notes, output_dir)


@click.command(name="render-invoice")
@click.option("--seed-file", type=click.Path(dir_okay=False), default=None,
              help="JSON seed data file (optional, uses built-in sample data)")
@click.option("--invoice-id", required=True, type=str, help="Invoice to render")
@click.option("--notes", type=str, default=None, help="Notes printed under the total")
@click.option("--output-dir", type=click.Path(file_okay=False), default=None,
              help="Directory for the PDF (default from INVOICE_OUTPUT_DIR)")
@click.pass_context
def render_invoice(
    ctx: click.Context,
    seed_file: Optional[str],
    invoice_id: str,
    notes: Optional[str],
    output_dir: Optional[str],
):
    """Save an existing invoice as a PDF.

    Example:
        timesheet-cli render-invoice --invoice-id inv-1 --output-dir invoices
    """
    with with_error_handling(is_debug(ctx)):
        session = open_session(seed_file=seed_file)
        _save_pdf(session, invoice_id, notes, output_dir)
