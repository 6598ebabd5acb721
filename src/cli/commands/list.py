"""List timesheets command."""

import datetime as dt
from typing import Optional

import click

from src.cli.error_handlers import DataValidationError, with_error_handling
from src.cli.utils.formatters import (
    format_info,
    format_success,
    format_table,
    format_warning,
)
from src.cli.utils.session import open_session
from src.models.user import AppUser
from src.writers.invoice_pdf_writer import format_date
from src.writers.timesheet_export import TimesheetExporter


def is_debug(ctx: click.Context) -> bool:
    """Whether the root command was started with --debug."""
    obj = ctx.find_root().obj
    return bool(obj and obj.get("debug"))


@click.command(name="list-timesheets")
@click.option("--seed-file", type=click.Path(dir_okay=False), default=None,
              help="JSON seed data file (optional, uses built-in sample data)")
@click.option("--role", type=click.Choice(["admin", "client"]), default="admin",
              show_default=True, help="Role of the session user")
@click.option("--client-id", type=str, default=None,
              help="Client of the session user (required with --role client)")
@click.option("--status", "status_filter",
              type=click.Choice(["all", "pending", "approved", "rejected"]),
              default="all", show_default=True, help="Only show this status")
@click.option("--employee", "employee_filter", type=str, default="",
              help="Only show this employee id")
@click.option("--client", "client_filter", type=str, default="",
              help="Only show this client id (admin only)")
@click.option("--week", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Week-ending date to review (YYYY-MM-DD, default: today)")
@click.option("--sort", "sort_field",
              type=click.Choice(["employee", "hours", "week_ending", "status", "submitted_at"]),
              default="week_ending", show_default=True, help="Sort field")
@click.option("--direction", "sort_direction", type=click.Choice(["asc", "desc"]),
              default="desc", show_default=True, help="Sort direction")
@click.option("--page", type=int, default=1, show_default=True, help="Page to show (1-based)")
@click.option("--page-size", type=int, default=None,
              help="Rows per page (default from DEFAULT_PAGE_SIZE)")
@click.option("--export", "export_path", type=click.Path(dir_okay=False), default=None,
              help="Also write the whole week (all pages) to this CSV file")
@click.pass_context
def list_timesheets(
    ctx: click.Context,
    seed_file: Optional[str],
    role: str,
    client_id: Optional[str],
    status_filter: str,
    employee_filter: str,
    client_filter: str,
    week: Optional[dt.datetime],
    sort_field: str,
    sort_direction: str,
    page: int,
    page_size: Optional[int],
    export_path: Optional[str],
):
    """List the timesheets of one week with filters, sorting and paging.

    Also reports employees that have not submitted a timesheet for the week
    (within the active filters).

    Example:
        timesheet-cli list-timesheets --week 2023-03-17
        timesheet-cli list-timesheets --role client --client-id client-1 --sort hours
    """
    with with_error_handling(is_debug(ctx)):
        if role == "client" and not client_id:
            raise DataValidationError(
                "--client-id is required with --role client",
                recovery_hint="Pass the client the session user belongs to",
            )

        session = open_session(
            seed_file=seed_file, user=AppUser(role=role, client_id=client_id)
        )
        service = session.timesheets

        selected_week = week.date() if week else dt.date.today()
        query = service.set_query(
            status_filter=status_filter,
            employee_filter=employee_filter,
            client_filter=client_filter,
            selected_week=selected_week,
            sort_field=sort_field,
            sort_direction=sort_direction,
            page=page,
            page_size=page_size or session.settings.default_page_size,
        )

        click.echo(format_info(f"Timesheets for week ending {format_date(selected_week)}"))

        rows = [
            [
                ts.id,
                service.get_employee_name(ts.employee_id),
                ts.week_ending.isoformat(),
                f"{ts.hours}",
                ts.status,
                ts.comments or "",
            ]
            for ts in service.paginated.get()
        ]
        pages = service.total_pages.get()

        click.echo()
        if rows:
            click.echo(
                format_table(
                    ["ID", "Employee", "Week Ending", "Hours", "Status", "Comments"],
                    rows,
                    align_right=[3],
                )
            )
            click.echo(f"Page {query.page} of {pages}")
        elif pages:
            click.echo(format_info(f"Page {query.page} is past the last page ({pages})."))
        else:
            click.echo(format_info("No timesheets match the selected filters."))

        missing = service.missing.get()
        if missing:
            click.echo()
            click.echo(
                format_warning(
                    "Missing timesheets: " + ", ".join(emp.name for emp in missing)
                )
            )

        if export_path:
            exporter = TimesheetExporter(service.employees.get(), service.clients.get())
            path = exporter.to_csv(service.by_week.get(), export_path)
            click.echo(format_success(f"Exported week to {path}"))

        click.echo()
        click.echo(format_success(f"Found {len(service.by_week.get())} timesheet(s)"))
