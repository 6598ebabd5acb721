"""Timesheet & Invoicing CLI.

This module provides a command-line interface for the timesheet and
invoicing system. It includes commands for reviewing timesheets, listing
invoices, and generating invoice PDFs.
"""

import click

from src.cli.commands.generate import generate_invoice, list_invoices, render_invoice
from src.cli.commands.list import list_timesheets
from src.cli.error_handlers import with_error_handling
from src.config.logging_config import LoggingConfig, configure_logging
from src.config.settings import get_config

__version__ = "1.0.0"


@click.group(
    help="Timesheet & Invoicing CLI - Review weekly timesheets and bill clients"
)
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, default=False, help="Verbose logging and stack traces")
@click.pass_context
def cli(ctx: click.Context, debug: bool):
    """Timesheet & Invoicing CLI main entry point."""
    ctx.ensure_object(dict)
    with with_error_handling(debug):
        settings = get_config()
        ctx.obj["debug"] = debug or settings.debug
        logging_config = LoggingConfig.from_settings(settings)
        if debug:
            logging_config.log_level = "DEBUG"
        configure_logging(logging_config)


# Register commands
cli.add_command(list_timesheets)
cli.add_command(list_invoices)
cli.add_command(generate_invoice)
cli.add_command(render_invoice)


def main():
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
