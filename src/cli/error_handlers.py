"""Enhanced error handling for CLI commands."""

import sys
import traceback
from typing import Optional

import click
from pydantic import ValidationError

from src.cli.utils.formatters import format_error, format_warning
from src.errors import InvalidParameterError, RenderingError, describe_validation_error


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize CLI error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Error related to configuration or seed data files."""

    pass


class DataValidationError(CLIError):
    """Error related to invalid input values."""

    pass


class ProcessingError(CLIError):
    """Error related to invoice creation or rendering."""

    pass


def _echo_cli_error(label: str, error: CLIError) -> None:
    click.echo(format_error(f"{label}: {error.message}"))
    if error.recovery_hint:
        click.echo(format_warning(f"Hint: {error.recovery_hint}"))


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """
    Handle CLI errors with user-friendly messages.

    Args:
        error: The exception that occurred
        debug: Whether to show full stack trace

    Returns:
        Exit code (1-5 for known error types, 130 for cancellation,
        255 otherwise)
    """
    if isinstance(error, ConfigurationError):
        _echo_cli_error("Configuration Error", error)
        return 1

    elif isinstance(error, DataValidationError):
        _echo_cli_error("Data Validation Error", error)
        return 2

    elif isinstance(error, ProcessingError):
        _echo_cli_error("Processing Error", error)
        return 3

    elif isinstance(error, InvalidParameterError):
        click.echo(format_error(f"Invalid Parameter: {error}"))
        return 2

    elif isinstance(error, ValidationError):
        click.echo(format_error(f"Invalid Data: {describe_validation_error(error)}"))
        return 2

    elif isinstance(error, RenderingError):
        click.echo(format_error(f"PDF Rendering Failed: {error}"))
        click.echo(format_warning("Hint: Run with --debug for the underlying error"))
        return 4

    elif isinstance(error, FileNotFoundError):
        click.echo(format_error(f"File Not Found: {error}"))
        click.echo(format_warning("Hint: Check the --seed-file path or SEED_DATA_FILE"))
        return 5

    elif isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"))
        return 130  # Standard exit code for SIGINT

    else:
        click.echo(format_error(f"Unexpected Error: {type(error).__name__}"))
        click.echo(str(error))

        if debug:
            click.echo("\nFull stack trace:")
            click.echo(traceback.format_exc())
        else:
            click.echo(format_warning("\nRun with --debug flag for full stack trace"))

        return 255


def with_error_handling(debug: bool = False):
    """
    Context manager adding standardized error handling to CLI commands.

    Args:
        debug: Whether to show full stack traces

    Example:
        @click.command()
        @click.pass_context
        def my_command(ctx):
            with with_error_handling(ctx.obj["debug"]):
                ...
    """

    class ErrorHandler:
        """Context manager for error handling."""

        def __init__(self, show_debug: bool):
            self.show_debug = show_debug

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if exc_val is not None and not isinstance(exc_val, click.exceptions.Exit):
                exit_code = handle_cli_error(exc_val, self.show_debug)
                sys.exit(exit_code)
            return False  # Don't suppress exceptions

    return ErrorHandler(debug)
