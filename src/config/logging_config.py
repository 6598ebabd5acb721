"""Centralized logging configuration for the timesheet and invoicing system."""

import json
import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

from src.config.settings import InvoicingConfig

# Attributes every LogRecord carries; anything else came from extra= or LogContext
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}

# Third-party loggers that are chatty at DEBUG level
_NOISY_LOGGERS = ("reportlab", "pypdf", "PIL")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as a single JSON line.

        Structured fields (invoice_id, client_id, ...) added through
        ``extra=`` or ``LogContext`` are emitted as top-level keys.
        """
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES and not key.startswith("_"):
                log_data[key] = value

        return json.dumps(log_data, default=str)


class LoggingConfig:
    """
    Configuration for centralized logging.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format type ('standard' or 'json')
        log_file: Path to log file (optional)
        enable_console: Enable console output
        enable_file: Enable file output
        max_file_size: Maximum log file size in bytes (default: 10MB)
        backup_count: Number of backup files to keep (default: 5)
    """

    VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    VALID_FORMATS = {"standard", "json"}

    def __init__(
        self,
        log_level: str = "INFO",
        log_format: str = "standard",
        log_file: Optional[str] = None,
        enable_console: bool = True,
        enable_file: bool = False,
        max_file_size: int = 10 * 1024 * 1024,
        backup_count: int = 5,
    ):
        """
        Initialize logging configuration.

        Raises:
            ValueError: If invalid log level or format, or file logging is
                enabled without a file path
        """
        if log_level.upper() not in self.VALID_LEVELS:
            raise ValueError(
                f"Invalid log level: {log_level}. "
                f"Must be one of {', '.join(sorted(self.VALID_LEVELS))}"
            )

        if log_format not in self.VALID_FORMATS:
            raise ValueError(
                f"Invalid log format: {log_format}. "
                f"Must be one of {', '.join(sorted(self.VALID_FORMATS))}"
            )

        if enable_file and not log_file:
            raise ValueError("log_file must be specified when enable_file is True")

        self.log_level = log_level.upper()
        self.log_format = log_format
        self.log_file = log_file
        self.enable_console = enable_console
        self.enable_file = enable_file
        self.max_file_size = max_file_size
        self.backup_count = backup_count

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        """
        Create configuration from environment variables.

        Environment Variables:
            LOG_LEVEL: Log level (default: INFO)
            LOG_FORMAT: Log format (default: standard)
            LOG_FILE: Log file path (default: None)
            LOG_CONSOLE: Enable console output (default: true)
            LOG_FILE_ENABLED: Enable file output (default: false)
            LOG_MAX_FILE_SIZE: Max file size in bytes (default: 10485760)
            LOG_BACKUP_COUNT: Backup file count (default: 5)
        """
        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            log_file=os.getenv("LOG_FILE"),
            enable_console=os.getenv("LOG_CONSOLE", "true").lower() == "true",
            enable_file=os.getenv("LOG_FILE_ENABLED", "false").lower() == "true",
            max_file_size=int(os.getenv("LOG_MAX_FILE_SIZE", str(10 * 1024 * 1024))),
            backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
        )

    @classmethod
    def from_settings(cls, settings: InvoicingConfig) -> "LoggingConfig":
        """
        Create configuration from application settings.

        The level comes from ``settings.log_level`` (forced to DEBUG when
        ``settings.debug`` is set); format and file options still come from
        the LOG_* environment variables.
        """
        config = cls.from_env()
        config.log_level = "DEBUG" if settings.debug else settings.log_level
        return config


def configure_logging(config: LoggingConfig) -> None:
    """
    Configure the root logger according to the provided configuration.

    Existing root handlers are removed first, so calling this twice does not
    duplicate output.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    level = getattr(logging, config.log_level)
    root_logger.setLevel(level)

    if config.log_format == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    from src.utils.logging_utils import _ContextFilter

    context_filter = _ContextFilter()

    if config.enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(context_filter)
        root_logger.addHandler(console_handler)

    if config.enable_file and config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=config.log_file,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(context_filter)
        root_logger.addHandler(file_handler)

    # Library internals only matter when something breaks
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__ from calling module)
    """
    return logging.getLogger(name)


def reset_logging() -> None:
    """
    Reset logging configuration to defaults.

    Removes all root handlers and restores the WARNING level. Useful for
    testing and cleanup.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(logging.WARNING)
