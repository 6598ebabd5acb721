"""Structured logging utilities with context support."""

import functools
import logging
import threading
import uuid
from typing import Any, Callable, Dict, Optional

# Thread-local storage for log context
_thread_local = threading.local()


def generate_operation_id() -> str:
    """
    Generate a short unique id tying together the log lines of one operation
    (an invoice creation, a render).
    """
    return uuid.uuid4().hex[:12]


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields currently attached to log records."""
    return dict(getattr(_thread_local, "context", {}))


class LogContext:
    """
    Context manager for adding structured fields to log records.

    Fields are stored in thread-local storage and added to every record
    passing through a handler configured by ``configure_logging``. Nested
    contexts merge their fields; leaving a context restores the previous set.

    Example:
        with LogContext(invoice_id="inv-123456", client_id="client-1"):
            logger.info("Rendering invoice")
            # Log includes invoice_id and client_id fields
    """

    def __init__(self, **kwargs):
        self.fields = kwargs
        self.previous_context: Optional[Dict[str, Any]] = None

    def __enter__(self):
        if not hasattr(_thread_local, "context"):
            _thread_local.context = {}

        self.previous_context = _thread_local.context.copy()
        _thread_local.context.update(self.fields)

        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.previous_context is not None:
            _thread_local.context = self.previous_context
        else:
            _thread_local.context = {}


class _ContextFilter(logging.Filter):
    """Logging filter that adds context fields to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in getattr(_thread_local, "context", {}).items():
            setattr(record, key, value)
        return True


def log_function_call(
    func: Optional[Callable] = None, *, include_args: bool = False, level: str = "DEBUG"
) -> Callable:
    """
    Decorator to log function entry and exit.

    Exceptions are logged with their traceback and re-raised unchanged.

    Args:
        func: Function to decorate (when used without arguments)
        include_args: Whether to include function arguments in logs
        level: Log level to use for entry/exit lines

    Example:
        @log_function_call
        def update_invoice_status(self, invoice_id, status):
            ...

        @log_function_call(include_args=True, level="INFO")
        def create_invoice(self, client_id, timesheet_ids, start, end):
            ...
    """

    def decorator(f: Callable) -> Callable:
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(f.__module__)
            log_level = getattr(logging, level.upper())

            if include_args:
                args_repr = [repr(a) for a in args]
                kwargs_repr = [f"{k}={v!r}" for k, v in kwargs.items()]
                signature = ", ".join(args_repr + kwargs_repr)
                logger.log(log_level, f"Entering {f.__qualname__} with args: {signature}")
            else:
                logger.log(log_level, f"Entering {f.__qualname__}")

            try:
                result = f(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Exception in {f.__qualname__}: {type(e).__name__}: {e}",
                    exc_info=True,
                )
                raise

            logger.log(log_level, f"Exiting {f.__qualname__}")
            return result

        return wrapper

    if func is None:
        return decorator
    return decorator(func)
