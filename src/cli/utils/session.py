"""Session setup shared by CLI commands."""

import logging
from dataclasses import dataclass
from typing import Optional

from src.config.settings import InvoicingConfig, get_config
from src.models.user import AppUser
from src.readers.seed_data_reader import load_dataset
from src.services.invoice_service import InvoiceService
from src.services.timesheet_service import TimesheetService

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Services wired together over one loaded dataset."""

    settings: InvoicingConfig
    timesheets: TimesheetService
    invoices: InvoiceService


def open_session(
    seed_file: Optional[str] = None,
    user: Optional[AppUser] = None,
    settings: Optional[InvoicingConfig] = None,
) -> Session:
    """Load seed data and build the services for one CLI invocation.

    ``seed_file`` falls back to ``settings.seed_data_file`` and then to the
    built-in sample dataset. State lives only as long as the process.
    """
    settings = settings or get_config()
    dataset = load_dataset(seed_file or settings.seed_data_file)

    timesheet_service = TimesheetService(
        clients=dataset.clients,
        employees=dataset.employees,
        timesheets=dataset.timesheets,
        user=user,
        settings=settings,
    )
    invoice_service = InvoiceService(timesheet_service, invoices=dataset.invoices)
    return Session(settings=settings, timesheets=timesheet_service, invoices=invoice_service)
