"""Data models for the timesheet and invoicing system.

This package contains Pydantic models for all business entities:
- BaseDataModel: Base class with common configuration
- Client, Employee: Reference data
- Timesheet: Weekly hours submitted by an employee
- Invoice, InvoiceData, InvoiceLineItem: Invoices and their PDF projection
- AppUser: The session user
- TimesheetQuery: Filter/sort/page parameters for the timesheet view
"""

from src.models.base import BaseDataModel
from src.models.client import Client, Employee
from src.models.invoice import Invoice, InvoiceData, InvoiceLineItem
from src.models.query import TimesheetQuery
from src.models.timesheet import Timesheet
from src.models.user import AppUser

__all__ = [
    "BaseDataModel",
    "Client",
    "Employee",
    "Timesheet",
    "Invoice",
    "InvoiceData",
    "InvoiceLineItem",
    "AppUser",
    "TimesheetQuery",
]
