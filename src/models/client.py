"""Client and employee data models.

Clients are immutable reference data. Each employee is billed to exactly one
client at a fixed hourly rate.
"""

from decimal import Decimal
from typing import Optional, Union

from pydantic import Field, field_validator

from src.models.base import BaseDataModel, to_decimal


class Client(BaseDataModel):
    """Represents a billed client organization.

    Attributes:
        id: Unique client identifier (e.g., "client-1")
        name: Display name used on invoices
        email: Optional billing email address

    Example:
        >>> client = Client(id="client-1", name="Acme Corporation")
        >>> client.email is None
        True
    """

    id: str = Field(..., min_length=1, description="Unique client identifier")
    name: str = Field(..., min_length=1, description="Client name")
    email: Optional[str] = Field(None, description="Billing email address")

    @field_validator("id", "name")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        """Validate that string fields are not empty or whitespace only."""
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty or whitespace")
        return v.strip()


class Employee(BaseDataModel):
    """Represents an employee placed with a client.

    The rate is used verbatim in monetary computations; rounding only happens
    when amounts are displayed.

    Attributes:
        id: Unique employee identifier (e.g., "emp-1")
        name: Employee display name
        rate: Hourly billing rate (non-negative)
        client_id: Identifier of the client this employee is billed to

    Example:
        >>> employee = Employee(id="emp-1", name="John Doe", rate=50, client_id="client-1")
        >>> employee.rate
        Decimal('50')
    """

    id: str = Field(..., min_length=1, description="Unique employee identifier")
    name: str = Field(..., min_length=1, description="Employee name")
    rate: Decimal = Field(..., ge=0, description="Hourly billing rate")
    client_id: str = Field(..., min_length=1, description="Billed client identifier")

    @field_validator("id", "name", "client_id")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        """Validate that string fields are not empty or whitespace only."""
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty or whitespace")
        return v.strip()

    @field_validator("rate", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Union[str, int, float, Decimal]) -> Decimal:
        return to_decimal(v)
