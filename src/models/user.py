"""Session user model.

The application keeps a single "current user" per session. Its role decides
which timesheets the pipeline exposes; it is advisory and not an
authorization mechanism.
"""

from typing import Literal, Optional

from pydantic import Field, model_validator

from src.models.base import BaseDataModel

UserRole = Literal["admin", "client"]


class AppUser(BaseDataModel):
    """Represents the user of the current session.

    Attributes:
        role: 'admin' sees everything, 'client' only its own employees
        client_id: Client the user belongs to (required for client users)

    Example:
        >>> AppUser(role="client", client_id="client-1").role
        'client'
    """

    role: UserRole = Field("admin", description="Session role")
    client_id: Optional[str] = Field(None, description="Client of a client user")

    @model_validator(mode="after")
    def validate_client_scope(self) -> "AppUser":
        """Validate that client users carry a client id.

        Raises:
            ValueError: If role is 'client' and client_id is missing
        """
        if self.role == "client" and not self.client_id:
            raise ValueError("client_id is required when role is 'client'")
        return self

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
