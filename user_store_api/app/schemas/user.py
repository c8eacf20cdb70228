"""
Pydantic models for user data.

Input models are deliberately loose: every field is typed ``Any`` so
that the raw JSON value reaches the validators in
``core.validators`` unchanged and errors are reported with the
service's own messages.  Which fields a client actually sent is read
from pydantic's ``model_fields_set``; a field sent as ``null`` counts
as present.
"""

from typing import Any, List

from pydantic import BaseModel, Field


class UserFields(BaseModel):
    name: Any = Field(None, examples=["Aarav Jain"])
    email: Any = Field(None, examples=["aarav@example.com"])
    age: Any = Field(None, examples=[22])

    def provided(self, field: str) -> bool:
        """Return whether ``field`` was present in the decoded payload."""
        return field in self.model_fields_set


class UserCreate(UserFields):
    """Schema for creating a user.  ``name``, ``email`` and ``age`` are required."""


class UserUpdate(UserFields):
    """Partial user record.  Only the fields present are changed."""


class UserBulkUpdateItem(UserFields):
    """Partial user record addressed by ``id`` inside a bulk update."""

    id: Any = Field(None, examples=["3f1c2b8e-8a53-4a57-9d0e-3b7e4f6f2a10"])


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: str
    name: str
    email: str
    age: int

    # Build directly from the store's dataclass records.
    model_config = {
        "from_attributes": True,
    }


class MessageResponse(BaseModel):
    message: str


class BulkDeleteResult(BaseModel):
    """Outcome of a bulk delete, partitioned in request order."""

    message: str = "Bulk delete completed"
    deleted: List[Any] = Field(default_factory=list)
    not_found: List[Any] = Field(default_factory=list, alias="notFound")

    model_config = {
        "populate_by_name": True,
    }
