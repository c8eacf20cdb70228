"""
Error hierarchy for the user store.

Every failure a request can run into is raised as a subclass of
``UserStoreError``.  Each error knows the HTTP status it maps to and
renders itself as the ``{"message": ...}`` body returned to clients;
the handler registered in ``main.create_app`` does the conversion.
Nothing is retried and no error is recoverable inside a request.
"""

from typing import Any, Optional

from fastapi import status


class UserStoreError(Exception):
    """Base exception for all user store errors."""

    http_status: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, http_status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if http_status is not None:
            self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the JSON error body."""
        return {"message": self.message}


class MissingFieldError(UserStoreError):
    """A required field is absent from a create payload."""


class InvalidFormatError(UserStoreError):
    """A name, email or age failed its format check."""

    def __init__(self, message: str, field: str, user_id: Any = None):
        super().__init__(message)
        self.field = field
        self.user_id = user_id


class NotFoundError(UserStoreError):
    """The referenced user id is not in the store."""

    http_status = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str, user_id: Any = None):
        super().__init__(message)
        self.user_id = user_id


class MalformedBodyError(UserStoreError):
    """The request body does not have the expected top-level shape."""


class MissingIdError(UserStoreError):
    """A bulk update item carries no id."""
