"""
Shape decoding for request bodies.

Endpoints accept the raw decoded JSON body and pass it through one of
the ``decode_*`` functions below before any field-level validation
happens.  Only the top-level shape is checked here (object vs. array,
array elements being objects); the field values themselves are left
for ``UserService`` to validate.
"""

from dataclasses import dataclass
from typing import Any, List, Union

from ..core.errors import MalformedBodyError
from .user import UserBulkUpdateItem, UserCreate, UserUpdate


@dataclass(frozen=True)
class SingleCreate:
    """A create request carrying one user object."""

    user: UserCreate


@dataclass(frozen=True)
class BatchCreate:
    """A create request carrying an array of user objects."""

    users: List[UserCreate]


CreatePayload = Union[SingleCreate, BatchCreate]


def decode_create(body: Any) -> CreatePayload:
    if isinstance(body, dict):
        return SingleCreate(UserCreate.model_validate(body))
    if isinstance(body, list) and all(isinstance(item, dict) for item in body):
        return BatchCreate([UserCreate.model_validate(item) for item in body])
    raise MalformedBodyError("Request body must be a user object or an array of user objects")


def decode_update(body: Any) -> UserUpdate:
    if not isinstance(body, dict):
        raise MalformedBodyError("Request body must be a user object")
    return UserUpdate.model_validate(body)


def decode_bulk_update(body: Any) -> List[UserBulkUpdateItem]:
    if not isinstance(body, list) or not all(isinstance(item, dict) for item in body):
        raise MalformedBodyError("Request body must be an array of user updates")
    return [UserBulkUpdateItem.model_validate(item) for item in body]


def decode_bulk_delete(body: Any) -> List[Any]:
    if not isinstance(body, list):
        raise MalformedBodyError("Request body must be an array of user IDs")
    return list(body)
