"""
Business logic for users.

``UserService`` validates incoming user data and applies create,
read, update and delete operations, single and bulk, against a
``UserStore``.  Each operation runs while holding the store's lock so
that its existence checks and mutations form one atomic step.

Bulk operations deliberately do not share one failure policy:

* bulk create commits every item as soon as it validates, so a later
  invalid item aborts the request but leaves earlier items stored;
* bulk update stops at the first failing item without rolling back
  the items already updated;
* bulk delete attempts every id and never aborts.

Existing API clients rely on this behaviour, so it is kept
as is.  Unifying it (validate everything, then commit everything)
would be a deliberate API change.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Union

from ..core.errors import (
    InvalidFormatError,
    MissingFieldError,
    MissingIdError,
    NotFoundError,
)
from ..core.validators import validate_age, validate_email, validate_name
from ..schemas.requests import CreatePayload, SingleCreate
from ..schemas.user import (
    BulkDeleteResult,
    MessageResponse,
    UserBulkUpdateItem,
    UserCreate,
    UserFields,
    UserRead,
    UserUpdate,
)
from .user_store import UserStore

logger = logging.getLogger(__name__)

FIELD_VALIDATORS = (
    ("name", validate_name),
    ("email", validate_email),
    ("age", validate_age),
)

UPDATE_ERROR_MESSAGES = {
    "name": "Invalid name format",
    "email": "Invalid email format",
    "age": "Invalid age. Must be 1-120",
}

CREATE_ERROR_MESSAGES = {
    "name": "Invalid name: {}",
    "email": "Invalid email format: {}",
    "age": "Invalid age: {}",
}


def _display(value: Any) -> str:
    """Render a JSON value for an error message.

    ``null``/``true`` rather than ``None``/``True``, and integral
    floats without a trailing ``.0``.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return json.dumps(value)


def _is_falsy(value: Any) -> bool:
    """JSON falsiness: ``null``, ``false``, ``0`` and ``""``.

    Empty arrays and objects are values, not absences, so this is not
    Python truthiness.
    """
    if isinstance(value, bool):
        return not value
    if value is None:
        return True
    if isinstance(value, (int, float)):
        return value == 0 or value != value
    return value == ""


def _normalise(field: str, value: Any) -> Any:
    # JSON has a single number type; an integral float age is stored as int.
    if field == "age":
        return int(value)
    return value


def _validated_changes(
    fields: UserFields, invalid: Callable[[str], InvalidFormatError]
) -> Dict[str, Any]:
    """Validate every field present in ``fields``.

    Absent fields are skipped.  The first invalid one raises the error
    built by ``invalid``; otherwise the present fields are returned,
    ready to be written.
    """
    changes = {}
    for field, check in FIELD_VALIDATORS:
        if not fields.provided(field):
            continue
        value = getattr(fields, field)
        if not check(value):
            raise invalid(field)
        changes[field] = _normalise(field, value)
    return changes


class UserService:
    """Validation and CRUD operations over a ``UserStore``."""

    def __init__(self, store: UserStore):
        self.store = store

    def _create_one(self, data: UserCreate) -> UserRead:
        # ``age`` is only missing when the key is absent; ``0`` or ``null``
        # are present and fail validation instead.
        if _is_falsy(data.name) or _is_falsy(data.email) or not data.provided("age"):
            raise MissingFieldError("Each user must have name, email, and age")
        changes = _validated_changes(
            data,
            lambda field: InvalidFormatError(
                CREATE_ERROR_MESSAGES[field].format(_display(getattr(data, field))),
                field=field,
            ),
        )
        record = self.store.create(**changes)
        logger.info("Created user %s", record.id)
        return UserRead.model_validate(record)

    def create_users(self, payload: CreatePayload) -> Union[UserRead, List[UserRead]]:
        """Create one user or a batch of users.

        The result mirrors the payload: a single user for
        ``SingleCreate``, a list in input order for ``BatchCreate``.
        Items of a batch are stored one by one as they validate; a
        failing item raises without removing the ones already stored.
        """
        with self.store.locked():
            if isinstance(payload, SingleCreate):
                return self._create_one(payload.user)
            created = [self._create_one(data) for data in payload.users]
            logger.info("Bulk created %d users", len(created))
            return created

    def list_users(self) -> List[UserRead]:
        return [UserRead.model_validate(record) for record in self.store.get_all()]

    def get_user(self, user_id: str) -> UserRead:
        record = self.store.get_by_id(user_id)
        if record is None:
            raise NotFoundError("User not found", user_id=user_id)
        return UserRead.model_validate(record)

    def update_user(self, user_id: str, patch: UserUpdate) -> UserRead:
        """Overwrite the fields present in ``patch``.

        Raises ``NotFoundError`` for an unknown id and
        ``InvalidFormatError`` for the first invalid field, in which
        case the user is left untouched.
        """
        with self.store.locked():
            if user_id not in self.store:
                raise NotFoundError("User not found", user_id=user_id)
            changes = _validated_changes(
                patch,
                lambda field: InvalidFormatError(
                    UPDATE_ERROR_MESSAGES[field], field=field, user_id=user_id
                ),
            )
            record = self.store.update(user_id, changes)
            logger.info("Updated user %s (%s)", user_id, ", ".join(changes) or "no changes")
            return UserRead.model_validate(record)

    def bulk_update_users(self, items: List[UserBulkUpdateItem]) -> List[UserRead]:
        """Apply a list of partial updates in order.

        Stops at the first item with a missing id, an unknown id or an
        invalid field.  Items before it remain updated.
        """
        updated = []
        with self.store.locked():
            for item in items:
                if not item.provided("id") or _is_falsy(item.id):
                    raise MissingIdError("Each user update must include an id")
                user_id = item.id
                if user_id not in self.store:
                    raise NotFoundError(f"User not found: {_display(user_id)}", user_id=user_id)
                changes = _validated_changes(
                    item,
                    lambda field: InvalidFormatError(
                        f"Invalid {field} for user {_display(user_id)}",
                        field=field,
                        user_id=user_id,
                    ),
                )
                updated.append(UserRead.model_validate(self.store.update(user_id, changes)))
        logger.info("Bulk updated %d users", len(updated))
        return updated

    def delete_user(self, user_id: str) -> MessageResponse:
        if not self.store.delete(user_id):
            raise NotFoundError("User not found", user_id=user_id)
        logger.info("Deleted user %s", user_id)
        return MessageResponse(message="User deleted successfully")

    def bulk_delete_users(self, user_ids: List[Any]) -> BulkDeleteResult:
        """Delete every id that exists; never stops early.

        Ids are partitioned into ``deleted`` and ``not_found``, both in
        request order.
        """
        result = BulkDeleteResult()
        with self.store.locked():
            for user_id in user_ids:
                if self.store.delete(user_id):
                    result.deleted.append(user_id)
                else:
                    result.not_found.append(user_id)
        logger.info(
            "Bulk delete: %d deleted, %d not found", len(result.deleted), len(result.not_found)
        )
        return result
