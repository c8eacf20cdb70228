"""
In-memory storage for user records.

``UserStore`` keeps users in an insertion-ordered ``dict`` keyed by
id.  The store is an ordinary object created by the application (see
``main.create_app``) rather than module state, so tests can build a
fresh one per test and inject a deterministic id generator.

The store does no validation; ``UserService`` only hands it values
that have already passed the checks in ``core.validators``.
"""

import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterator, List, Optional, Set

logger = logging.getLogger(__name__)

IdGenerator = Callable[[], str]

# How many times a colliding id is regenerated before giving up.
MAX_ID_ATTEMPTS = 5

MUTABLE_FIELDS = ("name", "email", "age")


def generate_user_id() -> str:
    """Return a random UUID4 string."""
    return str(uuid.uuid4())


@dataclass
class UserRecord:
    id: str
    name: str
    email: str
    age: int


class UserStore:
    """Process-local keyed collection of users.

    Every public method takes the store's re-entrant lock.  Callers
    that need several calls to behave as one atomic step (check that a
    user exists, then change it) wrap them in ``locked()``.
    """

    def __init__(self, id_generator: Optional[IdGenerator] = None):
        self._users: Dict[str, UserRecord] = {}
        # Ids handed out during the lifetime of the store, including
        # those of deleted users, so that no id is ever reused.
        self._issued_ids: Set[str] = set()
        self._next_id = id_generator or generate_user_id
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator["UserStore"]:
        with self._lock:
            yield self

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def __contains__(self, user_id: object) -> bool:
        with self._lock:
            return isinstance(user_id, str) and user_id in self._users

    def _new_id(self) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = self._next_id()
            if candidate and candidate not in self._issued_ids:
                self._issued_ids.add(candidate)
                return candidate
            logger.warning("Id generator returned an unusable id %r, retrying", candidate)
        raise RuntimeError(f"Could not generate a unique user id after {MAX_ID_ATTEMPTS} attempts")

    def create(self, name: str, email: str, age: int) -> UserRecord:
        """Store a new user under a freshly generated id and return a copy."""
        with self._lock:
            record = UserRecord(id=self._new_id(), name=name, email=email, age=age)
            self._users[record.id] = record
            return replace(record)

    def get_all(self) -> List[UserRecord]:
        """Return copies of all users in insertion order."""
        with self._lock:
            return [replace(record) for record in self._users.values()]

    def get_by_id(self, user_id: Any) -> Optional[UserRecord]:
        with self._lock:
            if not isinstance(user_id, str):
                return None
            record = self._users.get(user_id)
            return replace(record) if record is not None else None

    def update(self, user_id: str, changes: Dict[str, Any]) -> Optional[UserRecord]:
        """Overwrite the given fields of a user.

        Only ``name``, ``email`` and ``age`` can change; the id is
        immutable.  Returns the updated copy, or ``None`` if the user
        does not exist.
        """
        unknown = set(changes) - set(MUTABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        with self._lock:
            record = self._users.get(user_id)
            if record is None:
                return None
            for field, value in changes.items():
                setattr(record, field, value)
            return replace(record)

    def delete(self, user_id: Any) -> bool:
        """Remove a user.  Returns ``False`` if the id is unknown."""
        with self._lock:
            if not isinstance(user_id, str) or user_id not in self._users:
                return False
            del self._users[user_id]
            return True
