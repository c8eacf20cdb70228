"""Shared fixtures: fresh store, service and test client per test.

Invariants:
    - Every test gets its own empty UserStore; nothing leaks between tests
    - Ids are deterministic ("user-1", "user-2", ...) so assertions can name them
"""

import itertools

import pytest
from fastapi.testclient import TestClient

from user_store_api.app.main import create_app
from user_store_api.app.services.user_service import UserService
from user_store_api.app.services.user_store import UserStore


def sequential_ids(prefix: str = "user"):
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


@pytest.fixture
def store():
    return UserStore(id_generator=sequential_ids())


@pytest.fixture
def service(store):
    return UserService(store)


@pytest.fixture
def client(store):
    with TestClient(create_app(store=store)) as test_client:
        yield test_client


@pytest.fixture
def aarav():
    return {"name": "Aarav Jain", "email": "aarav@example.com", "age": 22}
