"""Request body shape decoding."""

import pytest

from user_store_api.app.core.errors import MalformedBodyError
from user_store_api.app.schemas.requests import (
    BatchCreate,
    SingleCreate,
    decode_bulk_delete,
    decode_bulk_update,
    decode_create,
    decode_update,
)


def test_decode_create_single_object(aarav):
    payload = decode_create(aarav)

    assert isinstance(payload, SingleCreate)
    assert payload.user.name == "Aarav Jain"


def test_decode_create_array(aarav):
    payload = decode_create([aarav, {"name": "Jo"}])

    assert isinstance(payload, BatchCreate)
    assert [user.name for user in payload.users] == ["Aarav Jain", "Jo"]
    assert not payload.users[1].provided("age")


def test_decode_create_keeps_explicit_null_as_present():
    payload = decode_create({"name": "Jo", "email": "jo@example.com", "age": None})

    assert payload.user.provided("age")
    assert payload.user.age is None


def test_decode_create_keeps_raw_values():
    payload = decode_create({"name": "Jo", "email": "jo@example.com", "age": "22"})

    assert payload.user.age == "22"


@pytest.mark.parametrize("body", ["Aarav", 5, None, True, [{"name": "Jo"}, "x"], [1]])
def test_decode_create_rejects_other_shapes(body):
    with pytest.raises(MalformedBodyError):
        decode_create(body)


def test_decode_update_requires_object():
    assert decode_update({"age": 30}).model_fields_set == {"age"}
    with pytest.raises(MalformedBodyError):
        decode_update([{"age": 30}])


def test_decode_bulk_update():
    items = decode_bulk_update([{"id": "user-1", "age": 30}, {"email": "a@b.co"}])

    assert items[0].id == "user-1"
    assert not items[1].provided("id")


@pytest.mark.parametrize("body", [{"id": "user-1"}, "user-1", None, ["user-1"]])
def test_decode_bulk_update_rejects_non_object_arrays(body):
    with pytest.raises(MalformedBodyError, match="array of user updates"):
        decode_bulk_update(body)


def test_decode_bulk_delete():
    assert decode_bulk_delete(["a", "b"]) == ["a", "b"]
    assert decode_bulk_delete([]) == []
    with pytest.raises(MalformedBodyError, match="array of user IDs"):
        decode_bulk_delete({"ids": ["a"]})
