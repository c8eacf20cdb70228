"""
User endpoints for API v1.

Single and bulk create, read, update and delete of users.  Request
bodies are taken as raw JSON, decoded by ``schemas.requests`` and
handed to ``UserService``; errors raised on the way are turned into
``{"message": ...}`` responses by the handlers installed in
``main.create_app``.
"""

from typing import Any, List, Union

from fastapi import APIRouter, Body, Depends, Request, status

from user_store_api.app.schemas.requests import (
    decode_bulk_delete,
    decode_bulk_update,
    decode_create,
    decode_update,
)
from user_store_api.app.schemas.user import BulkDeleteResult, MessageResponse, UserRead
from user_store_api.app.services.user_service import UserService


router = APIRouter()


def get_user_service(request: Request) -> UserService:
    """Return the service owned by the running application."""
    return request.app.state.user_service


@router.post(
    "",
    response_model=Union[UserRead, List[UserRead]],
    status_code=status.HTTP_201_CREATED,
    summary="Create one or more users",
)
async def create_users(
    body: Any = Body(..., examples=[{"name": "Aarav Jain", "email": "aarav@example.com", "age": 22}]),
    service: UserService = Depends(get_user_service),
) -> Union[UserRead, List[UserRead]]:
    """Create a single user from an object or several from an array.

    Returns the created user, or the created users in request order
    when an array was sent.  Items of an array are stored as soon as
    they validate, so an invalid item later in the array still leaves
    the earlier ones created.
    """
    return service.create_users(decode_create(body))


@router.get("", response_model=List[UserRead], summary="Get all users")
async def list_users(service: UserService = Depends(get_user_service)) -> List[UserRead]:
    """Return every user in creation order."""
    return service.list_users()


@router.get("/{user_id}", response_model=UserRead, summary="Get a user by ID")
async def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> UserRead:
    return service.get_user(user_id)


@router.put("/{user_id}", response_model=UserRead, summary="Update a user by ID")
async def update_user(
    user_id: str,
    body: Any = Body(..., examples=[{"age": 30}]),
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Update the fields present in the body; other fields keep their values."""
    return service.update_user(user_id, decode_update(body))


@router.put("", response_model=List[UserRead], summary="Bulk update users")
async def bulk_update_users(
    body: Any = Body(..., examples=[[{"id": "<user id>", "email": "new@example.com"}]]),
    service: UserService = Depends(get_user_service),
) -> List[UserRead]:
    """Apply partial updates, each addressed by ``id``.

    Processing stops at the first failing item; items before it stay
    updated.
    """
    return service.bulk_update_users(decode_bulk_update(body))


@router.delete("/{user_id}", response_model=MessageResponse, summary="Delete a user by ID")
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)) -> MessageResponse:
    return service.delete_user(user_id)


@router.delete("", response_model=BulkDeleteResult, summary="Bulk delete users")
async def bulk_delete_users(
    body: Any = Body(..., examples=[["<user id>", "<another id>"]]),
    service: UserService = Depends(get_user_service),
) -> BulkDeleteResult:
    """Delete every listed id that exists.

    The response partitions the ids into ``deleted`` and
    ``notFound``; unknown ids never fail the request.
    """
    return service.bulk_delete_users(decode_bulk_delete(body))
