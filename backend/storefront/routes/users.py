"""
Storefront Backend: User Route Handlers
========================================

What:  User lookups (never including the password) and partial updates.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Response

from storefront.exceptions import NotFoundError
from storefront.schemas.common import ErrorResponse
from storefront.schemas.user import UserPatch, UserPatchRequest, UserResponse
from storefront.services.gateway import PersistenceGateway, get_gateway

router = APIRouter(tags=["Users"])


@router.get(
    "/user/{user_id}",
    response_model=UserResponse,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Get a user by id",
)
async def get_user(
    user_id: str,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> UserResponse:
    user = await gateway.get_user(user_id)
    if user is None:
        raise NotFoundError(resource="user", resource_id=user_id)
    return user


@router.get("/users", response_model=List[UserResponse], summary="List users")
async def list_users(
    gateway: PersistenceGateway = Depends(get_gateway),
) -> List[UserResponse]:
    return await gateway.list_users()


@router.patch(
    "/user/{user_id}",
    status_code=200,
    response_class=Response,
    summary="Update a user's email and/or password",
)
async def update_user(
    user_id: str,
    updates: Optional[UserPatchRequest] = Body(default=None),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> Response:
    """
    Only the fields present in the body are changed; `{"email": null}`
    supplies a null email. An empty body `{}`, or no body at all, is
    accepted and changes nothing.
    """
    # exclude_unset keeps "left out" apart from "sent as null"
    supplied = updates.model_dump(exclude_unset=True) if updates is not None else {}
    patch = UserPatch(id=user_id, **supplied)
    await gateway.update_user(patch)
    return Response(status_code=200)
