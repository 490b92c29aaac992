"""User management endpoints.

Users are soft-deleted: ``DELETE`` marks the record inactive and keeps it.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, FastAPI, status
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .errors import ConflictError, NotFoundError
from .models import User
from .store import Store
from .validation import json_body, parse_payload, require_fields, require_valid_email


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserResponse(CamelModel):
    id: str
    email: str
    name: str
    role: str
    status: str
    created_at: datetime
    updated_at: datetime


class UserSummaryResponse(CamelModel):
    id: str
    email: str
    name: str
    role: str


class UserProfileResponse(CamelModel):
    display_name: str
    email: str
    initials: str


class UserDeletedResponse(CamelModel):
    message: str
    user: UserResponse


class CreateUserRequest(BaseModel):
    email: str
    name: str
    role: Optional[str] = None


class UpdateUserRequest(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None


def user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        status=user.status,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def initials_for(name: str) -> str:
    """Uppercased first letter of every space-separated part of ``name``."""

    return "".join(part[0] for part in name.split(" ") if part).upper()


def register_user_routes(app: FastAPI, store: Store) -> None:
    """Mount the ``/api/users`` resource on ``app``."""

    router = APIRouter(prefix="/api/users", tags=["users"])

    async def load_user(user_id: str) -> User:
        user = await store.find_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    @router.get("", response_model=List[UserResponse])
    async def list_users() -> List[UserResponse]:
        users = await store.get_all_users()
        return [user_to_response(user) for user in users]

    @router.get("/{user_id}", response_model=UserSummaryResponse)
    async def read_user(user: User = Depends(load_user)) -> UserSummaryResponse:
        return UserSummaryResponse(id=user.id, email=user.email, name=user.name, role=user.role)

    @router.get("/{user_id}/profile", response_model=UserProfileResponse)
    async def read_user_profile(user: User = Depends(load_user)) -> UserProfileResponse:
        return UserProfileResponse(
            display_name=user.name,
            email=user.email,
            initials=initials_for(user.name),
        )

    @router.post(
        "",
        response_model=UserResponse,
        status_code=status.HTTP_201_CREATED,
        dependencies=[Depends(require_fields("email", "name")), Depends(require_valid_email)],
    )
    async def create_user(body: Dict[str, Any] = Depends(json_body)) -> UserResponse:
        payload = parse_payload(CreateUserRequest, body)
        user = await store.register_user(payload.email, payload.name, payload.role)
        if user is None:
            raise ConflictError("Email already exists")
        return user_to_response(user)

    @router.patch("/{user_id}", response_model=UserResponse)
    async def update_user(user_id: str, body: Dict[str, Any] = Depends(json_body)) -> UserResponse:
        payload = parse_payload(UpdateUserRequest, body)
        user = await store.update_user(user_id, payload.model_dump(exclude_none=True))
        if user is None:
            raise NotFoundError("User not found")
        return user_to_response(user)

    @router.delete("/{user_id}", response_model=UserDeletedResponse)
    async def delete_user(user_id: str) -> UserDeletedResponse:
        user = await store.delete_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return UserDeletedResponse(message="User deactivated", user=user_to_response(user))

    app.include_router(router)


__all__ = [
    "CamelModel",
    "UserResponse",
    "initials_for",
    "register_user_routes",
    "user_to_response",
]
