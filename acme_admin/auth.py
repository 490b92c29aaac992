"""Email-only login and stateless logout.

There are no passwords, sessions or tokens: a successful login returns the
matching user record and the client keeps track of it on its own.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, FastAPI
from pydantic import BaseModel

from .errors import AuthenticationError
from .store import Store
from .users import UserResponse, user_to_response
from .validation import json_body, parse_payload, require_fields, require_valid_email

logger = logging.getLogger("acme_admin.api.auth")


class LoginRequest(BaseModel):
    email: str


class LoginResponse(BaseModel):
    message: str
    user: UserResponse


class MessageResponse(BaseModel):
    message: str


def register_auth_routes(app: FastAPI, store: Store) -> None:
    router = APIRouter(prefix="/api/auth", tags=["auth"])

    @router.post(
        "/login",
        response_model=LoginResponse,
        dependencies=[Depends(require_fields("email")), Depends(require_valid_email)],
    )
    async def login(body: Dict[str, Any] = Depends(json_body)) -> LoginResponse:
        payload = parse_payload(LoginRequest, body)
        user = await store.find_user_by_email(payload.email)
        if user is None:
            logger.warning("Failed login attempt for %s", payload.email)
            raise AuthenticationError("Invalid credentials")
        logger.info("User %s logged in", user.id)
        return LoginResponse(message="Login successful", user=user_to_response(user))

    @router.post("/logout", response_model=MessageResponse)
    async def logout() -> MessageResponse:
        return MessageResponse(message="Logout successful")

    app.include_router(router)


__all__ = ["register_auth_routes"]
