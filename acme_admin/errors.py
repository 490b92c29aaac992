"""Exceptions that map directly onto HTTP error responses."""

from __future__ import annotations


class ApiError(Exception):
    """Base class for errors rendered as ``{"error": message}``."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 400
    default_message = "Validation failed"


class AuthenticationError(ApiError):
    status_code = 401
    default_message = "Invalid credentials"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Not found"


class ConflictError(ApiError):
    status_code = 409
    default_message = "Conflict"


__all__ = [
    "ApiError",
    "AuthenticationError",
    "ConflictError",
    "NotFoundError",
    "ValidationError",
]
