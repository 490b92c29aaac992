"""Request validation dependencies shared by the API routes."""
from __future__ import annotations

import json
import re
from typing import Any, Callable, Dict, Type, TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

ModelT = TypeVar("ModelT", bound=BaseModel)


def is_valid_email(value: object) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


async def json_body(request: Request) -> Dict[str, Any]:
    """Decode the request body as a JSON object; an empty body reads as ``{}``."""

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise ValidationError("Invalid JSON body") from exc
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def require_fields(*fields: str) -> Callable[..., None]:
    """Build a dependency rejecting bodies where any of ``fields`` is missing or falsy.

    Fields are checked in the order given and the first failure wins.
    """

    def dependency(body: Dict[str, Any] = Depends(json_body)) -> None:
        for field in fields:
            if not body.get(field):
                raise ValidationError(f"Missing required field: {field}")

    return dependency


def require_valid_email(body: Dict[str, Any] = Depends(json_body)) -> None:
    if not is_valid_email(body.get("email")):
        raise ValidationError("Invalid email format")


def parse_payload(model: Type[ModelT], body: Dict[str, Any]) -> ModelT:
    """Validate ``body`` against ``model``, reporting the first offending field."""

    try:
        return model.model_validate(body)
    except PydanticValidationError as exc:
        errors = exc.errors()
        location = ".".join(str(part) for part in errors[0]["loc"]) if errors else ""
        raise ValidationError(f"Invalid value for field: {location or 'body'}") from exc


__all__ = [
    "EMAIL_PATTERN",
    "is_valid_email",
    "json_body",
    "parse_payload",
    "require_fields",
    "require_valid_email",
]
