"""FastAPI application exposing the user and team admin endpoints."""
from __future__ import annotations

from typing import Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .auth import register_auth_routes
from .config import Settings, load_settings
from .errors import ApiError
from .middleware import handle_unexpected_errors, log_requests
from .stats import register_stats_routes
from .store import Store
from .teams import register_team_routes
from .users import register_user_routes

API_VERSION = "1.0.0"


def build_store(settings: Settings) -> Store:
    """Create the store described by ``settings``."""

    if settings.seed_data:
        return Store(latency=settings.store_latency)
    return Store(users=[], teams=[], latency=settings.store_latency)


def _error_response(status_code: int, message: str, headers: Dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        location = ".".join(str(part) for part in errors[0]["loc"]) if errors else ""
        return _error_response(status.HTTP_400_BAD_REQUEST, f"Invalid value for field: {location or 'request'}")


def create_app(
    *,
    store: Store | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    if settings is None:
        settings = load_settings()
    if store is None:
        store = build_store(settings)

    app = FastAPI(
        title="Acme Admin API",
        description="Manage Acme users, teams and team membership",
        version=API_VERSION,
    )
    app.state.store = store
    app.state.settings = settings
    # Added first, so log_requests wraps it and records the 500.
    app.middleware("http")(handle_unexpected_errors)
    app.middleware("http")(log_requests)
    _register_error_handlers(app)

    @app.get("/health")
    async def healthcheck() -> Dict[str, str]:
        return {"status": "ok"}

    register_user_routes(app, store)
    register_team_routes(app, store)
    register_auth_routes(app, store)
    register_stats_routes(app, store)

    return app


__all__ = ["API_VERSION", "build_store", "create_app"]
