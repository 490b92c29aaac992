"""HTTP middleware for the admin API."""
from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse

logger = logging.getLogger("acme_admin.requests")
error_logger = logging.getLogger("acme_admin.errors")


async def log_requests(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Log method, path, status code, duration and start time of every request."""

    timestamp = datetime.now(timezone.utc).isoformat()
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        duration_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            "%s %s %s - %dms - %s",
            request.method,
            request.url.path,
            status_code,
            duration_ms,
            timestamp,
        )


async def handle_unexpected_errors(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Turn uncaught exceptions into a generic 500 response, logging the stack trace once."""

    try:
        return await call_next(request)
    except Exception:
        error_logger.exception("Unhandled error while processing %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


__all__ = ["handle_unexpected_errors", "log_requests"]
