"""Middlewares del backend."""

from __future__ import annotations

import time
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from oakmont.core.logging import get_logger

logger = get_logger("oakmont.request")


def _client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Registra inicio, fin y fallas de cada request con un `x-request-id`."""

    def __init__(self, app: ASGIApp, *, skip_prefixes: tuple[str, ...] = ()) -> None:
        super().__init__(app)
        self._skip_prefixes = skip_prefixes

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if self._skip_prefixes and path.startswith(self._skip_prefixes):
            return await call_next(request)

        request_id = request.headers.get("x-request-id") or uuid4().hex
        start = time.perf_counter()
        context = {
            "request_id": request_id,
            "method": request.method,
            "path": path,
            "client_ip": _client_ip(request),
        }
        logger.info(
            "request.started",
            extra={**context, "user_agent": request.headers.get("user-agent")},
        )

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.exception(
                "request.failed", extra={**context, "duration_ms": round(duration_ms, 2)}
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["x-request-id"] = request_id
        logger.info(
            "request.completed",
            extra={
                **context,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
