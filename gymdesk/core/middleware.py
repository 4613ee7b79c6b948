"""CORS and request-context middleware."""

import logging
import re
import time
import uuid
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from gymdesk.core.config import settings

logger = logging.getLogger("gymdesk")

REQUEST_ID_HEADER = "X-Request-Id"
# fits audit_logs.request_id
_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")
QUIET_PATHS = frozenset({"/api/health"})


def request_id_from(header: Optional[str]) -> str:
    """Reuse a well-formed incoming id, otherwise generate one."""
    if header and _VALID_REQUEST_ID.fullmatch(header):
        return header
    return uuid.uuid4().hex


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag every request with an id and log its outcome.

    An incoming ``X-Request-Id`` is reused so calls can be traced across
    services, unless it is not a short token, in which case a fresh id
    replaces it. Denied and failed requests are logged at WARNING.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request_id_from(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        started = time.perf_counter()

        response: Response = await call_next(request)

        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time-Ms"] = str(elapsed_ms)

        if request.url.path not in QUIET_PATHS:
            level = logging.WARNING if response.status_code >= 400 else logging.INFO
            logger.log(
                level,
                "[%s] %s %s?%s -> %s (%sms)",
                request_id,
                request.method,
                request.url.path,
                request.url.query,
                response.status_code,
                elapsed_ms,
            )
        return response


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestContextMiddleware)
