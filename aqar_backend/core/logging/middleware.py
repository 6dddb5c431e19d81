"""
Request tracking middleware for logging correlation.
Every request gets a short request ID that is attached to its log records
and echoed back in the ``x-request-id`` response header.
"""

import logging
import uuid
from collections.abc import Callable
from contextvars import ContextVar

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "x-request-id"

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def generate_request_id() -> str:
    """Generate a short unique ID for request tracking."""
    return str(uuid.uuid4())[:8]


def get_request_id() -> str:
    """Get the current request ID or generate a new one."""
    request_id = _request_id.get()
    if request_id is None:
        request_id = generate_request_id()
        _request_id.set(request_id)
    return request_id


def set_request_id(request_id: str) -> None:
    """Set the request ID for the current context."""
    _request_id.set(request_id)


class RequestIdFilter(logging.Filter):
    """Logging filter that adds the request ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Set the request ID for the request context."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        set_request_id(request_id)

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id

        return response
