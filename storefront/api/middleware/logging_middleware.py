"""
Request logging middleware.

One log line per checkout request: route template, basket/order ids taken
from the path, status and duration. Every response carries the request's
correlation id in X-Correlation-ID.
"""

import logging
import re
import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

_VALID_CORRELATION_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

# Path parameters worth repeating in the log line
_CONTEXT_PARAMS = ("basket_id", "order_id")


def resolve_correlation_id(header_value: str | None) -> str:
    """Reuse a well-formed incoming correlation id, otherwise mint a new one."""
    if header_value and _VALID_CORRELATION_ID.match(header_value):
        return header_value
    return uuid.uuid4().hex[:12]


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request once it has completed.

    Requests slower than ``slow_request_ms`` are logged as warnings, as are
    4xx/5xx responses.
    """

    QUIET_PATHS: frozenset[str] = frozenset({"/health", "/favicon.ico"})

    def __init__(self, app: ASGIApp, slow_request_ms: float = 1000.0) -> None:
        super().__init__(app)
        self.slow_request_ms = slow_request_ms

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        correlation_id = resolve_correlation_id(request.headers.get(CORRELATION_HEADER))
        request.state.correlation_id = correlation_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(f"[{correlation_id}] {self._describe(request)} failed")
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers[CORRELATION_HEADER] = correlation_id

        if request.url.path not in self.QUIET_PATHS:
            level = logging.INFO
            if response.status_code >= 400 or elapsed_ms > self.slow_request_ms:
                level = logging.WARNING
            logger.log(
                level,
                f"[{correlation_id}] {self._describe(request)} -> {response.status_code} ({elapsed_ms:.1f}ms)",
            )
        return response

    def _describe(self, request: Request) -> str:
        """Method, route template and the basket/order ids it was called with."""
        route = request.scope.get("route")
        path = getattr(route, "path", None) or request.url.path
        context = " ".join(
            f"{name}={request.path_params[name]}" for name in _CONTEXT_PARAMS if name in request.path_params
        )
        return f"{request.method} {path} {context}".rstrip()
