"""Handler deadline and last-resort error conversion."""
import asyncio

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from api.middleware.tracing import get_request_id
from api.shared.response import error_response

logger = structlog.get_logger("chat.middleware")


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Turn exceptions no handler claimed into a generic 500 JSON response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception(
                "http.request.unhandled_error",
                request_id=get_request_id(request),
                path=request.url.path,
            )
            return error_response(500, "Internal Server Error")


class DeadlineMiddleware(BaseHTTPMiddleware):
    """Bound the time a handler may take to produce its response."""

    def __init__(self, app: ASGIApp, timeout: float) -> None:
        super().__init__(app)
        self.timeout = timeout

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "http.request.timeout",
                request_id=get_request_id(request),
                path=request.url.path,
                timeout=self.timeout,
            )
            return error_response(503, "Request timed out")
