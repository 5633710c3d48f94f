"""Structured access log, one event per request."""
from typing import Any, Optional

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from api.middleware.tracing import get_request_id


def client_address(request: Request) -> str:
    if request.client is None:
        return ""
    return f"{request.client.host}:{request.client.port}"


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log every request after the inner chain finishes, whatever the outcome."""

    def __init__(self, app: ASGIApp, logger: Optional[Any] = None) -> None:
        super().__init__(app)
        self.logger = logger or structlog.get_logger("chat.access")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        finally:
            self.logger.info(
                "http.request",
                request_id=get_request_id(request),
                remote_addr=client_address(request),
                method=request.method,
                path=request.url.path,
                proto=f"HTTP/{request.scope.get('http_version', '1.1')}",
                user_agent=request.headers.get("user-agent", ""),
            )
