"""Request-ID propagation."""
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

REQUEST_ID_HEADER = "X-Request-Id"


def next_request_id() -> str:
    """Mint a request id from the current time in nanoseconds.

    Collisions between requests arriving in the same nanosecond are possible
    and accepted.
    """
    return str(time.time_ns())


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or "unknown"


class TracingMiddleware(BaseHTTPMiddleware):
    """Attach a request id to ``request.state`` and echo it on the response."""

    def __init__(
        self, app: ASGIApp, id_factory: Callable[[], str] = next_request_id
    ) -> None:
        super().__init__(app)
        self.id_factory = id_factory

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or self.id_factory()
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
