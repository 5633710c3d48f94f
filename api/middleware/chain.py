"""Middleware chain applied to every request, listed outermost first."""
from typing import List

from starlette.middleware import Middleware

from api.middleware.access_log import AccessLogMiddleware
from api.middleware.errors import DeadlineMiddleware, UnhandledErrorMiddleware
from api.middleware.tracing import TracingMiddleware
from core.settings import Settings


def build_middleware(settings: Settings) -> List[Middleware]:
    return [
        Middleware(TracingMiddleware),
        Middleware(AccessLogMiddleware),
        Middleware(UnhandledErrorMiddleware),
        Middleware(DeadlineMiddleware, timeout=settings.SERVER.WRITE_TIMEOUT),
    ]
