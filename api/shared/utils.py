"""Common request helpers."""
import asyncio
import re
from typing import Optional

from starlette.requests import Request

_INTEGER = re.compile(r"[+-]?[0-9]+")

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]


def other_methods(*allowed: str) -> list[str]:
    """Every HTTP method except ``allowed``."""
    return [m for m in ALL_METHODS if m not in allowed]


async def read_body(request: Request, timeout: float) -> Optional[bytes]:
    """Read the full request body, or None if it does not arrive in time."""
    try:
        return await asyncio.wait_for(request.body(), timeout=timeout)
    except asyncio.TimeoutError:
        return None


def first_segment(path: str) -> str:
    """Return the first segment of a relative path; the rest is ignored."""
    return path.split("/", 1)[0]


def parse_int(value: str) -> Optional[int]:
    """Parse a base-10 integer with an optional sign, or return None."""
    if not _INTEGER.fullmatch(value):
        return None
    return int(value)
