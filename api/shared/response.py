from typing import Any, Mapping, Optional

from starlette.responses import JSONResponse


class JSONAPIResponse(JSONResponse):
    """JSON response carrying the headers every endpoint must send."""

    media_type = "application/json; charset=utf-8"

    def __init__(
        self,
        content: Any,
        status_code: int = 200,
        headers: Optional[Mapping[str, str]] = None,
        **kwargs: Any,
    ) -> None:
        merged = {"X-Content-Type-Options": "nosniff"}
        if headers:
            merged.update(headers)
        super().__init__(content, status_code=status_code, headers=merged, **kwargs)


def error_response(
    status_code: int, message: str, headers: Optional[Mapping[str, str]] = None
) -> JSONAPIResponse:
    """Create an ``{"error": ...}`` response."""
    return JSONAPIResponse({"error": message}, status_code=status_code, headers=headers)
