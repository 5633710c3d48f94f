"""Shared exceptions for the chat API."""
from typing import Any, Dict, Optional


class ChatAPIException(Exception):
    """Base exception for the chat API.

    ``message`` is safe to return to clients; anything sensitive belongs in
    ``details`` or the chained cause, which are only logged.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ChatAPIException):
    """Raised when input validation fails."""

    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "VALIDATION_ERROR", details)


class NotFoundError(ChatAPIException):
    """Raised when a resource is not found."""

    status_code = 404

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "NOT_FOUND", details)


class MethodNotAllowedError(ChatAPIException):
    """Raised when a route is called with an unsupported HTTP method."""

    status_code = 405

    def __init__(self, allowed: str):
        super().__init__(
            f"Only {allowed} is allowed", "METHOD_NOT_ALLOWED", {"allowed": allowed}
        )


class StorageError(ChatAPIException):
    """Raised when storage operations fail."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "STORAGE_ERROR", details)


class ServiceUnavailableError(ChatAPIException):
    """Raised when the process cannot serve the request right now."""

    status_code = 503

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "SERVICE_UNAVAILABLE", details)
