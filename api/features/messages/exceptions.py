"""Exceptions for the Messages feature."""
from typing import Any, Dict, Optional

from api.shared.exceptions import NotFoundError, StorageError, ValidationError


class InvalidMessageBodyError(ValidationError):
    """Raised when the request body does not decode into a message."""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__("Invalid JSON body", details)


class InvalidConversationIDError(ValidationError):
    """Raised when a posted message has a conversation id below 1."""

    def __init__(self, conversation_id: int):
        super().__init__(
            "Invalid conversation ID", {"conversation_id": conversation_id}
        )


class ConversationNotFoundError(NotFoundError):
    """Raised when the conversation id in the path is missing or invalid."""

    def __init__(self, raw_id: str):
        super().__init__("Invalid conversation ID", {"raw_id": raw_id})


class MessagePostError(StorageError):
    """Raised when a message cannot be stored."""

    def __init__(self, conversation_id: int):
        super().__init__(
            "Failed to post message", {"conversation_id": conversation_id}
        )


class ConversationFetchError(StorageError):
    """Raised when a conversation cannot be read."""

    def __init__(self, conversation_id: int):
        super().__init__(
            "Failed to retrieve conversation", {"conversation_id": conversation_id}
        )
