"""DTOs for the Messages feature."""
from datetime import datetime
from typing import List, Optional

from pydantic import Field, StrictInt, StrictStr

from api.shared.dtos import BaseDTO


class PostMessageRequest(BaseDTO):
    """Body of ``POST /messages/``.

    Absent fields fall back to empty values; range checks happen in the
    controller so that a decodable body with a bad id gets its own error.
    """

    sender: StrictStr = Field(default="", description="Sender name")
    conversation_id: StrictInt = Field(default=0, description="Conversation identifier")
    message: StrictStr = Field(default="", description="Message text")


class MessageDTO(BaseDTO):
    """A stored message as returned inside a conversation."""

    sender: str = Field(description="Sender name")
    message: str = Field(description="Message text")
    created: Optional[datetime] = Field(default=None, description="Insertion time")


class ConversationDTO(BaseDTO):
    """Messages sharing one conversation id."""

    id: int = Field(description="Conversation identifier")
    messages: List[MessageDTO] = Field(
        default_factory=list, description="Messages in creation order"
    )
