"""Controller for the Messages feature."""
from typing import Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.messages.dtos import ConversationDTO, PostMessageRequest
from api.features.messages.exceptions import (
    ConversationNotFoundError,
    InvalidConversationIDError,
    InvalidMessageBodyError,
)
from api.features.messages.service import MessageService
from api.shared.dtos import MessageResponse
from api.shared.utils import first_segment, parse_int


class MessageController:
    """Validates requests and shapes responses for message operations."""

    def __init__(self, message_service: MessageService) -> None:
        self.message_service = message_service

    @staticmethod
    def parse_message(body: Optional[bytes]) -> PostMessageRequest:
        # JSON shape first, then the conversation id range.
        if body is None:
            raise InvalidMessageBodyError({"reason": "body read timed out"})
        try:
            request = PostMessageRequest.model_validate_json(body)
        except PydanticValidationError as e:
            raise InvalidMessageBodyError({"reason": str(e)}) from e
        if request.conversation_id < 1:
            raise InvalidConversationIDError(request.conversation_id)
        return request

    @staticmethod
    def parse_conversation_id(path: str) -> int:
        raw_id = first_segment(path)
        conversation_id = parse_int(raw_id)
        if conversation_id is None or conversation_id < 1:
            raise ConversationNotFoundError(raw_id)
        return conversation_id

    async def post_message(
        self,
        *,
        body: Optional[bytes],
        db_session: AsyncSession,
    ) -> MessageResponse:
        request = self.parse_message(body)
        await self.message_service.post_message(db_session, request)
        return MessageResponse(message="Message posted")

    async def get_conversation(
        self,
        *,
        path: str,
        db_session: AsyncSession,
    ) -> ConversationDTO:
        conversation_id = self.parse_conversation_id(path)
        return await self.message_service.get_conversation(db_session, conversation_id)
