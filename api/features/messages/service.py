"""Message service: stores messages and assembles conversations.

Storage failures are logged here with their cause and re-raised as feature
exceptions whose messages are safe to show to clients.
"""
from __future__ import annotations

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.messages import repository
from api.features.messages.dtos import ConversationDTO, MessageDTO, PostMessageRequest
from api.features.messages.exceptions import ConversationFetchError, MessagePostError

logger = structlog.get_logger("chat.messages.service")

# asyncpg raises OSError subclasses when the server is unreachable.
STORAGE_ERRORS = (SQLAlchemyError, OSError)


class MessageService:
    """Single point of contact between the endpoints and the messages table."""

    async def post_message(
        self, db_session: AsyncSession, request: PostMessageRequest
    ) -> None:
        try:
            await repository.insert_message(
                db_session,
                sender=request.sender,
                conversation_id=request.conversation_id,
                message=request.message,
            )
        except STORAGE_ERRORS as e:
            logger.error(
                "storage.insert.failed",
                conversation_id=request.conversation_id,
                error=str(e),
            )
            raise MessagePostError(request.conversation_id) from e

    async def get_conversation(
        self, db_session: AsyncSession, conversation_id: int
    ) -> ConversationDTO:
        try:
            rows = await repository.fetch_conversation_messages(
                db_session, conversation_id=conversation_id
            )
        except STORAGE_ERRORS as e:
            logger.error(
                "storage.select.failed",
                conversation_id=conversation_id,
                error=str(e),
            )
            raise ConversationFetchError(conversation_id) from e

        return ConversationDTO(
            id=conversation_id,
            messages=[MessageDTO(**row) for row in rows],
        )
