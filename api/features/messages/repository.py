"""Repository for message persistence operations.

Raw SQL via SQLAlchemy for minimal overhead. Every function runs exactly one
statement; there are no multi-statement transactions.
"""
from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

CREATE_MESSAGES_TABLE = text(
    """
    CREATE TABLE IF NOT EXISTS messages (
        id SERIAL PRIMARY KEY,
        sender VARCHAR(32) NOT NULL,
        conversation_id INTEGER NOT NULL,
        message TEXT NOT NULL,
        created TIMESTAMP DEFAULT(CURRENT_TIMESTAMP)
    )
    """
)

CREATE_CONVERSATION_INDEX = text(
    """
    CREATE INDEX IF NOT EXISTS ix_messages_conversation_id
    ON messages (conversation_id)
    """
)


async def ensure_schema(engine: AsyncEngine) -> None:
    """Create the messages table and its index if they do not exist."""
    async with engine.begin() as conn:
        await conn.execute(CREATE_MESSAGES_TABLE)
        await conn.execute(CREATE_CONVERSATION_INDEX)


async def insert_message(
    session: AsyncSession,
    *,
    sender: str,
    conversation_id: int,
    message: str,
) -> None:
    sql = text(
        """
        INSERT INTO messages (sender, conversation_id, message)
        VALUES (:sender, :conversation_id, :message)
        """
    )
    await session.execute(
        sql,
        {"sender": sender, "conversation_id": conversation_id, "message": message},
    )
    await session.commit()


async def fetch_conversation_messages(
    session: AsyncSession,
    *,
    conversation_id: int,
) -> List[Dict[str, Any]]:
    sql = text(
        """
        SELECT sender, message, created
        FROM messages
        WHERE conversation_id = :conversation_id
        ORDER BY created ASC, id ASC
        """
    )
    res = await session.execute(sql, {"conversation_id": conversation_id})
    return [dict(r) for r in res.mappings().all()]
