"""Pytest configuration and shared fixtures."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

import api.features.messages.repository as repository_module
from api.main import create_fastapi_app
from api.shared.db import get_db_session


class InMemoryMessages:
    """Stands in for the messages table in HTTP tests."""

    def __init__(self) -> None:
        self.rows: List[Dict[str, Any]] = []
        self.fail = False

    def _maybe_fail(self, statement: str) -> None:
        if self.fail:
            raise OperationalError(statement, {}, Exception("connection refused"))

    async def insert_message(self, session, *, sender, conversation_id, message):
        self._maybe_fail("INSERT INTO messages")
        self.rows.append(
            {
                "id": len(self.rows) + 1,
                "sender": sender,
                "conversation_id": conversation_id,
                "message": message,
                "created": datetime.utcnow(),
            }
        )

    async def fetch_conversation_messages(self, session, *, conversation_id):
        self._maybe_fail("SELECT FROM messages")
        return [
            {"sender": r["sender"], "message": r["message"], "created": r["created"]}
            for r in self.rows
            if r["conversation_id"] == conversation_id
        ]


@pytest.fixture(scope="function")
def store(monkeypatch: pytest.MonkeyPatch) -> InMemoryMessages:
    messages = InMemoryMessages()
    monkeypatch.setattr(repository_module, "insert_message", messages.insert_message)
    monkeypatch.setattr(
        repository_module,
        "fetch_conversation_messages",
        messages.fetch_conversation_messages,
    )
    return messages


@pytest.fixture(scope="function")
def app(store: InMemoryMessages):
    _app = create_fastapi_app()

    async def _no_session():
        yield None

    _app.dependency_overrides[get_db_session] = _no_session
    return _app


@pytest.fixture(scope="function")
def client(app) -> TestClient:
    return TestClient(app)
