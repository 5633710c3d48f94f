"""Infrastructure resources: database engine and process lifecycle state.

This module is part of the infra layer and must not import from application features.
"""
import threading
from enum import Enum
from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


class DatabaseResource:
    """Database resource for dependency injection."""

    def __init__(self, database_url: str, pool_size: int = 5, max_overflow: int = 10):
        self.database_url = database_url
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    async def init(self):
        """Initialize database connection pool."""
        if self.engine is not None:
            return self
        self.engine = create_async_engine(
            self.database_url,
            echo=False,
            pool_pre_ping=True,
            pool_recycle=3600,
            pool_size=self.pool_size,
            max_overflow=self.max_overflow,
        )
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        return self

    def get_session(self) -> AsyncSession:
        """Get database session (synchronous accessor)."""
        if self.session_factory is None:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self.session_factory()

    async def shutdown(self):
        """Dispose of pooled connections."""
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None


class LifecycleState(str, Enum):
    STARTING = "starting"
    READY = "ready"
    DRAINING = "draining"
    STOPPED = "stopped"


class Lifecycle:
    """Process lifecycle state and the readiness flag read by health checks.

    Readiness is a ``threading.Event`` so that signal handlers, the event loop
    and worker threads all see a consistent value without extra locking.
    """

    def __init__(self) -> None:
        self._ready = threading.Event()
        self._state = LifecycleState.STARTING
        self.shutdown_error: Optional[BaseException] = None

    @property
    def state(self) -> LifecycleState:
        return self._state

    def is_ready(self) -> bool:
        return self._ready.is_set()

    def mark_ready(self) -> None:
        if self._state is not LifecycleState.STARTING:
            return
        self._state = LifecycleState.READY
        self._ready.set()

    def begin_drain(self) -> None:
        # Clear first: health checks must fail before anything else happens.
        self._ready.clear()
        if self._state is not LifecycleState.STOPPED:
            self._state = LifecycleState.DRAINING

    def mark_stopped(self, error: Optional[BaseException] = None) -> None:
        self._ready.clear()
        self._state = LifecycleState.STOPPED
        self.shutdown_error = error
