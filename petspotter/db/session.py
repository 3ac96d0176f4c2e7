"""
Async database session management.
Design: StoreContext owns the engine and session factory and carries a readiness flag.
It lives on app.state; request-scoped sessions are drawn from it (no module-global connection).

`ready` follows the live connection: a failed connect or a disconnect clears it,
and try_recover() sets it again once a round trip succeeds.
"""

import logging
import time
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy import event, text
from sqlalchemy.engine import ExceptionContext
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncConnection,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from petspotter.core.errors import ServiceUnavailableError
from petspotter.db.base import Base

logger = logging.getLogger(__name__)


class StoreContext:
    """Connection handle for the backing store. `ready` is True only while the store answers."""

    def __init__(self, database_url: str, *, echo: bool = False, recheck_seconds: float = 5.0):
        self.database_url = database_url
        self.echo = echo
        self.recheck_seconds = recheck_seconds
        self.engine: AsyncEngine | None = None
        self.session_maker: async_sessionmaker[AsyncSession] | None = None
        self.ready: bool = False
        self.create_schema = False
        self._last_check = float("-inf")

    def _engine_options(self) -> dict:
        options: dict = {"echo": self.echo, "pool_pre_ping": True}
        # Pool sizing only applies to server databases; SQLite uses its own pool class
        if not self.database_url.startswith("sqlite"):
            options.update(pool_size=10, max_overflow=20)
        return options

    def _on_error(self, ctx: ExceptionContext) -> None:
        # A failed ping is retried by the pool; only a lost or unobtainable connection counts
        if ctx.is_pre_ping:
            return
        if ctx.is_disconnect or ctx.connection is None:
            if self.ready:
                logger.error("Store connection lost: %s", type(ctx.original_exception).__name__)
            self.ready = False

    async def _verify(self, conn: AsyncConnection) -> None:
        await conn.execute(text("SELECT 1"))
        if self.create_schema:
            await conn.run_sync(Base.metadata.create_all)

    async def connect(self, *, create_schema: bool = False) -> None:
        """Open the engine and verify it with a round trip. Raises on failure; `ready` stays False."""
        self.create_schema = create_schema
        self.engine = create_async_engine(self.database_url, **self._engine_options())
        event.listen(self.engine.sync_engine, "handle_error", self._on_error)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        self._last_check = time.monotonic()
        async with self.engine.begin() as conn:
            await self._verify(conn)
        self.ready = True
        logger.info("Store connected")

    async def try_recover(self) -> bool:
        """One round trip to a store marked not ready, at most every `recheck_seconds`."""
        if self.ready:
            return True
        if self.engine is None or time.monotonic() - self._last_check < self.recheck_seconds:
            return False
        self._last_check = time.monotonic()
        try:
            async with self.engine.begin() as conn:
                await self._verify(conn)
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Store still unavailable: %s", type(e).__name__)
            return False
        self.ready = True
        logger.info("Store reconnected")
        return True

    async def disconnect(self) -> None:
        self.ready = False
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
        logger.info("Store disconnected")

    def session(self) -> AsyncSession:
        if not self.ready or self.session_maker is None:
            raise ServiceUnavailableError()
        return self.session_maker()


def get_store(request: Request) -> StoreContext | None:
    return getattr(request.app.state, "store", None)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session per request. Commit on success, rollback on error."""
    store = get_store(request)
    if store is None:
        raise ServiceUnavailableError()
    async with store.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# Type alias for FastAPI dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
