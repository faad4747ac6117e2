"""
Async SQLAlchemy engine and session factory.

``Database`` is created once per application, opened at startup and
closed at shutdown, and handed to whatever needs the store.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import Settings
from database.models import Base

logger = logging.getLogger(__name__)


class Database:
    """Owns the connection pool for one application instance."""

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 20,
        sslmode: Optional[str] = None,
        echo: bool = False,
    ) -> None:
        self.url = url
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._sslmode = sslmode
        self._echo = echo
        self.engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.get_database_url(),
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            sslmode=settings.db_sslmode,
            echo=settings.debug,
        )

    def _engine_options(self) -> Dict[str, Any]:
        backend = make_url(self.url).get_backend_name()
        options: Dict[str, Any] = {"echo": self._echo}
        if backend == "sqlite":
            return options
        options.update(
            pool_size=self._pool_size,
            max_overflow=self._max_overflow,
            pool_recycle=3600,
            pool_pre_ping=True,
        )
        if backend == "postgresql" and self._sslmode and self._sslmode != "disable":
            options["connect_args"] = {"ssl": self._sslmode}
        return options

    async def open(self) -> None:
        """Create the pooled engine. Calling it twice is a no-op."""
        if self.engine is not None:
            return
        self.engine = create_async_engine(self.url, **self._engine_options())
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def ping(self) -> None:
        """Round-trip a trivial query; raises if the database is unreachable."""
        async with self.session() as session:
            await session.execute(text("SELECT 1"))
        logger.info("Connected to database %s", make_url(self.url).render_as_string(hide_password=True))

    async def create_schema(self) -> None:
        """Create the tables if absent (idempotent)."""
        engine = self._require_engine()
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        logger.info("Users table ready")

    async def close(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self._session_factory = None
        logger.info("Database pool closed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session; commits on success and rolls back on error."""
        self._require_engine()
        assert self._session_factory is not None
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    def _require_engine(self) -> AsyncEngine:
        if self.engine is None:
            raise RuntimeError("Database is not open; call open() first")
        return self.engine
