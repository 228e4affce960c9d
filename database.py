"""
Database connection and session management for the admin data layer.

This module owns the async SQLite engine, creates the schema on startup and
hands out sessions. A ``DatabaseManager`` is constructed explicitly by the
composition root; there is no module-level instance.
"""

import asyncio
from contextlib import asynccontextmanager
from enum import Enum
from typing import Any, AsyncGenerator, Dict, Optional

from loguru import logger
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.sql import text

import models  # noqa: F401  registers every table on Base.metadata
from config import DEBUG, SQLALCHEMY_DATABASE_URL
from schemas.base import Base


class DatabaseStatus(Enum):
    """Database connection status enumeration"""
    INITIALIZED = "initialized"
    NOT_INITIALIZED = "not_initialized"


class DatabaseError(Exception):
    """Raised when the store is used before it has been initialized"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class DatabaseManager:
    """Owns one async engine for the lifetime of the process."""

    def __init__(self, database_url: str = SQLALCHEMY_DATABASE_URL, echo: bool = DEBUG):
        self.database_url = database_url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None
        self._init_lock = asyncio.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if not self._engine:
            raise DatabaseError("Database is not initialized")
        return self._engine

    def _build_engine(self) -> AsyncEngine:
        return create_async_engine(self.database_url, echo=self.echo, future=True)

    async def initialize(self) -> None:
        """Open the store and create missing tables. Errors are re-raised as-is."""
        async with self._init_lock:
            if self._engine:
                logger.debug("Database already initialized, skipping")
                return

            logger.info("Initializing database at {}", self.database_url)
            self._engine = self._build_engine()
            try:
                await self._create_tables()
            except SQLAlchemyError as e:
                logger.error("Database initialization failed: {}", e)
                await self.close()
                raise

            self._session_factory = async_sessionmaker(
                bind=self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
            logger.success("Database initialized successfully")

    async def _create_tables(self) -> None:
        # create_all issues CREATE TABLE only for tables that are absent
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database connection closed")

    @asynccontextmanager
    async def session_scope(self) -> AsyncGenerator[AsyncSession, None]:
        """One session per operation: commit on success, rollback and re-raise on failure."""
        if not self._session_factory:
            raise DatabaseError("Database is not initialized")
        session = self._session_factory()
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error("Database error: {}", e)
            raise
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def check_tables_exist(self) -> Dict[str, bool]:
        """Report which of the expected tables are present."""
        async with self.engine.connect() as conn:
            existing = await conn.run_sync(lambda sync_conn: set(inspect(sync_conn).get_table_names()))

        tables = {name: name in existing for name in Base.metadata.tables}
        tables["all_tables_exist"] = all(tables.values())
        return tables

    async def health_check(self) -> bool:
        if not self._engine:
            return False
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(text("SELECT 1 as health_check"))
                return result.scalar() == 1
        except SQLAlchemyError as e:
            logger.warning("Database health check failed: {}", e)
            return False

    def get_stats(self) -> Dict[str, Any]:
        if not self._engine:
            return {"status": DatabaseStatus.NOT_INITIALIZED.value}
        return {
            "status": DatabaseStatus.INITIALIZED.value,
            "url": self.database_url,
            "tables": sorted(Base.metadata.tables),
        }


__all__ = [
    "DatabaseManager",
    "DatabaseError",
    "DatabaseStatus",
]
