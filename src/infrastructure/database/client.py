import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)
from sqlalchemy.exc import SQLAlchemyError
from src.infrastructure.database.models import Base

logger = logging.getLogger(__name__)


class DatabaseClient:
    """Async access to the record store holding accounts and trades."""

    def __init__(
        self,
        db_url: str,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        echo: bool = False,
        create_schema: bool = True,
    ):
        self._engine = create_async_engine(
            db_url,
            echo=echo,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_recycle=pool_recycle,
            pool_pre_ping=True,
        )
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            expire_on_commit=False,
            class_=AsyncSession,
        )
        self._create_schema = create_schema
        self._is_initialized = False

    async def init(self) -> None:
        """Check connectivity and create missing tables. Idempotent."""
        if self._is_initialized:
            return

        logger.info("Connecting to record store...")
        async with self._engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if self._create_schema:
                await conn.run_sync(Base.metadata.create_all)
                logger.info("Schema checked")

        self._is_initialized = True
        logger.info("Record store client ready")

    async def close(self) -> None:
        if self._is_initialized:
            await self._engine.dispose()
            self._is_initialized = False
            logger.info("Record store client closed")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
            except Exception as e:
                await session.rollback()
                logger.error(f"Session error, rolled back: {e}")
                raise

    async def health_check(self) -> bool:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Record store health check failed: {e}")
            return False
