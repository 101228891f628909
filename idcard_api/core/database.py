# idcard_api/core/database.py
"""Database connection and session management using SQLAlchemy."""
import contextlib
import logging
from typing import AsyncGenerator, AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from .config import Settings

logger = logging.getLogger(__name__)


class Database:
    """Engine plus session factory, built once at startup and kept on ``app.state``."""

    def __init__(self, url: str, echo: bool = False, **engine_kwargs):
        self.url = url
        self.engine = create_async_engine(url, echo=echo, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            expire_on_commit=False,
            class_=AsyncSession,
            autoflush=False,
        )

    @contextlib.asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            try:
                yield session
            except Exception as e:
                logger.error(f"Database session error: {e}")
                await session.rollback()
                raise

    async def create_all(self):
        from ..models import Base

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self):
        from ..models import Base

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def health_check(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    async def dispose(self):
        await self.engine.dispose()
        logger.info("Database connections closed")


def build_database(settings: Settings) -> Database:
    if settings.database_url.startswith("sqlite"):
        return Database(settings.database_url)

    return Database(
        settings.database_url,
        echo=(settings.environment == "development"),
        pool_size=15,
        max_overflow=25,
        pool_timeout=60,
        pool_recycle=1800,
        pool_pre_ping=True,
        connect_args={
            "command_timeout": 60,
            "server_settings": {
                "jit": "off",
                "application_name": settings.app_name,
                "idle_in_transaction_session_timeout": "60s",
                "lock_timeout": "30s",
            },
        },
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session; rolls back whatever the handler left uncommitted."""
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session
