"""
Database engine and session management.

One `Database` per application, built in the lifespan from
`settings.database` and stored on `app.state`.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from showlist.core.config.settings import DatabaseSettings
from showlist.core.logging import get_logger
from showlist.infrastructure.database.models import Base

logger = get_logger(__name__)


class Database:
    """
    Async engine plus session factory.

    Usage:
        database = Database(settings.database)
        await database.create_all()

        async with database.session() as session:
            ...

        await database.dispose()
    """

    def __init__(self, settings: DatabaseSettings):
        self._settings = settings
        self.engine = create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Keeps loaded rows usable after commit
        )

    async def create_all(self) -> None:
        """Create missing tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready", stage="DB.1")

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed", stage="DB.3")

    async def ping(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning("Database ping failed", stage="DB.PING", error=str(e))
            return False

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Session scoped to one unit of work.

        Uncommitted changes are rolled back if the block raises.
        """
        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
