"""Async engine and session factory.

A Database owns one engine per process. Units of work and the outbox
processor each open their own short-lived session from session_factory.

Supported URLs:
    - postgresql+asyncpg://... (pooled; install the "postgres" extra)
    - sqlite+aiosqlite:///path.db (tests, local tools)
"""

from typing import Any, Self

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.core.config import Settings
from src.infrastructure.persistence.base import BaseModel


class Database:
    """Engine plus session factory.

    Sessions are created with autoflush=False, so staged writes reach the
    database only on commit (where constraint violations are translated),
    and with expire_on_commit=False, so aggregates stay readable afterwards.

    Usage:
        db = Database("sqlite+aiosqlite:///blocks.db")
        await db.create_all()
        async with db.session_factory() as session:
            ...
        await db.close()
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 20,
        max_overflow: int = 0,
    ) -> None:
        """Create the engine.

        Args:
            database_url: SQLAlchemy async URL.
            echo: Log every SQL statement.
            pool_size: Pooled connections (server databases only).
            max_overflow: Connections allowed above pool_size.
        """
        self.url = database_url
        self.engine: AsyncEngine = create_async_engine(
            database_url, **_engine_options(database_url, echo, pool_size, max_overflow)
        )
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        return cls(settings.database_url, echo=settings.db_echo)

    @property
    def is_sqlite(self) -> bool:
        return self.engine.dialect.name == "sqlite"

    async def create_all(self) -> None:
        """Create every table registered on BaseModel.metadata.

        Schema migrations belong to the hosting service; this is for tests
        and throwaway databases.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.create_all)

    async def drop_all(self) -> None:
        """Drop every table registered on BaseModel.metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.drop_all)

    async def close(self) -> None:
        await self.engine.dispose()

    async def check_connection(self) -> bool:
        """Run a trivial query; False when the database is unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError):
            return False
        return True


def _engine_options(
    database_url: str, echo: bool, pool_size: int, max_overflow: int
) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
    if database_url.startswith("postgresql"):
        options.update(
            pool_size=pool_size,
            max_overflow=max_overflow,
            connect_args={"server_settings": {"jit": "off"}, "command_timeout": 60},
        )
    return options
