"""
Database configuration with connection pooling, retry logic, and proper async handling
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.exc import DisconnectionError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from parts_catalog.core.config import settings
from parts_catalog.core.logging import log


class DatabaseConfig:
    """Database configuration with environment-based settings"""

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.database_url
        self.pool_size = settings.db_pool_size
        self.max_overflow = settings.db_max_overflow
        self.pool_pre_ping = settings.db_pool_pre_ping
        self.pool_recycle = settings.db_pool_recycle
        self.pool_timeout = settings.db_pool_timeout
        self.echo = settings.db_echo

    @property
    def async_url(self) -> str:
        """Convert sync URL to async URL"""
        return str(self.database_url).replace("postgresql://", "postgresql+asyncpg://")

    @property
    def is_sqlite(self) -> bool:
        return self.async_url.startswith("sqlite")

    @property
    def async_engine_kwargs(self) -> dict:
        """Get async engine configuration"""
        if self.is_sqlite:
            return {"echo": self.echo}

        return {
            "echo": self.echo,
            "pool_pre_ping": self.pool_pre_ping,
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_recycle": self.pool_recycle,
            "pool_timeout": self.pool_timeout,
            "connect_args": {
                "server_settings": {
                    "application_name": settings.app_name,
                    "jit": "off",
                }
            },
        }


# Retry decorator for connection-level failures
db_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    reraise=True,
    retry=retry_if_exception_type((OperationalError, DisconnectionError)),
)


class DatabaseSessionManager:
    """Owns the process-wide engine and session factory"""

    def __init__(self, config: Optional[DatabaseConfig] = None):
        self.config = config or DatabaseConfig()
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = create_async_engine(self.config.async_url, **self.config.async_engine_kwargs)
        return self._engine

    @property
    def sessionmaker(self) -> async_sessionmaker:
        if self._sessionmaker is None:
            self._sessionmaker = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                autoflush=False,
                expire_on_commit=False,
            )
        return self._sessionmaker

    @db_retry
    async def init(self):
        """Initialize the database connection"""
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        log.info("Database connection established successfully")

    async def close(self):
        """Close database connection"""
        if self._engine is None:
            return

        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        log.info("Database connection closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session scope with proper error handling"""
        async with self.sessionmaker() as session:
            try:
                yield session
            except Exception as e:
                await session.rollback()
                log.error("Database session error", error=str(e))
                raise


# Global session manager instance
db_manager = DatabaseSessionManager()


def get_session_factory() -> async_sessionmaker:
    """Session factory dependency"""
    return db_manager.sessionmaker


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Async session dependency with proper lifecycle management"""
    async with db_manager.session() as session:
        yield session


async def init_db():
    """Create tables directly (development only; use Alembic migrations elsewhere)"""
    async with db_manager.engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
        log.info("Database tables created")


async def check_database_health(session: AsyncSession) -> dict:
    """Check database health and connection status"""
    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
        return {"status": "healthy"}
    except Exception as e:
        log.error("Database health check failed", error=str(e))
        return {"status": "unhealthy", "error": str(e)}


__all__ = [
    "DatabaseConfig",
    "DatabaseSessionManager",
    "db_manager",
    "db_retry",
    "get_session_factory",
    "get_async_session",
    "init_db",
    "check_database_health",
]
