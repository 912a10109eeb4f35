"""
Base repository pattern implementation with async support
"""
import time
from abc import ABC
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Generic, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from parts_catalog.core.exceptions import ConflictError, DatabaseError
from parts_catalog.core.logging import log


ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType], ABC):
    """
    Generic repository for data access with async support.

    Each call opens its own session from the factory, so connections are
    checked out per operation and never held across requests.
    """

    def __init__(self, model: Type[ModelType], session_factory: async_sessionmaker):
        self.model = model
        self.session_factory = session_factory

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    @asynccontextmanager
    async def session(self, method: str, operation: str) -> AsyncGenerator[AsyncSession, None]:
        """
        Open a session for one repository operation.

        Failures are logged with the query context and re-raised as API errors.
        """
        started = time.perf_counter()
        async with self.session_factory() as session:
            try:
                yield session
            except IntegrityError as e:
                await session.rollback()
                log.error(
                    f"Integrity error in {self.model.__name__} repository",
                    method=method,
                    table=self.table_name,
                    operation=operation,
                    duration_ms=self._elapsed_ms(started),
                    error=str(e.orig),
                )
                raise ConflictError(f"Conflict during {operation.lower()} on {self.table_name}") from e
            except SQLAlchemyError as e:
                await session.rollback()
                log.error(
                    f"Database error in {self.model.__name__} repository",
                    method=method,
                    table=self.table_name,
                    operation=operation,
                    duration_ms=self._elapsed_ms(started),
                    error=str(e),
                )
                raise DatabaseError(f"Error during {operation.lower()} on {self.table_name}") from e

        log.debug(
            "Query completed",
            method=method,
            table=self.table_name,
            operation=operation,
            duration_ms=self._elapsed_ms(started),
        )

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return round((time.perf_counter() - started) * 1000, 2)
