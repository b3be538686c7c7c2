"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg.errors import LockNotAvailable, TransactionRollback
from psycopg_pool import AsyncConnectionPool, PoolTimeout

from dacguard.domain.exceptions import (
    InvalidPayload,
    StoreConflict,
    StoreError,
    StoreUnavailable,
)
from dacguard.infrastructure.persistence.postgres.assignment_repository import (
    PostgresAssignmentRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    atomic = True

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: psycopg.AsyncConnection | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._assignments = PostgresAssignmentRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def assignments(self) -> PostgresAssignmentRepository:
        return self._assignments

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Driver errors leave the factory classified: StoreConflict for
    serialization failures, deadlocks and lock timeouts; InvalidPayload for
    values Postgres refuses to store; StoreUnavailable for connection
    problems; StoreError for anything else psycopg raises.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            uow = PostgresUnitOfWork(pool)
            async with uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except (TransactionRollback, LockNotAvailable) as e:
            raise StoreConflict(str(e)) from e
        except psycopg.DataError as e:
            raise InvalidPayload(f"Value rejected by the assignment store: {e}") from e
        except (psycopg.OperationalError, PoolTimeout) as e:
            raise StoreUnavailable(str(e)) from e
        except psycopg.Error as e:
            raise StoreError(str(e)) from e

    return factory
