"""In-memory Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dacguard.infrastructure.persistence.memory.assignment_repository import (
    InMemoryAssignmentRepository,
)


class InMemoryUnitOfWork:
    """Unit of Work over a shared in-memory repository; not atomic."""

    atomic = False

    def __init__(self, assignments: InMemoryAssignmentRepository) -> None:
        self._assignments = assignments

    @property
    def assignments(self) -> InMemoryAssignmentRepository:
        return self._assignments

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def create_memory_uow_factory(
    assignments: InMemoryAssignmentRepository | None = None,
) -> object:
    """Create UnitOfWork factory sharing one repository across units."""
    assignments = assignments or InMemoryAssignmentRepository()

    @asynccontextmanager
    async def factory() -> AsyncIterator[InMemoryUnitOfWork]:
        yield InMemoryUnitOfWork(assignments)

    return factory
