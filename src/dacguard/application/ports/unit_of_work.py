"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from dacguard.application.ports.repositories.assignment_repository import (
    AssignmentRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access.

    ``atomic`` is True when rollback restores every write made through the
    unit; stores without transactions keep whatever was written before a
    failure.
    """

    atomic: bool

    @property
    def assignments(self) -> AssignmentRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
