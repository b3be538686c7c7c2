"""Pytest fixtures for DacGuard tests."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable, Iterable
from contextlib import asynccontextmanager

import pytest

from dacguard.domain.exceptions import StoreConflict, StoreUnavailable
from dacguard.domain.services.assignment_validator import AssignmentValidator
from dacguard.domain.value_objects import PrivilegeCatalog


# --- Fake repositories ---


class FakeAssignmentRepository:
    """In-memory assignment repository with failure injection.

    ``fail_on`` lists principals whose add_privileges raises StoreUnavailable.
    ``interleave`` yields to the event loop before every operation so that
    concurrent saves interleave. ``on_read`` runs between the version read
    and the privileges read of a load. ``calls`` records every write.
    """

    def __init__(self) -> None:
        self._cells: dict[str, dict[str, frozenset[str]]] = {}
        self._versions: dict[str, int] = {}
        self.calls: list[tuple] = []
        self.fail_on: set[str] = set()
        self.unavailable = False
        self.interleave = False
        self.on_read: Callable[[], None] | None = None

    async def _step(self) -> None:
        if self.unavailable:
            raise StoreUnavailable("store is down")
        if self.interleave:
            await asyncio.sleep(0)

    async def get_privileges(self, resource_id: str) -> dict[str, frozenset[str]]:
        await self._step()
        if self.on_read:
            self.on_read()
        return dict(self._cells.get(resource_id, {}))

    async def get_version(self, resource_id: str) -> int:
        await self._step()
        return self._versions.get(resource_id, 0)

    async def claim_version(self, resource_id: str, expected: int | None = None) -> int:
        await self._step()
        current = self._versions.get(resource_id, 0)
        if expected is not None and current != expected:
            raise StoreConflict(f"{resource_id} at {current}, expected {expected}")
        self._versions[resource_id] = current + 1
        self.calls.append(("claim_version", resource_id))
        return current + 1

    async def remove_all(self, resource_ids: Iterable[str]) -> None:
        await self._step()
        for resource_id in resource_ids:
            self._cells.pop(resource_id, None)
            self.calls.append(("remove_all", resource_id))

    async def add_privileges(
        self, principal_id: str, resource_id: str, privileges: frozenset[str]
    ) -> None:
        await self._step()
        if principal_id in self.fail_on:
            raise StoreUnavailable(f"cannot write {principal_id}")
        self._cells.setdefault(resource_id, {})[principal_id] = frozenset(privileges)
        self.calls.append(("add_privileges", resource_id, principal_id))

    def seed(self, resource_id: str, privileges: dict[str, Iterable[str]]) -> None:
        """Helper to preload assignments without touching ``calls``."""
        self._cells[resource_id] = {p: frozenset(s) for p, s in privileges.items()}

    def snapshot(self, resource_id: str) -> dict[str, frozenset[str]]:
        return dict(self._cells.get(resource_id, {}))


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """Unit of Work over a shared fake repository."""

    def __init__(self, assignments: FakeAssignmentRepository, atomic: bool = False) -> None:
        self.assignments = assignments
        self.atomic = atomic

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_uow_factory(assignments: FakeAssignmentRepository, atomic: bool = False):
    """Factory yielding a FakeUnitOfWork bound to ``assignments``."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield FakeUnitOfWork(assignments, atomic=atomic)

    return _factory


# --- Fixtures ---


@pytest.fixture
def catalog() -> PrivilegeCatalog:
    """Default READ < WRITE < GRANT catalog."""
    return PrivilegeCatalog()


@pytest.fixture
def validator(catalog: PrivilegeCatalog) -> AssignmentValidator:
    return AssignmentValidator(catalog)


@pytest.fixture
def assignments() -> FakeAssignmentRepository:
    """Fresh in-memory assignment repository for each test."""
    return FakeAssignmentRepository()


@pytest.fixture
def uow_factory(assignments: FakeAssignmentRepository):
    """Non-atomic UoW factory over the ``assignments`` fixture."""
    return make_uow_factory(assignments)
