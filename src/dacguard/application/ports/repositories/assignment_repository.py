"""Assignment repository port."""

from collections.abc import Iterable
from typing import Protocol


class AssignmentRepository(Protocol):
    """Port for (resource, principal) -> privileges persistence."""

    async def get_privileges(self, resource_id: str) -> dict[str, frozenset[str]]: ...

    async def get_version(self, resource_id: str) -> int: ...

    async def claim_version(self, resource_id: str, expected: int | None = None) -> int: ...

    async def remove_all(self, resource_ids: Iterable[str]) -> None: ...

    async def add_privileges(
        self, principal_id: str, resource_id: str, privileges: frozenset[str]
    ) -> None: ...
