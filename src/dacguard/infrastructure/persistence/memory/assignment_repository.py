"""In-memory assignment repository."""

from collections.abc import Iterable

from dacguard.domain.exceptions import StoreConflict


class InMemoryAssignmentRepository:
    """Assignment repository kept in process memory.

    Writes take effect immediately and are never rolled back.
    """

    def __init__(self) -> None:
        self._cells: dict[str, dict[str, frozenset[str]]] = {}
        self._versions: dict[str, int] = {}

    async def get_privileges(self, resource_id: str) -> dict[str, frozenset[str]]:
        return dict(self._cells.get(resource_id, {}))

    async def get_version(self, resource_id: str) -> int:
        return self._versions.get(resource_id, 0)

    async def claim_version(self, resource_id: str, expected: int | None = None) -> int:
        current = self._versions.get(resource_id, 0)
        if expected is not None and current != expected:
            raise StoreConflict(
                f"{resource_id} is at version {current}, expected {expected}"
            )
        self._versions[resource_id] = current + 1
        return current + 1

    async def remove_all(self, resource_ids: Iterable[str]) -> None:
        for resource_id in resource_ids:
            self._cells.pop(resource_id, None)

    async def add_privileges(
        self, principal_id: str, resource_id: str, privileges: frozenset[str]
    ) -> None:
        if not privileges:
            self._cells.get(resource_id, {}).pop(principal_id, None)
            return
        self._cells.setdefault(resource_id, {})[principal_id] = frozenset(privileges)
