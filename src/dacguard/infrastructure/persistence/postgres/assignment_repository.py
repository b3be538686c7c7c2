"""PostgreSQL assignment repository implementation."""

from collections import defaultdict
from collections.abc import Iterable

from psycopg import AsyncConnection

from dacguard.domain.exceptions import StoreConflict


class PostgresAssignmentRepository:
    """Assignment repository implementation - one row per held privilege."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_privileges(self, resource_id: str) -> dict[str, frozenset[str]]:
        """Get privileges per principal on resource."""
        cur = await self._conn.execute(
            "SELECT principal_id, privilege FROM privilege_assignment "
            "WHERE resource_id = %s",
            (resource_id,),
        )
        rows = await cur.fetchall()
        grouped: dict[str, set[str]] = defaultdict(set)
        for principal_id, privilege in rows:
            grouped[principal_id].add(privilege)
        return {p: frozenset(held) for p, held in grouped.items()}

    async def get_version(self, resource_id: str) -> int:
        """Get assignment set version of resource (0 when never saved)."""
        cur = await self._conn.execute(
            "SELECT version FROM resource_acl WHERE resource_id = %s",
            (resource_id,),
        )
        r = await cur.fetchone()
        return r[0] if r else 0

    async def claim_version(self, resource_id: str, expected: int | None = None) -> int:
        """Lock resource row for this transaction and bump its version."""
        await self._conn.execute(
            "INSERT INTO resource_acl (resource_id, version) VALUES (%s, 0) "
            "ON CONFLICT (resource_id) DO NOTHING",
            (resource_id,),
        )
        cur = await self._conn.execute(
            "SELECT version FROM resource_acl WHERE resource_id = %s FOR UPDATE",
            (resource_id,),
        )
        (current,) = await cur.fetchone()
        if expected is not None and current != expected:
            raise StoreConflict(
                f"{resource_id} is at version {current}, expected {expected}"
            )
        await self._conn.execute(
            "UPDATE resource_acl SET version = %s WHERE resource_id = %s",
            (current + 1, resource_id),
        )
        return current + 1

    async def remove_all(self, resource_ids: Iterable[str]) -> None:
        """Delete every assignment on the given resources."""
        ids = list(resource_ids)
        if not ids:
            return
        await self._conn.execute(
            "DELETE FROM privilege_assignment WHERE resource_id = ANY(%s)",
            (ids,),
        )

    async def add_privileges(
        self, principal_id: str, resource_id: str, privileges: frozenset[str]
    ) -> None:
        """Create or overwrite the privileges of principal on resource."""
        await self._conn.execute(
            "DELETE FROM privilege_assignment WHERE resource_id = %s AND principal_id = %s",
            (resource_id, principal_id),
        )
        if not privileges:
            return
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO privilege_assignment (resource_id, principal_id, privilege) "
                "VALUES (%s, %s, %s)",
                [(resource_id, principal_id, p) for p in sorted(privileges)],
            )
