"""Load view use case - raw assignments of one resource."""

import logging

from dacguard.domain.entities import AssignmentSet
from dacguard.domain.exceptions import StoreConflict

logger = logging.getLogger(__name__)


class LoadViewUseCase:
    """Read-through to the assignment store; performs no validation."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, resource_id: str) -> AssignmentSet:
        """Load every assignment on resource, with its version.

        Raises StoreConflict when a save changed the resource while it was
        being read; the caller should load again.
        """
        async with self._uow_factory() as uow:
            before = await uow.assignments.get_version(resource_id)
            privileges = await uow.assignments.get_privileges(resource_id)
            after = await uow.assignments.get_version(resource_id)

        if before != after:
            logger.warning(
                "Torn read of %s (version %d -> %d)", resource_id, before, after
            )
            raise StoreConflict(f"Assignments of {resource_id} changed while reading")
        return AssignmentSet(resource_id=resource_id, privileges=privileges, version=after)
