"""Save privileges use case - validated full replace of a resource's assignments."""

import logging
from collections.abc import Iterable, Mapping
from contextlib import nullcontext

from dacguard.application.dto.access_dto import Saved
from dacguard.application.use_cases.access.locks import ResourceLocks
from dacguard.domain.exceptions import PartialSaveError, StoreConflict, StoreError
from dacguard.domain.services.assignment_validator import (
    AssignmentValidator,
    Rejected,
)

logger = logging.getLogger(__name__)


class SavePrivilegesUseCase:
    """Replace every assignment on a resource with a validated proposal.

    A rejected proposal never touches the store. An accepted one removes the
    resource's assignments and re-adds the normalized set inside one unit of
    work. When the unit is not atomic and a write fails midway, the resource
    is left partially saved and PartialSaveError is raised; nothing is rolled
    back by hand.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        validator: AssignmentValidator,
        locks: ResourceLocks | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._validator = validator
        self._locks = locks

    async def execute(
        self,
        resource_id: str,
        proposed: Mapping[str, Iterable[str]],
        expected_version: int | None = None,
    ) -> Saved | Rejected:
        """Validate ``proposed`` and commit it as the resource's full assignment set.

        ``expected_version`` is the version of the view the proposal was built
        from; a store that has moved past it raises StoreConflict.
        """
        result = self._validator.validate(proposed)
        if isinstance(result, Rejected):
            logger.error("%s (resource %s)", result.reason, resource_id)
            return result

        lock = self._locks.get(resource_id) if self._locks else nullcontext()
        async with lock:
            try:
                version = await self._replace(
                    resource_id, result.privileges, expected_version
                )
            except StoreConflict:
                logger.warning(
                    "Concurrent save on %s (expected version %s)",
                    resource_id,
                    expected_version,
                )
                raise

        logger.info(
            "Saved %d assignment(s) on %s at version %d",
            len(result.privileges),
            resource_id,
            version,
        )
        return Saved(resource_id=resource_id, privileges=result.privileges, version=version)

    async def _replace(
        self,
        resource_id: str,
        privileges: Mapping[str, frozenset[str]],
        expected_version: int | None,
    ) -> int:
        applied: list[str] = []
        async with self._uow_factory() as uow:
            version = await uow.assignments.claim_version(resource_id, expected_version)
            await uow.assignments.remove_all([resource_id])
            try:
                for principal_id, held in privileges.items():
                    await uow.assignments.add_privileges(principal_id, resource_id, held)
                    applied.append(principal_id)
            except StoreError as e:
                if uow.atomic:
                    raise
                logger.error(
                    "Partial save on %s after %d of %d principal(s): %s",
                    resource_id,
                    len(applied),
                    len(privileges),
                    e,
                )
                raise PartialSaveError(resource_id, applied) from e
        return version
