"""Describe access use case - assignments decorated with directory labels."""

import logging

from dacguard.application.dto.access_dto import AccessEntry, AccessView
from dacguard.application.ports import PrincipalDirectory
from dacguard.application.use_cases.access.load_view import LoadViewUseCase
from dacguard.domain.value_objects import PrivilegeCatalog

logger = logging.getLogger(__name__)


class DescribeAccessUseCase:
    """Build the presentation view of a resource's assignments."""

    def __init__(
        self,
        load_view: LoadViewUseCase,
        directory: PrincipalDirectory,
        catalog: PrivilegeCatalog,
    ) -> None:
        self._load_view = load_view
        self._directory = directory
        self._catalog = catalog

    async def execute(self, resource_id: str) -> AccessView:
        """Decorate assignments; users and roles not yet assigned stay available.

        Principals unknown to the directory are logged and left out.
        """
        assignments = await self._load_view.execute(resource_id)
        users = dict(await self._directory.list_users())
        roles = dict(await self._directory.list_roles())

        entries = []
        for principal_id, privileges in assignments.privileges.items():
            if principal_id in users:
                label, is_role = users.pop(principal_id), False
            elif principal_id in roles:
                label, is_role = roles.pop(principal_id), True
            else:
                logger.debug("unknown user %s on %s", principal_id, resource_id)
                continue
            entries.append(
                AccessEntry(
                    principal_id=principal_id,
                    label=label,
                    is_role=is_role,
                    privileges=self._catalog.sort(privileges),
                )
            )

        return AccessView(
            resource_id=resource_id,
            version=assignments.version,
            entries=entries,
            available_users=users,
            available_roles=roles,
        )
