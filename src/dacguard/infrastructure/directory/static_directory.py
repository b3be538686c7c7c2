"""Static principal directory - users and roles fixed at start-up."""

from collections.abc import Mapping


class StaticPrincipalDirectory:
    """Directory backed by mappings from configuration."""

    def __init__(
        self,
        users: Mapping[str, str] | None = None,
        roles: Mapping[str, str] | None = None,
    ) -> None:
        self._users = dict(users or {})
        self._roles = dict(roles or {})

    async def list_users(self) -> dict[str, str]:
        return dict(self._users)

    async def list_roles(self) -> dict[str, str]:
        return dict(self._roles)
