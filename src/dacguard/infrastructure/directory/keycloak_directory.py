"""Keycloak principal directory - users and realm roles via the admin API."""

import logging

from keycloak import KeycloakAdmin, KeycloakOpenIDConnection
from keycloak.exceptions import KeycloakError

from dacguard.domain.exceptions import DirectoryUnavailable

logger = logging.getLogger(__name__)


def _user_label(user: dict) -> str:
    full_name = " ".join(
        part for part in (user.get("firstName"), user.get("lastName")) if part
    )
    return full_name or user.get("username") or user["id"]


class KeycloakPrincipalDirectory:
    """Lists realm users (keyed by id) and realm roles (keyed by name)."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        connection = KeycloakOpenIDConnection(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )
        self._admin = KeycloakAdmin(connection=connection)

    async def list_users(self) -> dict[str, str]:
        """Map user id to display name."""
        try:
            users = await self._admin.a_get_users({})
        except KeycloakError as e:
            logger.error("Keycloak user listing failed: %s", e)
            raise DirectoryUnavailable("Cannot list users") from e
        return {u["id"]: _user_label(u) for u in users}

    async def list_roles(self) -> dict[str, str]:
        """Map realm role name to its label (the role name)."""
        try:
            roles = await self._admin.a_get_realm_roles(brief_representation=True)
        except KeycloakError as e:
            logger.error("Keycloak role listing failed: %s", e)
            raise DirectoryUnavailable("Cannot list roles") from e
        return {r["name"]: r["name"] for r in roles}
