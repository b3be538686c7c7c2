"""Unit tests for principal directory adapters."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from keycloak.exceptions import KeycloakGetError

from dacguard.domain.exceptions import DirectoryUnavailable
from dacguard.infrastructure.directory import keycloak_directory
from dacguard.infrastructure.directory.keycloak_directory import KeycloakPrincipalDirectory
from dacguard.infrastructure.directory.static_directory import StaticPrincipalDirectory


@pytest.fixture
def admin(monkeypatch) -> MagicMock:
    """Replace KeycloakAdmin with a mock exposing async listing calls."""
    admin = MagicMock()
    admin.a_get_users = AsyncMock(return_value=[])
    admin.a_get_realm_roles = AsyncMock(return_value=[])
    monkeypatch.setattr(keycloak_directory, "KeycloakOpenIDConnection", MagicMock())
    monkeypatch.setattr(keycloak_directory, "KeycloakAdmin", MagicMock(return_value=admin))
    return admin


def _directory() -> KeycloakPrincipalDirectory:
    return KeycloakPrincipalDirectory(
        server_url="http://kc", realm="r", client_id="c", client_secret="s"
    )


@pytest.mark.asyncio
async def test_keycloak_user_labels(admin: MagicMock) -> None:
    admin.a_get_users.return_value = [
        {"id": "1", "username": "alice", "firstName": "Alice", "lastName": "Liddell"},
        {"id": "2", "username": "bob"},
        {"id": "3"},
    ]
    assert await _directory().list_users() == {
        "1": "Alice Liddell",
        "2": "bob",
        "3": "3",
    }


@pytest.mark.asyncio
async def test_keycloak_roles_keyed_and_labelled_by_name(admin: MagicMock) -> None:
    admin.a_get_realm_roles.return_value = [
        {"id": "x", "name": "editors", "description": "Content editors"},
        {"id": "y", "name": "guests"},
    ]
    assert await _directory().list_roles() == {
        "editors": "editors",
        "guests": "guests",
    }


@pytest.mark.asyncio
async def test_keycloak_failure_raises_directory_unavailable(admin: MagicMock) -> None:
    admin.a_get_users.side_effect = KeycloakGetError("boom", response_code=500)
    with pytest.raises(DirectoryUnavailable):
        await _directory().list_users()


@pytest.mark.asyncio
async def test_static_directory_returns_copies() -> None:
    directory = StaticPrincipalDirectory({"u1": "Alice"}, {"r1": "Editors"})
    users = await directory.list_users()
    users.clear()
    assert await directory.list_users() == {"u1": "Alice"}
    assert await directory.list_roles() == {"r1": "Editors"}
