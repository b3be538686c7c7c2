"""Principal directory port - read-only users and roles."""

from typing import Protocol


class PrincipalDirectory(Protocol):
    """Port for looking up principal labels."""

    async def list_users(self) -> dict[str, str]: ...

    async def list_roles(self) -> dict[str, str]: ...
