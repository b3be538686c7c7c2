"""Access DTOs."""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Saved:
    """Result of a successful full replace of a resource's assignments."""

    resource_id: str
    privileges: Mapping[str, frozenset[str]]
    version: int

    @property
    def ok(self) -> bool:
        return True


@dataclass
class AccessEntry:
    """Assigned principal decorated with directory data."""

    principal_id: str
    label: str
    is_role: bool
    privileges: list[str]


@dataclass
class AccessView:
    """Decorated view of a resource's assignments, for presentation."""

    resource_id: str
    version: int
    entries: list[AccessEntry] = field(default_factory=list)
    available_users: dict[str, str] = field(default_factory=dict)
    available_roles: dict[str, str] = field(default_factory=dict)

    @property
    def users(self) -> list[AccessEntry]:
        return [e for e in self.entries if not e.is_role]

    @property
    def roles(self) -> list[AccessEntry]:
        return [e for e in self.entries if e.is_role]
