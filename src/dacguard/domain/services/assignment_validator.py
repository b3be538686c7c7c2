"""Assignment validator - guards resources against manager lockout."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from dacguard.domain.value_objects import PrivilegeCatalog

MANAGER_REQUIRED = "Cannot save a list without a fully privileged user"


@dataclass(frozen=True)
class Accepted:
    """Proposal is valid; ``privileges`` is its cascade-normalized form."""

    privileges: Mapping[str, frozenset[str]]

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """Proposal would leave the resource without a manager."""

    reason: str
    privileges: Mapping[str, frozenset[str]]

    @property
    def ok(self) -> bool:
        return False


class AssignmentValidator:
    """Validates a complete proposed assignment set for one resource."""

    def __init__(self, catalog: PrivilegeCatalog) -> None:
        self._catalog = catalog

    def normalize(
        self, proposed: Mapping[str, Iterable[str]]
    ) -> dict[str, frozenset[str]]:
        """Cascade every entry and drop principals left with nothing.

        Raises UnknownPrivilege for ranks missing from the catalog.
        """
        normalized = {}
        for principal_id, privileges in proposed.items():
            cascaded = self._catalog.cascade(privileges)
            if cascaded:
                normalized[principal_id] = cascaded
        return normalized

    def validate(self, proposed: Mapping[str, Iterable[str]]) -> Accepted | Rejected:
        """Accept iff at least one principal ends up holding every rank."""
        normalized = self.normalize(proposed)
        if any(self._catalog.is_full(p) for p in normalized.values()):
            return Accepted(normalized)
        return Rejected(MANAGER_REQUIRED, normalized)
