"""Permission form - server-side model of the privilege checkbox grid.

Mirrors the interaction rules of the permission editor so that a form shown
as submittable is accepted by AssignmentValidator:

- checking a rank checks and locks every lower rank on that row;
- unchecking a rank unlocks the lower ranks but leaves them checked;
- a locked box cannot be unchecked;
- without at least one row holding every rank the form cannot be submitted.

With ``keep_last_manager`` the form also refuses to remove or demote the
only row holding every rank.

Removed principals go back to the list of users or roles that can be added.
"""

from dataclasses import dataclass, field

from dacguard.application.dto.access_dto import AccessView
from dacguard.domain.value_objects import PrivilegeCatalog

MANAGER_WARNING = (
    "You must have one role or user that have the manage permission on this element."
)


@dataclass
class PermissionRow:
    """One principal's line in the grid."""

    principal_id: str
    label: str
    is_role: bool = False
    checked: set[str] = field(default_factory=set)
    locked: set[str] = field(default_factory=set)


class PermissionForm:
    """Editable grid of principals and privilege checkboxes."""

    def __init__(
        self,
        catalog: PrivilegeCatalog,
        available_users: dict[str, str] | None = None,
        available_roles: dict[str, str] | None = None,
        keep_last_manager: bool = False,
    ) -> None:
        self._catalog = catalog
        self._keep_last_manager = keep_last_manager
        self._rows: dict[str, PermissionRow] = {}
        self.available_users = dict(available_users or {})
        self.available_roles = dict(available_roles or {})

    @classmethod
    def from_view(
        cls,
        catalog: PrivilegeCatalog,
        view: AccessView,
        keep_last_manager: bool = False,
    ) -> "PermissionForm":
        form = cls(catalog, view.available_users, view.available_roles, keep_last_manager)
        for entry in view.entries:
            row = PermissionRow(
                principal_id=entry.principal_id,
                label=entry.label,
                is_role=entry.is_role,
                checked={p for p in entry.privileges if p in catalog.ranks},
            )
            form._rows[row.principal_id] = row
            form._refresh(row)
        return form

    @property
    def rows(self) -> list[PermissionRow]:
        return list(self._rows.values())

    def row(self, principal_id: str) -> PermissionRow:
        return self._rows[principal_id]

    def add(self, principal_id: str, label: str, is_role: bool = False) -> bool:
        """Add an empty row; False when the principal is already listed."""
        if principal_id in self._rows:
            return False
        self._available(is_role).pop(principal_id, None)
        self._rows[principal_id] = PermissionRow(principal_id, label, is_role)
        return True

    def remove(self, principal_id: str) -> bool:
        """Drop a row; False when it is the guarded last manager."""
        if principal_id == self.protected:
            return False
        row = self._rows.pop(principal_id, None)
        if row is not None:
            self._available(row.is_role)[row.principal_id] = row.label
        return True

    def check(self, principal_id: str, privilege: str) -> None:
        row = self._rows[principal_id]
        self._catalog.rank_of(privilege)
        row.checked.add(privilege)
        self._refresh(row)

    def uncheck(self, principal_id: str, privilege: str) -> bool:
        """Uncheck a box; False when it is locked or on the guarded last manager."""
        row = self._rows[principal_id]
        self._catalog.rank_of(privilege)
        if privilege in row.locked:
            return False
        if principal_id == self.protected and privilege in row.checked:
            return False
        row.checked.discard(privilege)
        self._refresh(row)
        return True

    def _available(self, is_role: bool) -> dict[str, str]:
        return self.available_roles if is_role else self.available_users

    def _refresh(self, row: PermissionRow) -> None:
        row.checked = set(self._catalog.cascade(row.checked))
        if not row.checked:
            row.locked = set()
            return
        top = max(row.checked, key=self._catalog.rank_of)
        row.locked = set(self._catalog.implied_by(top))

    @property
    def managers(self) -> list[str]:
        return [r.principal_id for r in self._rows.values() if self._catalog.is_full(r.checked)]

    @property
    def protected(self) -> str | None:
        """The sole manager row when the last manager is guarded."""
        if not self._keep_last_manager:
            return None
        managers = self.managers
        return managers[0] if len(managers) == 1 else None

    @property
    def submittable(self) -> bool:
        return bool(self.managers)

    @property
    def warning(self) -> str | None:
        return None if self.submittable else MANAGER_WARNING

    def to_payload(self) -> dict[str, list[str]]:
        """Canonical ``{principal_id: [privilege, ...]}`` mapping."""
        return {
            r.principal_id: self._catalog.sort(r.checked) for r in self._rows.values()
        }

    def to_dict(self) -> dict:
        protected = self.protected
        return {
            "rows": [
                {
                    "principal_id": r.principal_id,
                    "label": r.label,
                    "is_role": r.is_role,
                    "removable": r.principal_id != protected,
                    "privileges": {
                        rank: {
                            "checked": rank in r.checked,
                            "locked": rank in r.locked or r.principal_id == protected,
                        }
                        for rank in self._catalog.ranks
                    },
                }
                for r in self._rows.values()
            ],
            "available_users": self.available_users,
            "available_roles": self.available_roles,
            "submittable": self.submittable,
            "warning": self.warning,
        }
