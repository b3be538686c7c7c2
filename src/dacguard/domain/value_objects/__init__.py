"""Domain value objects."""

from dacguard.domain.value_objects.privilege import (
    DEFAULT_PRIVILEGE_LABELS,
    DEFAULT_PRIVILEGES,
    Privilege,
    PrivilegeCatalog,
)

__all__ = [
    "DEFAULT_PRIVILEGE_LABELS",
    "DEFAULT_PRIVILEGES",
    "Privilege",
    "PrivilegeCatalog",
]
