"""Assignment set entity - privileges held by principals on a resource."""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class AssignmentSet:
    """Every assignment on a resource, as read at ``version``.

    A principal absent from ``privileges`` holds nothing on the resource.
    """

    resource_id: str
    privileges: Mapping[str, frozenset[str]] = field(default_factory=dict)
    version: int = 0
