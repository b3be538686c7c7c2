"""Domain entities."""

from dacguard.domain.entities.assignment import AssignmentSet

__all__ = [
    "AssignmentSet",
]
