"""Repository ports."""

from dacguard.application.ports.repositories.assignment_repository import (
    AssignmentRepository,
)

__all__ = [
    "AssignmentRepository",
]
