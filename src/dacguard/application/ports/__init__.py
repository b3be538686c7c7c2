"""Application ports - interfaces for external adapters."""

from dacguard.application.ports.principal_directory import PrincipalDirectory
from dacguard.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PrincipalDirectory",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
