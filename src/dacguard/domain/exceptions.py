"""Domain exceptions."""


class DacGuardError(Exception):
    """Base exception for DacGuard."""

    pass


class ValidationError(DacGuardError):
    """Validation failed for input data."""

    pass


class UnknownPrivilege(ValidationError):
    """Privilege name is not part of the configured catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown privilege: {name}")
        self.name = name


class InvalidPayload(ValidationError):
    """Request payload does not have a supported shape."""

    pass


class StoreError(DacGuardError):
    """Assignment store failed to complete an operation."""

    pass


class StoreUnavailable(StoreError):
    """Underlying persistence is unreachable."""

    pass


class StoreConflict(StoreError):
    """Concurrent modification of a resource's assignments was detected."""

    pass


class PartialSaveError(StoreError):
    """Save failed after the previous assignments were removed.

    The resource may hold only part of the requested assignment set and can
    violate the full-privileges invariant until a full save is retried.
    """

    def __init__(self, resource_id: str, applied: list[str]) -> None:
        super().__init__(
            f"Privileges for {resource_id} were only partially saved "
            f"({len(applied)} principal(s) written); retry the full save"
        )
        self.resource_id = resource_id
        self.applied = applied


class DirectoryUnavailable(DacGuardError):
    """Principal directory could not be queried."""

    pass
