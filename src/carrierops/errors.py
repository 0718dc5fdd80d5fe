"""
Exception taxonomy for dataset generation.

Every failure aborts the run. Nothing is retried and no partial dataset is
reported as success:
- InvalidConfiguration: bad size class, seed or shape selector (before any work)
- DestinationConflict: artifacts exist and overwrite is off (before any write)
- WriteFailure: the filesystem rejected a write
"""

from pathlib import Path


class CarrierOpsError(Exception):
    """Base class for all dataset generation errors."""

    pass


class InvalidConfiguration(CarrierOpsError):
    """Raised when run configuration is rejected before generation starts."""

    pass


class DestinationConflict(CarrierOpsError):
    """Raised when output artifacts already exist and overwrite is not permitted."""

    def __init__(self, conflicts: list[Path]):
        self.conflicts = conflicts
        shown = ", ".join(str(p) for p in conflicts[:3])
        more = f" (+{len(conflicts) - 3} more)" if len(conflicts) > 3 else ""
        super().__init__(
            f"Refusing to overwrite existing dataset artifacts: {shown}{more} "
            "(use --overwrite)"
        )


class WriteFailure(CarrierOpsError):
    """Raised when an artifact cannot be written."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Failed to write {path}: {reason}")


class IdRangeExhausted(CarrierOpsError):
    """Raised when an entity type would be issued an id from another type's range."""

    pass
