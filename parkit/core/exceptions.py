"""Precondition errors raised by the pricing and prediction core."""


class PreconditionError(ValueError):
    """Input outside the documented domain of a core function."""


class EmptySpotSetError(PreconditionError):
    """Occupancy was requested for an empty spot collection."""


class InvalidSnapshotError(PreconditionError):
    """Snapshot counts are negative or free exceeds total."""


class SnapshotOrderError(PreconditionError):
    """Snapshot would be older than the newest entry in the buffer."""


class InvalidSnapshotHistoryError(PreconditionError):
    """Snapshot history contains non-increasing timestamps."""
