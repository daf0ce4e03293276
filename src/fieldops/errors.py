"""Exception taxonomy for assignment operations.

Whole-operation failures are raised. Per-stop failures inside a batch are
reported as structured result data instead, see
``services.assignment.results``.
"""

from __future__ import annotations


class FieldOpsError(Exception):
    """Base class for errors raised by the assignment engine."""


class NotFoundError(FieldOpsError):
    """A technician or stop does not exist."""

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(f"{kind.capitalize()} '{identifier}' not found")
        self.kind = kind
        self.identifier = identifier


class EmptyInputError(FieldOpsError, ValueError):
    """A computation needs at least one point and received none."""


class NoCoverageError(FieldOpsError):
    """Auto-assignment requested with no zones or counties to match against."""

    def __init__(self, technician_id: str) -> None:
        super().__init__(f"Technician '{technician_id}' has no zones or counties assigned")
        self.technician_id = technician_id


class WorkloadUnavailableError(FieldOpsError):
    """Workload could not be computed for the target technician."""

    def __init__(self, technician_id: str) -> None:
        super().__init__(f"Workload unavailable for technician '{technician_id}'")
        self.technician_id = technician_id


class CapacityExceededError(FieldOpsError):
    """A batch would push a technician past the stop capacity."""

    def __init__(self, technician_id: str, requested_total: int, capacity: int) -> None:
        super().__init__(
            f"Technician '{technician_id}' would exceed capacity ({requested_total}/{capacity})"
        )
        self.technician_id = technician_id
        self.requested_total = requested_total
        self.capacity = capacity


class AssignmentConflictError(FieldOpsError):
    """A stop's owner changed between read and write."""

    def __init__(self, stop_id: str, expected_technician_id: str | None) -> None:
        expected = expected_technician_id or "unassigned"
        super().__init__(f"Stop '{stop_id}' is no longer {expected}; assignment rejected")
        self.stop_id = stop_id
        self.expected_technician_id = expected_technician_id


class GeocodingError(FieldOpsError):
    """The geocoding service returned an unusable response."""
