"""Guarded assignment writes."""

from __future__ import annotations

from typing import Optional

from ...data.base import JobStore
from ...errors import AssignmentConflictError
from ...models.domain import AssignmentSource


def apply_assignment(
    job_store: JobStore,
    stop_id: str,
    technician_id: str,
    source: AssignmentSource,
    *,
    expected_technician_id: Optional[str],
    reassigned_from: Optional[str] = None,
) -> None:
    """Write an assignment only if the stop still has the expected owner."""

    written = job_store.set_assignment(
        stop_id,
        technician_id,
        source,
        expected_technician_id=expected_technician_id,
        reassigned_from=reassigned_from,
    )
    if not written:
        raise AssignmentConflictError(stop_id, expected_technician_id)
