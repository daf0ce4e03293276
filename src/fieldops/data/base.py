"""Collaborator contracts consumed by the assignment services."""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..models.domain import AssignmentSource, Stop, Technician


class JobStore(Protocol):
    """Source of truth for stops and their current assignment."""

    def get_stops_assigned_to(self, technician_id: str) -> list[Stop]:
        ...

    def get_unassigned_stops(self) -> list[Stop]:
        """Open stops (not completed or cancelled) with no technician."""
        ...

    def get_stop(self, stop_id: str) -> Optional[Stop]:
        ...

    def get_stops(self, stop_ids: Iterable[str]) -> dict[str, Stop]:
        ...

    def set_assignment(
        self,
        stop_id: str,
        technician_id: Optional[str],
        source: Optional[AssignmentSource],
        *,
        expected_technician_id: Optional[str],
        reassigned_from: Optional[str] = None,
    ) -> bool:
        """Compare-and-swap the stop's technician.

        Writes only if the stop exists and is currently assigned to
        ``expected_technician_id`` (None meaning unassigned). Returns False
        when the precondition does not hold.
        """
        ...

    def set_coordinates(self, stop_id: str, latitude: float, longitude: float) -> bool:
        ...


class TechnicianDirectory(Protocol):
    def get_technician(self, technician_id: str) -> Optional[Technician]:
        ...

    def list_technicians(self) -> list[Technician]:
        ...


class ZoneResolver(Protocol):
    def matches(
        self,
        county: str,
        city: str,
        target_zones: Sequence[str],
        target_counties: Sequence[str],
    ) -> bool:
        ...
