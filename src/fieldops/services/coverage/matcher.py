"""Match stops and peer technicians against coverage areas."""

from __future__ import annotations

from typing import Optional, Sequence

from ...data.base import JobStore, TechnicianDirectory, ZoneResolver
from ...models.domain import Stop, Technician


class CoverageMatcher:
    def __init__(
        self,
        job_store: JobStore,
        directory: TechnicianDirectory,
        resolver: ZoneResolver,
    ) -> None:
        self.job_store = job_store
        self.directory = directory
        self.resolver = resolver

    def find_matching_stops(
        self,
        zones: Sequence[str],
        counties: Sequence[str],
        exclude_technician_id: Optional[str] = None,
    ) -> list[Stop]:
        """Stops inside the given zones/counties.

        Without ``exclude_technician_id`` the candidates are unassigned stops.
        With it, they are the stops that technician currently holds, which is
        how work is pulled away from an overloaded technician.
        """
        if not zones and not counties:
            return []

        if exclude_technician_id is None:
            candidates = self.job_store.get_unassigned_stops()
        else:
            candidates = self.job_store.get_stops_assigned_to(exclude_technician_id)

        return [
            stop
            for stop in candidates
            if self.resolver.matches(stop.county or "", stop.city or "", zones, counties)
        ]

    def get_peer_technicians(
        self,
        technician_id: str,
        zones: Sequence[str],
        counties: Sequence[str],
    ) -> list[Technician]:
        """Other technicians sharing at least one zone or county."""
        zone_set = set(zones)
        county_set = set(counties)
        return [
            technician
            for technician in self.directory.list_technicians()
            if technician.technician_id != technician_id
            and (
                not zone_set.isdisjoint(technician.coverage_zones)
                or not county_set.isdisjoint(technician.coverage_counties)
            )
        ]
