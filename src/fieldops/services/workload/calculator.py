"""Per-technician workload accounting."""

from __future__ import annotations

from typing import Optional

from ...data.base import JobStore, TechnicianDirectory
from ...models.domain import AssignmentLimits, WorkloadMetrics


class WorkloadCalculator:
    def __init__(
        self,
        job_store: JobStore,
        directory: TechnicianDirectory,
        limits: AssignmentLimits,
    ) -> None:
        self.job_store = job_store
        self.directory = directory
        self.limits = limits

    def calculate_workload(self, technician_id: str) -> Optional[WorkloadMetrics]:
        """Current load for a technician, or None if the technician does not exist.

        Breakdowns are keyed by each stop's own zone and county, whether or not
        those fall inside the technician's declared coverage.
        """
        technician = self.directory.get_technician(technician_id)
        if technician is None:
            return None

        stops = self.job_store.get_stops_assigned_to(technician_id)
        stops_by_zone: dict[str, int] = {}
        stops_by_county: dict[str, int] = {}
        for stop in stops:
            if stop.zone:
                stops_by_zone[stop.zone] = stops_by_zone.get(stop.zone, 0) + 1
            if stop.county:
                stops_by_county[stop.county] = stops_by_county.get(stop.county, 0) + 1

        total = len(stops)
        return WorkloadMetrics(
            technician_id=technician_id,
            technician_name=technician.display_name,
            total_stops=total,
            stops_by_zone=stops_by_zone,
            stops_by_county=stops_by_county,
            capacity_utilization=total / self.limits.max_stops_per_technician * 100,
            estimated_hours=total * self.limits.estimated_hours_per_stop,
        )
