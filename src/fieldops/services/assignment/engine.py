"""Wiring of the assignment services over one set of collaborators."""

from __future__ import annotations

from typing import Optional, Sequence

from ...data.base import JobStore, TechnicianDirectory, ZoneResolver
from ...errors import NotFoundError
from ...models.domain import AssignmentLimits, Cluster, Stop, WorkloadMetrics
from ..balancing.service import BalanceTarget, WorkloadBalancer
from ..clustering.proximity import cluster_by_proximity
from ..coverage.matcher import CoverageMatcher
from ..workload.calculator import WorkloadCalculator
from .auto import AutoAssigner
from .reassignment import ReassignmentService
from .results import AutoAssignmentResult, AvailableTechnician, ManualAssignmentResult, ReassignmentResult


class AssignmentEngine:
    """Single entry point for request handlers.

    Holds no state between calls besides its collaborators; workloads and
    clusters are recomputed on every operation.
    """

    def __init__(
        self,
        job_store: JobStore,
        directory: TechnicianDirectory,
        resolver: ZoneResolver,
        limits: Optional[AssignmentLimits] = None,
        *,
        max_workers: int = 8,
    ) -> None:
        self.job_store = job_store
        self.directory = directory
        self.resolver = resolver
        self.limits = limits or AssignmentLimits()

        self.calculator = WorkloadCalculator(job_store, directory, self.limits)
        self.matcher = CoverageMatcher(job_store, directory, resolver)
        self.balancer = WorkloadBalancer(self.calculator, self.matcher, self.limits, max_workers=max_workers)
        self.auto_assigner = AutoAssigner(
            job_store, directory, self.calculator, self.matcher, self.balancer, self.limits
        )
        self.reassignment = ReassignmentService(
            job_store, directory, self.calculator, self.matcher, self.balancer, self.limits
        )

    def calculate_workload(self, technician_id: str) -> Optional[WorkloadMetrics]:
        return self.calculator.calculate_workload(technician_id)

    def balance_for_technician(self, technician_id: str) -> BalanceTarget:
        technician = self.directory.get_technician(technician_id)
        if technician is None:
            raise NotFoundError("technician", technician_id)
        return self.balancer.balance_workload(
            technician_id,
            sorted(technician.coverage_zones),
            sorted(technician.coverage_counties),
        )

    def auto_assign(
        self,
        technician_id: str,
        zones: Optional[Sequence[str]] = None,
        counties: Optional[Sequence[str]] = None,
        max_assignments: Optional[int] = None,
    ) -> AutoAssignmentResult:
        return self.auto_assigner.auto_assign(technician_id, zones, counties, max_assignments)

    def reassign(
        self,
        source_technician_id: str,
        destination_technician_id: str,
        stop_ids: Sequence[str],
    ) -> ReassignmentResult:
        return self.reassignment.reassign(source_technician_id, destination_technician_id, stop_ids)

    def assign_stops(self, technician_id: str, stop_ids: Sequence[str]) -> ManualAssignmentResult:
        return self.reassignment.assign_stops(technician_id, stop_ids)

    def list_available_technicians(self, technician_id: str) -> list[AvailableTechnician]:
        return self.reassignment.list_available_technicians(technician_id)

    def list_unassigned_stops(self) -> list[Stop]:
        return self.job_store.get_unassigned_stops()

    def preview_clusters(
        self,
        *,
        stop_ids: Optional[Sequence[str]] = None,
        zones: Sequence[str] = (),
        counties: Sequence[str] = (),
        radius_miles: Optional[float] = None,
    ) -> list[Cluster]:
        """Cluster explicit stops, or the unassigned stops in the given coverage."""
        if stop_ids:
            found = self.job_store.get_stops(stop_ids)
            stops = [found[stop_id] for stop_id in dict.fromkeys(stop_ids) if stop_id in found]
        elif zones or counties:
            stops = self.matcher.find_matching_stops(zones, counties)
        else:
            stops = self.job_store.get_unassigned_stops()
        radius = radius_miles if radius_miles is not None else self.limits.cluster_radius_miles
        return cluster_by_proximity(stops, radius)
