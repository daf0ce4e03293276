"""Cluster-preserving auto-assignment of unassigned stops to a technician."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ...data.base import JobStore, TechnicianDirectory
from ...errors import NoCoverageError, NotFoundError, WorkloadUnavailableError
from ...models.domain import AssignmentLimits
from ..balancing.service import WorkloadBalancer
from ..clustering.proximity import cluster_by_proximity
from ..coverage.matcher import CoverageMatcher
from ..workload.calculator import WorkloadCalculator
from .results import (
    SKIP_BALANCE_LIMIT,
    SKIP_CLUSTER_TOO_LARGE,
    AutoAssignmentResult,
    ClusterSummary,
    WorkloadSnapshot,
)
from .writes import apply_assignment

logger = logging.getLogger(__name__)


class AutoAssigner:
    """Assign a bounded batch of matching stops, one whole cluster at a time.

    A cluster that would push the batch past its target is skipped entirely
    rather than split, so each technician's stops stay geographically compact
    at the cost of landing slightly under the target. Per-stop write failures
    are recorded and never abort the batch.
    """

    def __init__(
        self,
        job_store: JobStore,
        directory: TechnicianDirectory,
        calculator: WorkloadCalculator,
        matcher: CoverageMatcher,
        balancer: WorkloadBalancer,
        limits: AssignmentLimits,
    ) -> None:
        self.job_store = job_store
        self.directory = directory
        self.calculator = calculator
        self.matcher = matcher
        self.balancer = balancer
        self.limits = limits

    def auto_assign(
        self,
        technician_id: str,
        zones: Optional[Sequence[str]] = None,
        counties: Optional[Sequence[str]] = None,
        max_assignments: Optional[int] = None,
    ) -> AutoAssignmentResult:
        technician = self.directory.get_technician(technician_id)
        if technician is None:
            raise NotFoundError("technician", technician_id)

        if zones is None and counties is None and not technician.has_coverage:
            raise NoCoverageError(technician_id)
        effective_zones = list(zones) if zones is not None else sorted(technician.coverage_zones)
        effective_counties = list(counties) if counties is not None else sorted(technician.coverage_counties)
        if not effective_zones and not effective_counties:
            # Overrides narrowed the search to nothing.
            raise NoCoverageError(technician_id)

        current = self.calculator.calculate_workload(technician_id)
        if current is None:
            raise WorkloadUnavailableError(technician_id)

        balance = self.balancer.balance_workload(technician_id, effective_zones, effective_counties)
        candidates = self.matcher.find_matching_stops(effective_zones, effective_counties)
        clusters = cluster_by_proximity(candidates, self.limits.cluster_radius_miles)

        target = balance.can_assign
        if max_assignments is not None:
            target = min(max(0, max_assignments), target)

        result = AutoAssignmentResult(
            technician_id=technician_id,
            workload=WorkloadSnapshot(
                before=current.total_stops,
                after=current.total_stops,
                target=balance.target_count,
            ),
        )

        touched: set[str] = set()
        cluster_of: dict[str, str] = {}
        for cluster in clusters:
            for stop in cluster.stops:
                cluster_of[stop.stop_id] = cluster.cluster_id

        walked = 0
        for cluster in clusters:
            if result.assigned >= target:
                break
            walked += 1

            if result.assigned + cluster.size > target:
                for stop in cluster.stops:
                    touched.add(stop.stop_id)
                    result.record(stop.stop_id, "skipped", SKIP_CLUSTER_TOO_LARGE, cluster.cluster_id)
                result.clusters.append(ClusterSummary.from_cluster(cluster, "skipped"))
                continue

            for stop in cluster.stops:
                touched.add(stop.stop_id)
                try:
                    apply_assignment(
                        self.job_store,
                        stop.stop_id,
                        technician_id,
                        "auto",
                        expected_technician_id=None,
                    )
                except Exception as e:
                    logger.warning(f"Failed to auto-assign stop {stop.stop_id} to {technician_id}: {e}")
                    result.record(stop.stop_id, "error", str(e), cluster.cluster_id)
                    continue
                result.record(stop.stop_id, "assigned", cluster_id=cluster.cluster_id)
            result.clusters.append(ClusterSummary.from_cluster(cluster, "assigned"))

        for cluster in clusters[walked:]:
            result.clusters.append(ClusterSummary.from_cluster(cluster, "untouched"))

        for stop in candidates:
            if stop.stop_id not in touched:
                result.record(stop.stop_id, "skipped", SKIP_BALANCE_LIMIT, cluster_of.get(stop.stop_id))

        result.workload.after = current.total_stops + result.assigned
        logger.info(
            f"Auto-assigned {result.assigned} stop(s) to {technician_id} "
            f"(target {target}, {len(candidates)} candidates in {len(clusters)} clusters, "
            f"{result.skipped} skipped, {len(result.errors)} errors)"
        )
        return result
