"""Operator-driven transfer and assignment of specific stops."""

from __future__ import annotations

import logging
from typing import Sequence

from ...data.base import JobStore, TechnicianDirectory
from ...errors import CapacityExceededError, NotFoundError, WorkloadUnavailableError
from ...models.domain import AssignmentLimits
from ..balancing.service import WorkloadBalancer
from ..coverage.matcher import CoverageMatcher
from ..workload.calculator import WorkloadCalculator
from .results import (
    ERROR_ASSIGNED_ELSEWHERE,
    ERROR_NOT_ASSIGNED_TO_SOURCE,
    ERROR_NOT_FOUND,
    AvailableTechnician,
    ItemError,
    ManualAssignmentResult,
    ReassignmentResult,
)
from .writes import apply_assignment

logger = logging.getLogger(__name__)


class ReassignmentService:
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

    def _check_capacity(self, technician_id: str, incoming: int) -> int:
        workload = self.calculator.calculate_workload(technician_id)
        if workload is None:
            raise WorkloadUnavailableError(technician_id)
        requested_total = workload.total_stops + incoming
        if requested_total > self.limits.max_stops_per_technician:
            raise CapacityExceededError(technician_id, requested_total, self.limits.max_stops_per_technician)
        return workload.total_stops

    def reassign(
        self,
        source_technician_id: str,
        destination_technician_id: str,
        stop_ids: Sequence[str],
    ) -> ReassignmentResult:
        """Move stops from source to destination.

        The capacity check covers the whole batch and runs before any write.
        After that each stop succeeds or fails on its own; a stop is only
        moved if it is still held by the source at write time.
        """
        destination = self.directory.get_technician(destination_technician_id)
        if destination is None:
            raise NotFoundError("technician", destination_technician_id)

        requested = list(dict.fromkeys(stop_ids))
        self._check_capacity(destination_technician_id, len(requested))

        result = ReassignmentResult(
            source_technician_id=source_technician_id,
            destination_technician_id=destination_technician_id,
        )
        for stop_id in requested:
            stop = self.job_store.get_stop(stop_id)
            if stop is None:
                result.errors.append(ItemError(stop_id, ERROR_NOT_FOUND))
                continue
            if stop.assigned_technician_id != source_technician_id:
                result.errors.append(ItemError(stop_id, ERROR_NOT_ASSIGNED_TO_SOURCE))
                continue
            try:
                apply_assignment(
                    self.job_store,
                    stop_id,
                    destination_technician_id,
                    "manual",
                    expected_technician_id=source_technician_id,
                    reassigned_from=source_technician_id,
                )
            except Exception as e:
                logger.warning(f"Failed to reassign stop {stop_id} to {destination_technician_id}: {e}")
                result.errors.append(ItemError(stop_id, str(e)))
                continue
            result.reassigned.append(stop_id)

        logger.info(
            f"Reassigned {len(result.reassigned)} stop(s) from {source_technician_id} "
            f"to {destination_technician_id}, {len(result.errors)} rejected"
        )
        return result

    def assign_stops(self, technician_id: str, stop_ids: Sequence[str]) -> ManualAssignmentResult:
        """Give chosen unassigned stops to a technician.

        Stops the technician already holds are reported as assigned without a
        write and do not count against capacity.
        """
        technician = self.directory.get_technician(technician_id)
        if technician is None:
            raise NotFoundError("technician", technician_id)

        requested = list(dict.fromkeys(stop_ids))
        existing = self.job_store.get_stops(requested)
        incoming = sum(
            1 for stop in existing.values() if stop.assigned_technician_id != technician_id
        )
        self._check_capacity(technician_id, incoming)

        result = ManualAssignmentResult(technician_id=technician_id)
        for stop_id in requested:
            stop = existing.get(stop_id)
            if stop is None:
                result.errors.append(ItemError(stop_id, ERROR_NOT_FOUND))
                continue
            if stop.assigned_technician_id == technician_id:
                result.assigned.append(stop_id)
                continue
            if stop.assigned_technician_id is not None:
                result.errors.append(ItemError(stop_id, ERROR_ASSIGNED_ELSEWHERE))
                continue
            try:
                apply_assignment(
                    self.job_store,
                    stop_id,
                    technician_id,
                    "manual",
                    expected_technician_id=None,
                )
            except Exception as e:
                logger.warning(f"Failed to assign stop {stop_id} to {technician_id}: {e}")
                result.errors.append(ItemError(stop_id, str(e)))
                continue
            result.assigned.append(stop_id)

        logger.info(f"Assigned {len(result.assigned)} stop(s) to {technician_id}, {len(result.errors)} rejected")
        return result

    def list_available_technicians(self, technician_id: str) -> list[AvailableTechnician]:
        """Peers of the technician's coverage, most spare capacity first."""
        technician = self.directory.get_technician(technician_id)
        if technician is None:
            raise NotFoundError("technician", technician_id)

        peers = self.matcher.get_peer_technicians(
            technician_id,
            sorted(technician.coverage_zones),
            sorted(technician.coverage_counties),
        )
        workloads = self.balancer.collect_workloads(peer.technician_id for peer in peers)
        capacity = self.limits.max_stops_per_technician

        available: list[AvailableTechnician] = []
        for peer in peers:
            workload = workloads.get(peer.technician_id)
            current = workload.total_stops if workload else 0
            available.append(
                AvailableTechnician(
                    technician_id=peer.technician_id,
                    display_name=peer.display_name,
                    current_stops=current,
                    available_capacity=max(0, capacity - current),
                    capacity_utilization=workload.capacity_utilization if workload else 0.0,
                )
            )
        available.sort(key=lambda entry: entry.available_capacity, reverse=True)
        return available
