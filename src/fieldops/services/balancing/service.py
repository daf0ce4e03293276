"""Workload balancing across technicians sharing coverage."""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Dict, Iterable, Sequence

from ...models.domain import AssignmentLimits, WorkloadMetrics
from ..coverage.matcher import CoverageMatcher
from ..workload.calculator import WorkloadCalculator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BalanceTarget:
    target_count: int
    current_count: int
    can_assign: int
    average_workload: float = 0.0
    peer_count: int = 0


def compute_balance_target(
    current_count: int,
    loads: Sequence[int],
    max_stops: int,
    *,
    peer_count: int = 0,
) -> BalanceTarget:
    """Mean-equalization target: the average load, capped at capacity."""

    if not loads:
        return BalanceTarget(target_count=0, current_count=0, can_assign=0)

    average = sum(loads) / len(loads)
    target = min(math.ceil(average), max_stops)
    return BalanceTarget(
        target_count=target,
        current_count=current_count,
        can_assign=max(0, target - current_count),
        average_workload=average,
        peer_count=peer_count,
    )


class WorkloadBalancer:
    def __init__(
        self,
        calculator: WorkloadCalculator,
        matcher: CoverageMatcher,
        limits: AssignmentLimits,
        *,
        max_workers: int = 8,
    ) -> None:
        self.calculator = calculator
        self.matcher = matcher
        self.limits = limits
        self.max_workers = max_workers

    def collect_workloads(self, technician_ids: Iterable[str]) -> Dict[str, WorkloadMetrics]:
        """Compute workloads concurrently. Technicians that fail are left out."""

        ids = list(dict.fromkeys(technician_ids))
        if not ids:
            return {}

        results: Dict[str, WorkloadMetrics] = {}
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(ids))) as executor:
            future_to_id = {executor.submit(self.calculator.calculate_workload, tid): tid for tid in ids}
            for future in as_completed(future_to_id):
                technician_id = future_to_id[future]
                try:
                    metrics = future.result()
                except Exception as e:
                    logger.warning(f"Workload calculation failed for technician {technician_id}: {e}")
                    continue
                if metrics is None:
                    logger.debug(f"Technician {technician_id} not found while balancing")
                    continue
                results[technician_id] = metrics

        # Preserve request order regardless of completion order.
        return {tid: results[tid] for tid in ids if tid in results}

    def balance_workload(
        self,
        technician_id: str,
        zones: Sequence[str],
        counties: Sequence[str],
    ) -> BalanceTarget:
        peers = self.matcher.get_peer_technicians(technician_id, zones, counties)
        if not peers:
            return BalanceTarget(target_count=0, current_count=0, can_assign=0)

        workloads = self.collect_workloads([technician_id, *(peer.technician_id for peer in peers)])
        if not workloads:
            return BalanceTarget(target_count=0, current_count=0, can_assign=0)

        own = workloads.get(technician_id)
        current_count = own.total_stops if own else 0
        loads = [metrics.total_stops for metrics in workloads.values()]

        target = compute_balance_target(
            current_count,
            loads,
            self.limits.max_stops_per_technician,
            peer_count=len(peers),
        )
        logger.info(
            f"Balance for {technician_id}: average {target.average_workload:.2f} over {len(loads)} technicians, "
            f"target {target.target_count}, current {current_count}, can assign {target.can_assign}"
        )
        return target
