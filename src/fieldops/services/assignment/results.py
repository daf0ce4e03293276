"""Structured outcomes of assignment batches."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Literal, Optional

from ...models.domain import Cluster, GeoPoint

SKIP_CLUSTER_TOO_LARGE = "cluster too large for remaining capacity"
SKIP_BALANCE_LIMIT = "workload balance limit reached"
ERROR_NOT_FOUND = "not found"
ERROR_NOT_ASSIGNED_TO_SOURCE = "not currently assigned to source"
ERROR_ASSIGNED_ELSEWHERE = "already assigned to another technician"

DetailAction = Literal["assigned", "skipped", "reassigned", "error"]
ClusterOutcome = Literal["assigned", "skipped", "untouched"]


@dataclass(slots=True)
class AssignmentDetail:
    stop_id: str
    action: DetailAction
    reason: Optional[str] = None
    cluster_id: Optional[str] = None


@dataclass(slots=True)
class WorkloadSnapshot:
    before: int
    after: int
    target: int


@dataclass(slots=True)
class ClusterSummary:
    cluster_id: str
    size: int
    area: Optional[str]
    centroid: GeoPoint
    estimated_route_miles: float
    outcome: ClusterOutcome

    @classmethod
    def from_cluster(cls, cluster: Cluster, outcome: ClusterOutcome) -> "ClusterSummary":
        return cls(
            cluster_id=cluster.cluster_id,
            size=cluster.size,
            area=cluster.area,
            centroid=cluster.centroid,
            estimated_route_miles=cluster.estimated_route_miles,
            outcome=outcome,
        )


@dataclass(slots=True)
class AutoAssignmentResult:
    technician_id: str
    workload: WorkloadSnapshot
    assigned: int = 0
    skipped: int = 0
    reassigned: int = 0
    errors: list[str] = field(default_factory=list)
    details: list[AssignmentDetail] = field(default_factory=list)
    clusters: list[ClusterSummary] = field(default_factory=list)

    def record(
        self,
        stop_id: str,
        action: DetailAction,
        reason: Optional[str] = None,
        cluster_id: Optional[str] = None,
    ) -> None:
        self.details.append(AssignmentDetail(stop_id, action, reason, cluster_id))
        if action == "assigned":
            self.assigned += 1
        elif action == "skipped":
            self.skipped += 1
        elif action == "reassigned":
            self.reassigned += 1
        elif action == "error":
            self.errors.append(f"Failed to assign stop {stop_id}: {reason}")

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class ItemError:
    stop_id: str
    reason: str


@dataclass(slots=True)
class ReassignmentResult:
    source_technician_id: str
    destination_technician_id: str
    reassigned: list[str] = field(default_factory=list)
    errors: list[ItemError] = field(default_factory=list)


@dataclass(slots=True)
class ManualAssignmentResult:
    technician_id: str
    assigned: list[str] = field(default_factory=list)
    errors: list[ItemError] = field(default_factory=list)


@dataclass(slots=True)
class AvailableTechnician:
    technician_id: str
    display_name: str
    current_stops: int
    available_capacity: int
    capacity_utilization: float
