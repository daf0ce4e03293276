"""Pydantic request/response models for technician assignment endpoints."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


class WorkloadModel(BaseModel):
    technician_id: str
    technician_name: str
    total_stops: int
    stops_by_zone: dict[str, int]
    stops_by_county: dict[str, int]
    capacity_utilization: float
    estimated_hours: float


class BalanceResponse(BaseModel):
    technician_id: str
    target_count: int
    current_count: int
    can_assign: int
    average_workload: float
    peer_count: int


class AutoAssignRequest(BaseModel):
    zones: Optional[list[str]] = Field(
        default=None, description="Zones to match. Defaults to the technician's declared zones."
    )
    counties: Optional[list[str]] = Field(
        default=None, description="Counties to match. Defaults to the technician's declared counties."
    )
    max_assignments: Optional[int] = Field(default=None, ge=0, description="Upper bound on stops assigned.")
    persist: bool = Field(default=False, description="Write the run summary and details to the data root.")


class AssignmentDetailModel(BaseModel):
    stop_id: str
    action: Literal["assigned", "skipped", "reassigned", "error"]
    reason: Optional[str] = None
    cluster_id: Optional[str] = None


class WorkloadSnapshotModel(BaseModel):
    before: int
    after: int
    target: int


class ClusterSummaryModel(BaseModel):
    cluster_id: str
    size: int
    area: Optional[str] = None
    centroid: tuple[float, float]
    estimated_route_miles: float
    outcome: Literal["assigned", "skipped", "untouched"]


class AutoAssignResponse(BaseModel):
    technician_id: str
    message: str
    assigned: int
    skipped: int
    reassigned: int
    errors: list[str]
    details: list[AssignmentDetailModel]
    workload: WorkloadSnapshotModel
    clusters: list[ClusterSummaryModel]
    run_directory: Optional[str] = None
    persist_error: Optional[str] = None


class ReassignRequest(BaseModel):
    stop_ids: list[str] = Field(..., min_length=1, description="Stops to move away from this technician.")
    target_technician_id: str = Field(..., min_length=1)


class ItemErrorModel(BaseModel):
    stop_id: str
    reason: str


class ReassignResponse(BaseModel):
    message: str
    source_technician_id: str
    destination_technician_id: str
    reassigned: list[str]
    errors: list[ItemErrorModel]


class AssignStopsRequest(BaseModel):
    stop_ids: list[str] = Field(..., min_length=1)


class AssignStopsResponse(BaseModel):
    message: str
    technician_id: str
    assigned: list[str]
    errors: list[ItemErrorModel]


class AvailableTechnicianModel(BaseModel):
    technician_id: str
    display_name: str
    current_stops: int
    available_capacity: int
    capacity_utilization: float


class AvailableTechniciansResponse(BaseModel):
    technician_id: str
    available_technicians: list[AvailableTechnicianModel]
