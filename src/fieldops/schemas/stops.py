"""Stop-facing API schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class StopModel(BaseModel):
    stop_id: str
    latitude: float | None = None
    longitude: float | None = None
    county: str = ""
    city: str = ""
    zone: str | None = None
    zip_code: str | None = None
    address: str | None = None
    status: str | None = None
    assigned_technician_id: str | None = None
    assignment_source: str | None = None
    reassigned_from: str | None = None


class UnassignedStopsResponse(BaseModel):
    items: List[StopModel]
    total: int


class ClusterPreviewRequest(BaseModel):
    stop_ids: Optional[List[str]] = Field(default=None, description="Explicit stops to cluster.")
    zones: List[str] = Field(default_factory=list, description="Cluster unassigned stops in these zones.")
    counties: List[str] = Field(default_factory=list, description="Cluster unassigned stops in these counties.")
    radius_miles: Optional[float] = Field(default=None, gt=0.0)


class ClusterModel(BaseModel):
    cluster_id: str
    centroid: tuple[float, float]
    stop_ids: List[str]
    size: int
    radius_miles: float
    estimated_route_miles: float
    area: str | None = None


class ClusterPreviewResponse(BaseModel):
    clusters: List[ClusterModel]
    metadata: dict


class GeocodeRequest(BaseModel):
    stop_ids: List[str] = Field(..., min_length=1)


class GeocodedStopModel(BaseModel):
    stop_id: str
    latitude: float
    longitude: float
    cached: bool


class GeocodeErrorModel(BaseModel):
    stop_id: str
    reason: str


class GeocodeResponse(BaseModel):
    results: List[GeocodedStopModel]
    errors: List[GeocodeErrorModel]
    summary: dict[str, int]
