"""Domain models for stops, technicians and derived assignment values."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal, NamedTuple, Optional

AssignmentSource = Literal["manual", "auto"]

CLOSED_STATUSES = frozenset({"completed", "cancelled"})


class GeoPoint(NamedTuple):
    latitude: float
    longitude: float


@dataclass(slots=True)
class Stop:
    """A scheduled cleaning job at one customer address."""

    stop_id: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    county: str = ""
    city: str = ""
    zone: Optional[str] = None
    zip_code: Optional[str] = None
    address: Optional[str] = None
    status: Optional[str] = None
    assigned_technician_id: Optional[str] = None
    assignment_source: Optional[AssignmentSource] = None
    reassigned_from: Optional[str] = None

    @property
    def has_coordinates(self) -> bool:
        return (
            self.latitude is not None
            and self.longitude is not None
            and math.isfinite(self.latitude)
            and math.isfinite(self.longitude)
        )

    @property
    def is_open(self) -> bool:
        return (self.status or "").strip().lower() not in CLOSED_STATUSES


@dataclass(slots=True)
class Technician:
    """A field worker and the zones/counties they cover."""

    technician_id: str
    display_name: str
    coverage_zones: frozenset[str] = field(default_factory=frozenset)
    coverage_counties: frozenset[str] = field(default_factory=frozenset)

    @property
    def has_coverage(self) -> bool:
        return bool(self.coverage_zones or self.coverage_counties)


@dataclass(frozen=True, slots=True)
class AssignmentLimits:
    """Capacity and estimation parameters injected into the services."""

    max_stops_per_technician: int = 40
    estimated_hours_per_stop: float = 0.5
    cluster_radius_miles: float = 5.0

    @classmethod
    def from_settings(cls, settings) -> "AssignmentLimits":
        return cls(
            max_stops_per_technician=settings.max_stops_per_technician,
            estimated_hours_per_stop=settings.estimated_hours_per_stop,
            cluster_radius_miles=settings.cluster_radius_miles,
        )


@dataclass(slots=True)
class WorkloadMetrics:
    technician_id: str
    technician_name: str
    total_stops: int
    stops_by_zone: dict[str, int]
    stops_by_county: dict[str, int]
    capacity_utilization: float
    estimated_hours: float


@dataclass(slots=True)
class Cluster:
    """Greedily formed group of nearby stops. The seed is ``stops[0]``."""

    cluster_id: str
    centroid: GeoPoint
    stops: tuple[Stop, ...]
    radius_miles: float
    estimated_route_miles: float
    area: Optional[str] = None

    @property
    def seed(self) -> Stop:
        return self.stops[0]

    @property
    def size(self) -> int:
        return len(self.stops)

    def stop_ids(self) -> list[str]:
        return [stop.stop_id for stop in self.stops]
