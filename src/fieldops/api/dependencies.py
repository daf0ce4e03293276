"""Service construction for request handlers."""

from __future__ import annotations

import functools

from ..config import settings
from ..data.repository import get_job_store, get_technician_directory, get_zone_resolver
from ..models.domain import AssignmentLimits
from ..services.assignment import AssignmentEngine
from ..services.geocoding import NominatimGeocoder


def get_assignment_engine() -> AssignmentEngine:
    """A fresh engine per request over the shared backends."""
    return AssignmentEngine(
        job_store=get_job_store(),
        directory=get_technician_directory(),
        resolver=get_zone_resolver(),
        limits=AssignmentLimits.from_settings(settings),
        max_workers=settings.workload_max_workers,
    )


@functools.lru_cache(maxsize=1)
def get_geocoder() -> NominatimGeocoder:
    # Shared so the request throttle and address cache span requests.
    return NominatimGeocoder()
