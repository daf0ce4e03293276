"""Fill in coordinates for stops that have none."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ...data.base import JobStore
from ...models.domain import Stop
from ..assignment.results import ERROR_NOT_FOUND, ItemError
from .nominatim import NominatimGeocoder

logger = logging.getLogger(__name__)

MIN_ADDRESS_PARTS = 2


@dataclass(slots=True)
class GeocodedStop:
    stop_id: str
    latitude: float
    longitude: float
    cached: bool


@dataclass(slots=True)
class GeocodingSummary:
    results: list[GeocodedStop] = field(default_factory=list)
    errors: list[ItemError] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results) + len(self.errors)


def build_address(stop: Stop) -> Optional[str]:
    parts = [part.strip() for part in (stop.address, stop.city, stop.zip_code) if part and part.strip()]
    if len(parts) < MIN_ADDRESS_PARTS:
        return None
    return ", ".join(parts)


def geocode_stops(
    stop_ids: Sequence[str],
    job_store: JobStore,
    geocoder: NominatimGeocoder,
) -> GeocodingSummary:
    summary = GeocodingSummary()
    for stop_id in dict.fromkeys(stop_ids):
        try:
            stop = job_store.get_stop(stop_id)
            if stop is None:
                summary.errors.append(ItemError(stop_id, ERROR_NOT_FOUND))
                continue

            if stop.has_coordinates:
                summary.results.append(GeocodedStop(stop_id, stop.latitude, stop.longitude, cached=True))
                continue

            address = build_address(stop)
            if address is None:
                summary.errors.append(ItemError(stop_id, "insufficient address data"))
                continue

            located = geocoder.geocode(address)
            if located is None:
                summary.errors.append(ItemError(stop_id, "geocoding failed"))
                continue

            if not job_store.set_coordinates(stop_id, located.latitude, located.longitude):
                summary.errors.append(ItemError(stop_id, ERROR_NOT_FOUND))
                continue
            summary.results.append(GeocodedStop(stop_id, located.latitude, located.longitude, located.cached))
        except ConnectionError:
            # Geocoder unreachable after retries; remaining stops would fail the same way.
            logger.error(f"Geocoding aborted at stop {stop_id}: service unavailable")
            raise
        except Exception as e:
            logger.warning(f"Error geocoding stop {stop_id}: {e}")
            summary.errors.append(ItemError(stop_id, str(e) or "unknown error"))

    logger.info(f"Geocoded {len(summary.results)} of {summary.total} stop(s)")
    return summary
