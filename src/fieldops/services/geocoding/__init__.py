"""Geocoding services."""

from .nominatim import GeocodeResult, NominatimGeocoder
from .service import GeocodedStop, GeocodingSummary, build_address, geocode_stops

__all__ = [
    "GeocodeResult",
    "NominatimGeocoder",
    "GeocodedStop",
    "GeocodingSummary",
    "build_address",
    "geocode_stops",
]
