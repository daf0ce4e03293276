"""Geospatial helper functions.

Distances are great-circle miles. Any point whose latitude or longitude is
missing (or not finite) is left out of every calculation here rather than
being treated as ``(0, 0)``.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, NamedTuple, Optional, Sequence, TypeVar

import numpy as np

from ..errors import EmptyInputError
from ..models.domain import GeoPoint

EARTH_RADIUS_MILES = 3959.0

P = TypeVar("P")


class DistanceEntry(NamedTuple):
    point: Any
    distance_miles: float


def point_coordinates(point: Any) -> Optional[tuple[float, float]]:
    """Return ``(lat, lon)`` for anything exposing latitude/longitude, or None."""

    latitude = getattr(point, "latitude", None)
    longitude = getattr(point, "longitude", None)
    if latitude is None or longitude is None:
        return None
    latitude, longitude = float(latitude), float(longitude)
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return None
    return latitude, longitude


def distance_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def centroid(points: Iterable[Any]) -> GeoPoint:
    """Arithmetic mean of latitudes and longitudes.

    This is a planar approximation, which is what the clustering radius is
    calibrated against at metro-area scale. Points without coordinates are
    ignored; raises ``EmptyInputError`` when nothing usable remains.
    """

    coordinates = [coords for coords in (point_coordinates(p) for p in points) if coords is not None]
    if not coordinates:
        raise EmptyInputError("centroid requires at least one point with coordinates")
    lat = sum(lat for lat, _ in coordinates) / len(coordinates)
    lon = sum(lon for _, lon in coordinates) / len(coordinates)
    return GeoPoint(lat, lon)


def sort_by_distance(points: Iterable[P], anchor_lat: float, anchor_lon: float) -> list[DistanceEntry]:
    """Order points by distance from the anchor. Ties keep their input order."""

    entries: list[DistanceEntry] = []
    for point in points:
        coords = point_coordinates(point)
        if coords is None:
            continue
        entries.append(DistanceEntry(point, distance_miles(anchor_lat, anchor_lon, coords[0], coords[1])))
    return sorted(entries, key=lambda entry: entry.distance_miles)


def filter_within_radius(
    points: Iterable[P],
    anchor_lat: float,
    anchor_lon: float,
    radius_miles: float,
) -> list[P]:
    """Return the points at most ``radius_miles`` from the anchor (boundary inclusive)."""

    selected: list[P] = []
    for point in points:
        coords = point_coordinates(point)
        if coords is None:
            continue
        if distance_miles(anchor_lat, anchor_lon, coords[0], coords[1]) <= radius_miles:
            selected.append(point)
    return selected


def pairwise_distance_matrix(points: Sequence[Any]) -> np.ndarray:
    """Square matrix of great-circle miles between every pair of points.

    All points must carry coordinates.
    """

    coordinates = []
    for point in points:
        coords = point_coordinates(point)
        if coords is None:
            raise ValueError("pairwise_distance_matrix requires coordinates on every point")
        coordinates.append(coords)
    if not coordinates:
        return np.zeros((0, 0))

    radians = np.radians(np.asarray(coordinates, dtype=float))
    lat = radians[:, 0][:, np.newaxis]
    lon = radians[:, 1][:, np.newaxis]

    d_phi = lat.T - lat
    d_lambda = lon.T - lon
    a = np.sin(d_phi / 2) ** 2 + np.cos(lat) * np.cos(lat.T) * np.sin(d_lambda / 2) ** 2
    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def max_pairwise_distance(points: Sequence[Any]) -> float:
    if len(points) < 2:
        return 0.0
    return float(pairwise_distance_matrix(points).max())
