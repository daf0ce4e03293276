"""Greedy single-seed proximity clustering of stops."""

from __future__ import annotations

from collections import Counter
from typing import Optional, Sequence

from ...models.domain import Cluster, Stop
from ..geospatial import centroid, distance_miles, max_pairwise_distance, point_coordinates


def cluster_by_proximity(
    stops: Sequence[Stop],
    radius_miles: float,
    *,
    id_prefix: str = "CL",
) -> list[Cluster]:
    """Group stops around seeds taken in input order.

    Each cluster starts from the first stop not yet clustered and absorbs every
    remaining stop within ``radius_miles`` of that seed. Distance is measured
    from the seed only, never from other members, so every member lies inside
    one radius of a single reference point. Stops without coordinates are
    dropped. Clusters are returned in seed order.
    """

    if radius_miles < 0:
        raise ValueError("radius_miles must be >= 0")

    remaining = [stop for stop in stops if point_coordinates(stop) is not None]
    clusters: list[Cluster] = []

    while remaining:
        seed = remaining.pop(0)
        seed_lat, seed_lon = point_coordinates(seed)
        members = [seed]
        leftover: list[Stop] = []
        for candidate in remaining:
            lat, lon = point_coordinates(candidate)
            if distance_miles(seed_lat, seed_lon, lat, lon) <= radius_miles:
                members.append(candidate)
            else:
                leftover.append(candidate)
        remaining = leftover
        clusters.append(_build_cluster(f"{id_prefix}{len(clusters) + 1:03d}", members, radius_miles))

    return clusters


def _build_cluster(cluster_id: str, members: Sequence[Stop], radius_miles: float) -> Cluster:
    return Cluster(
        cluster_id=cluster_id,
        centroid=centroid(members),
        stops=tuple(members),
        radius_miles=radius_miles,
        # Crude upper bound for display, not a route length.
        estimated_route_miles=2 * max_pairwise_distance(members),
        area=cluster_area(members),
    )


def cluster_area(members: Sequence[Stop]) -> Optional[str]:
    """Most frequent city among members (first seen wins ties), plus one zip code."""

    cities = Counter(
        (stop.city or "").strip() for stop in members if (stop.city or "").strip()
    )
    if not cities:
        return next(((stop.zip_code or "").strip() for stop in members if (stop.zip_code or "").strip()), None)

    city = max(cities, key=cities.__getitem__)
    zip_code = _zip_for_city(members, city)
    return f"{city} ({zip_code})" if zip_code else city


def _zip_for_city(members: Sequence[Stop], city: str) -> Optional[str]:
    fallback: Optional[str] = None
    for stop in members:
        code = (stop.zip_code or "").strip()
        if not code:
            continue
        if (stop.city or "").strip() == city:
            return code
        if fallback is None:
            fallback = code
    return fallback
