"""Map overlays for clusters."""

from __future__ import annotations

from typing import Sequence

from shapely.geometry import MultiPoint, Point

from ...models.domain import Cluster

# ~0.005 degrees is roughly 500 m, enough to keep member points strictly inside.
HULL_BUFFER_DEGREES = 0.005


def cluster_overlays(clusters: Sequence[Cluster]) -> list[dict]:
    """Buffered convex hull polygon per cluster, as ``[lat, lon]`` rings.

    Clusters with fewer than three members, or whose members are collinear,
    get a point marker at the centroid instead of a polygon.
    """

    overlays: list[dict] = []
    for cluster in clusters:
        points = [(stop.longitude, stop.latitude) for stop in cluster.stops]
        hull = MultiPoint(points).convex_hull if len(points) >= 3 else None

        if hull is None or hull.is_empty or hull.geom_type != "Polygon":
            overlays.append(
                {
                    "cluster_id": cluster.cluster_id,
                    "coordinates": [],
                    "centroid": [cluster.centroid.latitude, cluster.centroid.longitude],
                    "source": "centroid",
                    "stop_count": cluster.size,
                }
            )
            continue

        buffered = hull.buffer(HULL_BUFFER_DEGREES)
        if buffered.is_empty or buffered.geom_type != "Polygon":
            buffered = hull

        if not all(buffered.contains(Point(lon, lat)) for lon, lat in points):
            buffered = buffered.buffer(HULL_BUFFER_DEGREES)

        overlays.append(
            {
                "cluster_id": cluster.cluster_id,
                "coordinates": [[lat, lon] for lon, lat in buffered.exterior.coords],
                "centroid": [cluster.centroid.latitude, cluster.centroid.longitude],
                "source": "convex_hull_buffered",
                "stop_count": cluster.size,
            }
        )
    return overlays
