"""API routes for unassigned stops, cluster previews and geocoding."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, status

from ...schemas.stops import (
    ClusterModel,
    ClusterPreviewRequest,
    ClusterPreviewResponse,
    GeocodeRequest,
    GeocodeResponse,
    StopModel,
    UnassignedStopsResponse,
)
from ...services.clustering import cluster_overlays
from ...services.geocoding import geocode_stops
from ..dependencies import get_assignment_engine, get_geocoder
from ..errors import to_http_exception

router = APIRouter(prefix="/stops", tags=["stops"])


@router.get("/unassigned", response_model=UnassignedStopsResponse, status_code=status.HTTP_200_OK)
def list_unassigned() -> UnassignedStopsResponse:
    try:
        stops = get_assignment_engine().list_unassigned_stops()
    except Exception as exc:
        raise to_http_exception(exc) from exc
    items = [StopModel.model_validate(asdict(stop)) for stop in stops]
    return UnassignedStopsResponse(items=items, total=len(items))


@router.post("/clusters", response_model=ClusterPreviewResponse, status_code=status.HTTP_200_OK)
def preview_clusters(payload: ClusterPreviewRequest) -> ClusterPreviewResponse:
    """Group stops into proximity clusters without assigning anything.

    With explicit ``stop_ids`` those stops are clustered; otherwise unassigned
    stops matching the zones/counties, or every unassigned stop when neither
    is given.
    """
    try:
        engine = get_assignment_engine()
        clusters = engine.preview_clusters(
            stop_ids=payload.stop_ids,
            zones=payload.zones,
            counties=payload.counties,
            radius_miles=payload.radius_miles,
        )
        overlays = cluster_overlays(clusters)
    except Exception as exc:
        raise to_http_exception(exc) from exc

    radius = payload.radius_miles if payload.radius_miles is not None else engine.limits.cluster_radius_miles
    models = [
        ClusterModel(
            cluster_id=cluster.cluster_id,
            centroid=cluster.centroid,
            stop_ids=cluster.stop_ids(),
            size=cluster.size,
            radius_miles=cluster.radius_miles,
            estimated_route_miles=round(cluster.estimated_route_miles, 2),
            area=cluster.area,
        )
        for cluster in clusters
    ]
    return ClusterPreviewResponse(
        clusters=models,
        metadata={
            "radius_miles": radius,
            "cluster_count": len(models),
            "stop_count": sum(model.size for model in models),
            "overlays": overlays,
        },
    )


@router.post("/geocode", response_model=GeocodeResponse, status_code=status.HTTP_200_OK)
def geocode(payload: GeocodeRequest) -> GeocodeResponse:
    """Fill in coordinates for stops that lack them, one stop at a time."""
    try:
        summary = geocode_stops(payload.stop_ids, get_assignment_engine().job_store, get_geocoder())
    except Exception as exc:
        raise to_http_exception(exc) from exc

    return GeocodeResponse(
        results=[asdict(item) for item in summary.results],
        errors=[asdict(item) for item in summary.errors],
        summary={
            "total": summary.total,
            "success": len(summary.results),
            "failed": len(summary.errors),
        },
    )
