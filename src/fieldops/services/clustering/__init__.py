"""Proximity clustering services."""

from .overlays import cluster_overlays
from .proximity import cluster_area, cluster_by_proximity

__all__ = ["cluster_by_proximity", "cluster_area", "cluster_overlays"]
