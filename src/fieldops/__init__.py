"""Technician workload balancing and stop assignment service."""

__version__ = "0.1.0"
