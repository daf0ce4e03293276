"""Route group exports."""

from . import health, stops, technicians

__all__ = ["health", "stops", "technicians"]
