"""In-process job store and technician directory."""

from __future__ import annotations

import threading
from dataclasses import replace
from typing import Iterable, Optional

from ..models.domain import AssignmentSource, Stop, Technician


class InMemoryJobStore:
    """Dictionary-backed job store.

    Reads hand out copies so callers never mutate stored state. Assignment
    writes are compare-and-swap under a lock.
    """

    def __init__(self, stops: Iterable[Stop] = ()) -> None:
        self._lock = threading.Lock()
        self._stops: dict[str, Stop] = {}
        for stop in stops:
            if stop.stop_id in self._stops:
                raise ValueError(f"Duplicate stop id '{stop.stop_id}'")
            self._stops[stop.stop_id] = replace(stop)

    def add_stop(self, stop: Stop) -> None:
        with self._lock:
            self._stops[stop.stop_id] = replace(stop)

    def all_stops(self) -> list[Stop]:
        with self._lock:
            return [replace(stop) for stop in self._stops.values()]

    def get_stops_assigned_to(self, technician_id: str) -> list[Stop]:
        with self._lock:
            return [
                replace(stop)
                for stop in self._stops.values()
                if stop.assigned_technician_id == technician_id
            ]

    def get_unassigned_stops(self) -> list[Stop]:
        with self._lock:
            return [
                replace(stop)
                for stop in self._stops.values()
                if stop.assigned_technician_id is None and stop.is_open
            ]

    def get_stop(self, stop_id: str) -> Optional[Stop]:
        with self._lock:
            stop = self._stops.get(stop_id)
            return replace(stop) if stop is not None else None

    def get_stops(self, stop_ids: Iterable[str]) -> dict[str, Stop]:
        with self._lock:
            return {
                stop_id: replace(self._stops[stop_id])
                for stop_id in stop_ids
                if stop_id in self._stops
            }

    def set_assignment(
        self,
        stop_id: str,
        technician_id: Optional[str],
        source: Optional[AssignmentSource],
        *,
        expected_technician_id: Optional[str],
        reassigned_from: Optional[str] = None,
    ) -> bool:
        with self._lock:
            stop = self._stops.get(stop_id)
            if stop is None or stop.assigned_technician_id != expected_technician_id:
                return False
            stop.assigned_technician_id = technician_id
            stop.assignment_source = source
            if reassigned_from is not None:
                stop.reassigned_from = reassigned_from
            return True

    def set_coordinates(self, stop_id: str, latitude: float, longitude: float) -> bool:
        with self._lock:
            stop = self._stops.get(stop_id)
            if stop is None:
                return False
            stop.latitude = latitude
            stop.longitude = longitude
            return True


class InMemoryTechnicianDirectory:
    def __init__(self, technicians: Iterable[Technician] = ()) -> None:
        self._technicians: dict[str, Technician] = {}
        for technician in technicians:
            self._technicians[technician.technician_id] = technician

    def add_technician(self, technician: Technician) -> None:
        self._technicians[technician.technician_id] = technician

    def get_technician(self, technician_id: str) -> Optional[Technician]:
        return self._technicians.get(technician_id)

    def list_technicians(self) -> list[Technician]:
        return list(self._technicians.values())
