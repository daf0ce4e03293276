"""CSV loaders used to seed the in-memory backend."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Optional

from ..models.domain import Stop, Technician

LIST_SEPARATOR = ";"


def _coerce_float(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    try:
        return float(value.replace(",", ""))
    except ValueError as exc:
        raise ValueError(f"Unable to parse float from value '{value}'") from exc


def _field(row: dict, *names: str) -> str:
    for name in names:
        value = row.get(name)
        if value:
            return value.strip()
    return ""


def _split_list(value: str) -> frozenset[str]:
    return frozenset(item.strip() for item in value.split(LIST_SEPARATOR) if item.strip())


def load_stops(csv_path: Path) -> tuple[Stop, ...]:
    """Load stops from CSV. Rows without coordinates are kept, with no coordinates."""

    if not csv_path.exists():
        raise FileNotFoundError(f"Stops file not found: {csv_path}")

    stops: list[Stop] = []
    with csv_path.open(mode="r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise ValueError(f"Stops file '{csv_path}' is missing a header row.")
        for line_number, row in enumerate(reader, start=2):
            stop_id = _field(row, "StopId", "stop_id", "id")
            if not stop_id:
                raise ValueError(f"Stops file '{csv_path}' line {line_number} has no stop id.")
            stops.append(
                Stop(
                    stop_id=stop_id,
                    latitude=_coerce_float(row.get("Latitude") or row.get("latitude")),
                    longitude=_coerce_float(row.get("Longitude") or row.get("longitude")),
                    county=_field(row, "County", "county"),
                    city=_field(row, "City", "city"),
                    zone=_field(row, "Zone", "zone") or None,
                    zip_code=_field(row, "ZipCode", "zip_code", "zip") or None,
                    address=_field(row, "Address", "address") or None,
                    status=_field(row, "Status", "status") or None,
                    assigned_technician_id=_field(row, "AssignedTechnicianId", "assigned_technician_id") or None,
                )
            )
    return tuple(stops)


def load_technicians(csv_path: Path) -> tuple[Technician, ...]:
    """Load technicians; zones and counties are ``;``-separated lists."""

    if not csv_path.exists():
        raise FileNotFoundError(f"Technicians file not found: {csv_path}")

    technicians: list[Technician] = []
    with csv_path.open(mode="r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise ValueError(f"Technicians file '{csv_path}' is missing a header row.")
        for row in reader:
            technician_id = _field(row, "TechnicianId", "technician_id", "id")
            if not technician_id:
                continue
            display_name = _field(row, "DisplayName", "display_name") or (
                f"{_field(row, 'FirstName', 'first_name')} {_field(row, 'LastName', 'last_name')}".strip()
            )
            technicians.append(
                Technician(
                    technician_id=technician_id,
                    display_name=display_name,
                    coverage_zones=_split_list(_field(row, "Zones", "zones")),
                    coverage_counties=_split_list(_field(row, "Counties", "counties")),
                )
            )
    return tuple(technicians)
