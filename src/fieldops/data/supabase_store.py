"""Supabase-backed job store and technician directory."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from ..models.domain import AssignmentSource, Stop, Technician

logger = logging.getLogger(__name__)

TECHNICIAN_ROLES = ("employee", "operator", "admin")


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unparseable coordinate value {value!r}")
        return None


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def row_to_stop(row: dict[str, Any]) -> Stop:
    return Stop(
        stop_id=str(row["id"]),
        latitude=_optional_float(row.get("latitude")),
        longitude=_optional_float(row.get("longitude")),
        county=(row.get("county") or "").strip(),
        city=(row.get("city") or "").strip(),
        zone=_optional_str(row.get("zone")),
        zip_code=_optional_str(row.get("zip_code")),
        address=_optional_str(row.get("address")),
        status=_optional_str(row.get("status")),
        assigned_technician_id=_optional_str(row.get("assigned_technician_id")),
        assignment_source=row.get("assignment_source") or None,
        reassigned_from=_optional_str(row.get("reassigned_from")),
    )


def row_to_technician(row: dict[str, Any]) -> Technician:
    display_name = row.get("display_name") or f"{row.get('first_name') or ''} {row.get('last_name') or ''}".strip()
    return Technician(
        technician_id=str(row["id"]),
        display_name=display_name,
        coverage_zones=frozenset(row.get("zones") or ()),
        coverage_counties=frozenset(row.get("counties") or ()),
    )


class SupabaseJobStore:
    """Job store over a Supabase table of scheduled stops."""

    def __init__(self, client: Any, table: str = "scheduled_stops") -> None:
        self.client = client
        self.table = table

    def _query(self):
        return self.client.table(self.table)

    def get_stops_assigned_to(self, technician_id: str) -> list[Stop]:
        response = self._query().select("*").eq("assigned_technician_id", technician_id).execute()
        return [row_to_stop(row) for row in (response.data or [])]

    def get_unassigned_stops(self) -> list[Stop]:
        response = self._query().select("*").is_("assigned_technician_id", "null").execute()
        stops = [row_to_stop(row) for row in (response.data or [])]
        return [stop for stop in stops if stop.is_open]

    def get_stop(self, stop_id: str) -> Optional[Stop]:
        response = self._query().select("*").eq("id", stop_id).limit(1).execute()
        rows = response.data or []
        return row_to_stop(rows[0]) if rows else None

    def get_stops(self, stop_ids: Iterable[str]) -> dict[str, Stop]:
        ids = list(stop_ids)
        if not ids:
            return {}
        response = self._query().select("*").in_("id", ids).execute()
        stops = (row_to_stop(row) for row in (response.data or []))
        return {stop.stop_id: stop for stop in stops}

    def set_assignment(
        self,
        stop_id: str,
        technician_id: Optional[str],
        source: Optional[AssignmentSource],
        *,
        expected_technician_id: Optional[str],
        reassigned_from: Optional[str] = None,
    ) -> bool:
        now = datetime.now(timezone.utc).isoformat()
        payload: dict[str, Any] = {
            "assigned_technician_id": technician_id,
            "assignment_source": source,
            "assigned_at": now if technician_id else None,
            "updated_at": now,
        }
        if reassigned_from is not None:
            payload["reassigned_from"] = reassigned_from
            payload["reassigned_at"] = now

        # The owner filter makes the update conditional: zero rows back means
        # someone else changed the assignment first.
        query = self._query().update(payload).eq("id", stop_id)
        if expected_technician_id is None:
            query = query.is_("assigned_technician_id", "null")
        else:
            query = query.eq("assigned_technician_id", expected_technician_id)
        response = query.execute()
        return bool(response.data)

    def set_coordinates(self, stop_id: str, latitude: float, longitude: float) -> bool:
        response = (
            self._query()
            .update(
                {
                    "latitude": latitude,
                    "longitude": longitude,
                    "geocoded_at": datetime.now(timezone.utc).isoformat(),
                }
            )
            .eq("id", stop_id)
            .execute()
        )
        return bool(response.data)


class SupabaseTechnicianDirectory:
    def __init__(self, client: Any, table: str = "technicians") -> None:
        self.client = client
        self.table = table

    def get_technician(self, technician_id: str) -> Optional[Technician]:
        response = (
            self.client.table(self.table)
            .select("*")
            .eq("id", technician_id)
            .in_("role", list(TECHNICIAN_ROLES))
            .limit(1)
            .execute()
        )
        rows = response.data or []
        return row_to_technician(rows[0]) if rows else None

    def list_technicians(self) -> list[Technician]:
        response = self.client.table(self.table).select("*").in_("role", list(TECHNICIAN_ROLES)).execute()
        return [row_to_technician(row) for row in (response.data or [])]
