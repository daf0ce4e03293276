"""Construct the configured backends for stops, technicians and zones."""

from __future__ import annotations

import functools
import logging

from ..config import settings
from ..db.supabase import get_supabase_client
from ..services.zones import ZoneMappingResolver, default_resolver
from .base import JobStore, TechnicianDirectory, ZoneResolver
from .csv_loader import load_stops, load_technicians
from .memory import InMemoryJobStore, InMemoryTechnicianDirectory
from .supabase_store import SupabaseJobStore, SupabaseTechnicianDirectory

logger = logging.getLogger(__name__)


def _require_supabase():
    client = get_supabase_client()
    if client is None:
        raise ConnectionError(
            "Storage backend is 'supabase' but Supabase is not configured. "
            "Set FIELDOPS_SUPABASE_URL and FIELDOPS_SUPABASE_KEY."
        )
    return client


@functools.lru_cache(maxsize=1)
def get_job_store() -> JobStore:
    if settings.storage_backend == "supabase":
        return SupabaseJobStore(_require_supabase(), table=settings.supabase_stops_table)

    stops = load_stops(settings.stops_file) if settings.stops_file else ()
    logger.info(f"In-memory job store seeded with {len(stops)} stop(s)")
    return InMemoryJobStore(stops)


@functools.lru_cache(maxsize=1)
def get_technician_directory() -> TechnicianDirectory:
    if settings.storage_backend == "supabase":
        return SupabaseTechnicianDirectory(_require_supabase(), table=settings.supabase_technicians_table)

    technicians = load_technicians(settings.technicians_file) if settings.technicians_file else ()
    logger.info(f"In-memory technician directory seeded with {len(technicians)} technician(s)")
    return InMemoryTechnicianDirectory(technicians)


@functools.lru_cache(maxsize=1)
def get_zone_resolver() -> ZoneResolver:
    if settings.zone_mappings_file:
        return ZoneMappingResolver.from_json(settings.zone_mappings_file)
    return default_resolver()
