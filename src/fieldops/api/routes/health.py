"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Report which storage backend is active and whether it answers."""
    from ...db.supabase import check_table, get_supabase_client

    if settings.storage_backend == "memory":
        return {"backend": "memory", "configured": True, "connected": True}

    supabase = get_supabase_client()
    if not supabase:
        return {
            "backend": "supabase",
            "configured": False,
            "message": "Supabase not configured. Set FIELDOPS_SUPABASE_URL and FIELDOPS_SUPABASE_KEY environment variables.",
        }

    tables = {}
    for table in (settings.supabase_stops_table, settings.supabase_technicians_table):
        reachable, error = check_table(supabase, table)
        tables[table] = {"reachable": reachable, "error": error}

    connected = all(entry["reachable"] for entry in tables.values())
    return {
        "backend": "supabase",
        "configured": True,
        "connected": connected,
        "tables": tables,
        "message": "Database connected." if connected else "Database connection error, see tables for details.",
    }
