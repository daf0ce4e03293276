"""Database clients and utilities."""

from .supabase import check_table, get_supabase_client

__all__ = ["check_table", "get_supabase_client"]
