"""Application configuration and settings management."""

from pathlib import Path
from typing import Annotated, Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="FIELDOPS_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Field Operations Assignment API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for data files and run outputs.")
    stops_file: Optional[Path] = Field(
        default=None,
        description="CSV of scheduled stops used to seed the in-memory job store.",
    )
    technicians_file: Optional[Path] = Field(
        default=None,
        description="CSV of technicians used to seed the in-memory directory.",
    )
    zone_mappings_file: Optional[Path] = Field(
        default=None,
        description="JSON file of zone -> counties/cities mappings. Built-in Metro Atlanta table when unset.",
    )
    storage_backend: Literal["memory", "supabase"] = Field(
        default="memory",
        description="Where stops and technicians are read from and assignments written to.",
    )

    max_stops_per_technician: int = Field(default=40, ge=1)
    estimated_hours_per_stop: float = Field(default=0.5, ge=0.0)
    cluster_radius_miles: float = Field(default=5.0, gt=0.0)
    workload_max_workers: int = Field(default=8, ge=1)

    geocoder_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Base URL for the Nominatim geocoding service.",
    )
    geocoder_user_agent: str = Field(default="fieldops-assignment/1.0")
    geocoder_min_interval_seconds: float = Field(default=1.0, ge=0.0)
    geocoder_timeout_seconds: float = Field(default=10.0, gt=0.0)
    geocoder_max_retries: int = Field(default=2, ge=0)
    geocoder_backoff_seconds: float = Field(default=1.0, ge=0.0)
    geocoder_cache_size: int = Field(default=1024, ge=0)

    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    supabase_stops_table: str = Field(default="scheduled_stops")
    supabase_technicians_table: str = Field(default="technicians")

    @field_validator("data_root", "stops_file", "technicians_file", "zone_mappings_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Optional[Path]:
        if value is None or value == "":
            return None
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
