#!/usr/bin/env python3
"""Check the .env file and report which storage backend the service will use."""

from pathlib import Path
import os
import sys

TEMPLATE = """# Storage backend: memory (CSV seeded) or supabase
FIELDOPS_STORAGE_BACKEND=memory

# In-memory seed data
FIELDOPS_DATA_ROOT=./data
FIELDOPS_STOPS_FILE=./data/stops.csv
FIELDOPS_TECHNICIANS_FILE=./data/technicians.csv
# FIELDOPS_ZONE_MAPPINGS_FILE=./data/zone_mappings.json

# Supabase (required when FIELDOPS_STORAGE_BACKEND=supabase)
# FIELDOPS_SUPABASE_URL=https://your-project-id.supabase.co
# FIELDOPS_SUPABASE_KEY=your-service-role-key-here

# Capacity
FIELDOPS_MAX_STOPS_PER_TECHNICIAN=40
FIELDOPS_CLUSTER_RADIUS_MILES=5.0

# Geocoding
FIELDOPS_GEOCODER_USER_AGENT=fieldops-assignment/1.0
FIELDOPS_GEOCODER_CACHE_SIZE=1024
"""

SECRET_KEYS = ("FIELDOPS_SUPABASE_KEY",)


def _mask(line: str) -> str:
    name, sep, value = line.partition("=")
    if not sep or name.strip() not in SECRET_KEYS:
        return line
    value = value.strip()
    if len(value) > 20:
        return f"{name}={value[:20]}...{value[-10:]}"
    return line


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Field Operations Environment Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"❌ .env file NOT found, created template at: {env_file}")
        print("⚠️  Edit it and rerun this script.")
        return

    print(f"✅ Found .env file at: {env_file}")
    print("-" * 60)
    for line in env_file.read_text(encoding="utf-8").splitlines():
        print(_mask(line))
    print("-" * 60)
    print()

    for name in ("FIELDOPS_STORAGE_BACKEND", "FIELDOPS_SUPABASE_URL", "FIELDOPS_SUPABASE_KEY"):
        value = os.getenv(name)
        if value:
            print(f"✅ {name} (from environment): {value[:20]}...")
        else:
            print(f"➖ {name} not set in environment")
    print()

    try:
        sys.path.insert(0, str(project_root / "src"))
        from fieldops.config import settings
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return

    print(f"Storage backend: {settings.storage_backend}")
    if settings.storage_backend == "memory":
        for label, path in (("stops", settings.stops_file), ("technicians", settings.technicians_file)):
            if path is None:
                print(f"➖ No {label} file configured, store starts empty")
            elif path.exists():
                print(f"✅ {label} file: {path}")
            else:
                print(f"❌ {label} file missing: {path}")
    elif settings.supabase_url and settings.supabase_key:
        print("✅ SUCCESS: Supabase is configured!")
    else:
        print("❌ ERROR: Supabase backend selected but FIELDOPS_SUPABASE_URL/KEY are not set")


if __name__ == "__main__":
    main()
