from pathlib import Path

import pytest

from fieldops.api.dependencies import get_assignment_engine
from fieldops.config import Settings, settings
from fieldops.data import repository
from fieldops.data.memory import InMemoryJobStore


@pytest.fixture(autouse=True)
def clear_backend_cache():
    for getter in (repository.get_job_store, repository.get_technician_directory, repository.get_zone_resolver):
        getter.cache_clear()
    yield
    for getter in (repository.get_job_store, repository.get_technician_directory, repository.get_zone_resolver):
        getter.cache_clear()


def test_memory_backend_is_seeded_from_csv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    stops_file = tmp_path / "stops.csv"
    stops_file.write_text("StopId,Latitude,Longitude,County\nS1,33.75,-84.39,Fulton\n", encoding="utf-8")
    technicians_file = tmp_path / "technicians.csv"
    technicians_file.write_text("TechnicianId,DisplayName,Counties\nT1,Alex,Fulton\n", encoding="utf-8")

    monkeypatch.setattr(settings, "storage_backend", "memory")
    monkeypatch.setattr(settings, "stops_file", stops_file)
    monkeypatch.setattr(settings, "technicians_file", technicians_file)
    monkeypatch.setattr(settings, "zone_mappings_file", None)

    store = repository.get_job_store()

    assert isinstance(store, InMemoryJobStore)
    assert repository.get_job_store() is store
    assert [stop.stop_id for stop in store.get_unassigned_stops()] == ["S1"]

    engine = get_assignment_engine()
    assert engine.job_store is store
    assert engine.directory.get_technician("T1").display_name == "Alex"
    assert "Metro Atlanta Core" in engine.resolver.zones


def test_supabase_backend_requires_credentials(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "storage_backend", "supabase")
    monkeypatch.setattr(repository, "get_supabase_client", lambda: None)

    with pytest.raises(ConnectionError):
        repository.get_job_store()


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("FIELDOPS_MAX_STOPS_PER_TECHNICIAN", "25")
    monkeypatch.setenv("FIELDOPS_FRONTEND_ALLOWED_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("FIELDOPS_STOPS_FILE", "")

    loaded = Settings()

    assert loaded.max_stops_per_technician == 25
    assert loaded.frontend_allowed_origins == ("http://a.test", "http://b.test")
    assert loaded.stops_file is None
