from pathlib import Path

import pytest

from fieldops.data.csv_loader import load_stops, load_technicians


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


def test_load_stops_reads_all_columns(tmp_path: Path):
    path = _write(
        tmp_path / "stops.csv",
        "StopId,Latitude,Longitude,County,City,Zone,ZipCode,Address,Status,AssignedTechnicianId\n"
        "S1,33.75,-84.39,Fulton,Atlanta,Metro Atlanta Core,30303,1 Peachtree St,scheduled,\n"
        "S2,,,Cobb,Marietta,,30060,50 Church St,,T1\n",
    )

    stops = load_stops(path)

    assert [stop.stop_id for stop in stops] == ["S1", "S2"]
    first, second = stops
    assert (first.latitude, first.longitude) == (33.75, -84.39)
    assert first.zone == "Metro Atlanta Core"
    assert first.assigned_technician_id is None
    assert second.latitude is None and not second.has_coordinates
    assert second.zone is None
    assert second.assigned_technician_id == "T1"


def test_load_stops_accepts_snake_case_headers(tmp_path: Path):
    path = _write(tmp_path / "stops.csv", "stop_id,latitude,longitude,county,city,zip\nS1,33.75,-84.39,Fulton,Atlanta,30303\n")

    (stop,) = load_stops(path)

    assert stop.zip_code == "30303"
    assert stop.county == "Fulton"


def test_load_stops_rejects_rows_without_id(tmp_path: Path):
    path = _write(tmp_path / "stops.csv", "StopId,Latitude,Longitude\n,33.75,-84.39\n")

    with pytest.raises(ValueError):
        load_stops(path)


def test_load_stops_rejects_bad_coordinates(tmp_path: Path):
    path = _write(tmp_path / "stops.csv", "StopId,Latitude,Longitude\nS1,north,-84.39\n")

    with pytest.raises(ValueError):
        load_stops(path)


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_stops(tmp_path / "absent.csv")


def test_load_technicians_splits_coverage_lists(tmp_path: Path):
    path = _write(
        tmp_path / "technicians.csv",
        "TechnicianId,FirstName,LastName,Zones,Counties\n"
        "T1,Alex,Kim,West Metro; North Metro,Cobb;Cherokee\n"
        "T2,Blair,,,\n",
    )

    first, second = load_technicians(path)

    assert first.display_name == "Alex Kim"
    assert first.coverage_zones == frozenset({"West Metro", "North Metro"})
    assert first.coverage_counties == frozenset({"Cobb", "Cherokee"})
    assert second.display_name == "Blair"
    assert not second.has_coverage
