import json
from pathlib import Path

from fieldops.models.domain import GeoPoint
from fieldops.persistence.filesystem import FileStorage
from fieldops.services.assignment.results import (
    SKIP_CLUSTER_TOO_LARGE,
    AutoAssignmentResult,
    ClusterSummary,
    WorkloadSnapshot,
)
from fieldops.services.outputs import auto_assignment_to_csv, persist_auto_assignment


def _result() -> AutoAssignmentResult:
    result = AutoAssignmentResult(technician_id="T1", workload=WorkloadSnapshot(before=2, after=3, target=3))
    result.record("S1", "assigned", cluster_id="CL002")
    result.record("S2", "skipped", SKIP_CLUSTER_TOO_LARGE, "CL001")
    result.clusters.append(
        ClusterSummary("CL002", 1, "Atlanta (30303)", GeoPoint(33.75, -84.39), 0.0, "assigned")
    )
    return result


def test_file_storage_creates_run_directory(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="auto_assign_test")

    assert run_dir.exists()
    assert run_dir.is_dir()
    assert run_dir.parent == (tmp_path / "outputs").resolve()


def test_run_directories_are_unique(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)

    first = storage.make_run_directory(prefix="auto_assign_test")
    second = storage.make_run_directory(prefix="auto_assign_test")

    assert first != second


def test_file_storage_writes_json_and_csv(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="auto_assign_test")

    summary_path = run_dir / "summary.json"
    details_path = run_dir / "details.csv"

    storage.write_json(summary_path, {"hello": "world"})
    storage.write_csv(details_path, "a,b\n1,2\n")

    assert summary_path.read_text(encoding="utf-8") == '{\n  "hello": "world"\n}'
    assert details_path.read_text(encoding="utf-8") == "a,b\n1,2\n"


def test_details_csv_lists_every_decision() -> None:
    assert auto_assignment_to_csv(_result()) == (
        "stop_id,action,reason,cluster_id\n"
        "S1,assigned,,CL002\n"
        f"S2,skipped,{SKIP_CLUSTER_TOO_LARGE},CL001\n"
    )


def test_persist_auto_assignment_writes_summary_and_details(tmp_path: Path) -> None:
    run_dir = persist_auto_assignment(_result(), FileStorage(root=tmp_path))

    assert run_dir.name.startswith("auto_assign_T1_")
    summary = json.loads((run_dir / "summary.json").read_text(encoding="utf-8"))
    assert summary["assigned"] == 1
    assert summary["skipped"] == 1
    assert summary["workload"] == {"before": 2, "after": 3, "target": 3}
    assert summary["clusters"][0]["centroid"] == [33.75, -84.39]
    assert (run_dir / "details.csv").read_text(encoding="utf-8").startswith("stop_id,action")
