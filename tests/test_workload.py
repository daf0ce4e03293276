import pytest

from fieldops.data.memory import InMemoryJobStore, InMemoryTechnicianDirectory
from fieldops.models.domain import AssignmentLimits, Stop, Technician
from fieldops.services.workload import WorkloadCalculator


def _stop(sid: str, owner: str | None, zone: str | None = None, county: str = "") -> Stop:
    return Stop(
        stop_id=sid,
        latitude=33.75,
        longitude=-84.39,
        county=county,
        city="Atlanta",
        zone=zone,
        assigned_technician_id=owner,
    )


@pytest.fixture
def calculator() -> WorkloadCalculator:
    stops = [
        _stop("S1", "T1", zone="Metro Atlanta Core", county="Fulton"),
        _stop("S2", "T1", zone="Metro Atlanta Core", county="Fulton"),
        _stop("S3", "T1", zone="East Metro", county="DeKalb"),
        _stop("S4", "T1"),
        _stop("S5", "T2", zone="East Metro", county="DeKalb"),
        _stop("S6", None, zone="East Metro", county="DeKalb"),
    ]
    directory = InMemoryTechnicianDirectory(
        [
            Technician("T1", "Jordan Lee", frozenset({"Metro Atlanta Core"})),
            Technician("T2", "Sam Rivera"),
            Technician("T3", "Idle Tech"),
        ]
    )
    return WorkloadCalculator(InMemoryJobStore(stops), directory, AssignmentLimits(max_stops_per_technician=40))


def test_workload_counts_and_breakdowns(calculator: WorkloadCalculator):
    workload = calculator.calculate_workload("T1")

    assert workload is not None
    assert workload.technician_name == "Jordan Lee"
    assert workload.total_stops == 4
    assert workload.stops_by_zone == {"Metro Atlanta Core": 2, "East Metro": 1}
    assert workload.stops_by_county == {"Fulton": 2, "DeKalb": 1}
    assert workload.capacity_utilization == pytest.approx(10.0)
    assert workload.estimated_hours == pytest.approx(2.0)


def test_breakdowns_never_exceed_total(calculator: WorkloadCalculator):
    workload = calculator.calculate_workload("T1")

    assert sum(workload.stops_by_zone.values()) <= workload.total_stops
    assert sum(workload.stops_by_county.values()) <= workload.total_stops


def test_breakdowns_include_stops_outside_declared_coverage(calculator: WorkloadCalculator):
    workload = calculator.calculate_workload("T1")

    assert "East Metro" in workload.stops_by_zone


def test_idle_technician_has_zero_workload(calculator: WorkloadCalculator):
    workload = calculator.calculate_workload("T3")

    assert workload.total_stops == 0
    assert workload.stops_by_zone == {}
    assert workload.capacity_utilization == 0.0
    assert workload.estimated_hours == 0.0


def test_unknown_technician_returns_none(calculator: WorkloadCalculator):
    assert calculator.calculate_workload("missing") is None


def test_utilization_can_exceed_one_hundred_percent():
    stops = [_stop(f"S{i}", "T1") for i in range(6)]
    directory = InMemoryTechnicianDirectory([Technician("T1", "Busy Tech")])
    calculator = WorkloadCalculator(
        InMemoryJobStore(stops),
        directory,
        AssignmentLimits(max_stops_per_technician=4, estimated_hours_per_stop=0.25),
    )

    workload = calculator.calculate_workload("T1")

    assert workload.capacity_utilization == pytest.approx(150.0)
    assert workload.estimated_hours == pytest.approx(1.5)
