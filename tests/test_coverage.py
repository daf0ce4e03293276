import pytest

from fieldops.data.memory import InMemoryJobStore, InMemoryTechnicianDirectory
from fieldops.models.domain import Stop, Technician
from fieldops.services.coverage import CoverageMatcher
from fieldops.services.zones import default_resolver


def _stop(sid: str, county: str, city: str, owner: str | None = None, status: str | None = None) -> Stop:
    return Stop(
        stop_id=sid,
        latitude=33.75,
        longitude=-84.39,
        county=county,
        city=city,
        status=status,
        assigned_technician_id=owner,
    )


@pytest.fixture
def matcher() -> CoverageMatcher:
    stops = [
        _stop("S1", "Fulton", "Atlanta"),
        _stop("S2", "DeKalb", "Decatur"),
        _stop("S3", "Cobb", "Marietta"),
        _stop("S4", "", "Smyrna"),
        _stop("S5", "Cobb", "Marietta", owner="T2"),
        _stop("S6", "Fulton", "Atlanta", status="completed"),
        _stop("S7", "Fulton", "Atlanta", owner="T1"),
    ]
    technicians = [
        Technician("T1", "Alex", frozenset({"West Metro"}), frozenset({"Fulton"})),
        Technician("T2", "Blair", frozenset({"West Metro"})),
        Technician("T3", "Casey", frozenset(), frozenset({"Fulton"})),
        Technician("T4", "Devon", frozenset({"East Metro"}), frozenset({"DeKalb"})),
    ]
    return CoverageMatcher(InMemoryJobStore(stops), InMemoryTechnicianDirectory(technicians), default_resolver())


def _ids(stops):
    return [stop.stop_id for stop in stops]


def test_matching_by_county(matcher: CoverageMatcher):
    assert _ids(matcher.find_matching_stops([], ["Fulton"])) == ["S1"]


def test_matching_by_zone_uses_county_or_city(matcher: CoverageMatcher):
    # S3 matches West Metro by county; S4 has no county but Smyrna is a West Metro city.
    assert _ids(matcher.find_matching_stops(["West Metro"], [])) == ["S3", "S4"]


def test_matching_excludes_assigned_and_closed_stops(matcher: CoverageMatcher):
    matched = _ids(matcher.find_matching_stops(["West Metro", "Metro Atlanta Core"], ["Fulton"]))

    assert "S5" not in matched
    assert "S6" not in matched
    assert "S7" not in matched


def test_no_filters_match_nothing(matcher: CoverageMatcher):
    assert matcher.find_matching_stops([], []) == []


def test_unknown_zone_matches_nothing(matcher: CoverageMatcher):
    assert matcher.find_matching_stops(["Nowhere"], []) == []


def test_exclude_technician_returns_their_matching_stops(matcher: CoverageMatcher):
    assert _ids(matcher.find_matching_stops([], ["Fulton"], exclude_technician_id="T1")) == ["S7"]


def test_peers_share_zone_or_county_and_exclude_self(matcher: CoverageMatcher):
    peers = matcher.get_peer_technicians("T1", ["West Metro"], ["Fulton"])

    assert [peer.technician_id for peer in peers] == ["T2", "T3"]


def test_peers_with_no_overlap(matcher: CoverageMatcher):
    assert matcher.get_peer_technicians("T4", ["Extended/Suburban"], ["Henry"]) == []
