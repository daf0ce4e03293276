import json
from pathlib import Path

import pytest

from fieldops.services.zones import DEFAULT_ZONE_MAPPINGS, ZoneMapping, ZoneMappingResolver, default_resolver


@pytest.fixture
def resolver() -> ZoneMappingResolver:
    return default_resolver()


def test_default_table_lists_all_zones(resolver: ZoneMappingResolver):
    assert resolver.zones == [mapping.zone for mapping in DEFAULT_ZONE_MAPPINGS]
    assert "Out-of-area (manual approval)" in resolver.zones
    assert resolver.get_mapping("Out-of-area (manual approval)").customizable is False


def test_county_filter_matches_directly(resolver: ZoneMappingResolver):
    assert resolver.matches("Henry", "", [], ["Henry"])
    assert not resolver.matches("Henry", "", [], ["Fulton"])


def test_zone_matches_by_county(resolver: ZoneMappingResolver):
    assert resolver.matches("Cobb", "", ["West Metro"], [])
    assert not resolver.matches("Cobb", "", ["East Metro"], [])


def test_zone_matches_city_case_insensitively(resolver: ZoneMappingResolver):
    assert resolver.matches("", "  sandy springs ", ["North Metro"], [])
    assert resolver.matches("", "DECATUR", ["East Metro"], [])


def test_empty_location_never_matches(resolver: ZoneMappingResolver):
    assert not resolver.matches("", "", ["Metro Atlanta Core"], ["Fulton"])


def test_manual_approval_zone_matches_nothing(resolver: ZoneMappingResolver):
    assert not resolver.matches("Fulton", "Atlanta", ["Out-of-area (manual approval)"], [])


def test_unknown_zone_matches_nothing(resolver: ZoneMappingResolver):
    assert not resolver.matches("Fulton", "Atlanta", ["Mars"], [])


def test_custom_mappings_from_json(tmp_path: Path):
    path = tmp_path / "zones.json"
    path.write_text(
        json.dumps(
            [
                {"zone": "Lakeside", "counties": ["Hall"], "cities": ["Gainesville"]},
                {"zone": "Locked", "customizable": False},
            ]
        ),
        encoding="utf-8",
    )

    resolver = ZoneMappingResolver.from_json(path)

    assert resolver.zones == ["Lakeside", "Locked"]
    assert resolver.matches("Hall", "", ["Lakeside"], [])
    assert resolver.matches("", "gainesville", ["Lakeside"], [])
    assert resolver.get_mapping("Locked") == ZoneMapping(zone="Locked", customizable=False)


def test_malformed_json_mappings_are_rejected(tmp_path: Path):
    path = tmp_path / "zones.json"
    path.write_text(json.dumps({"zone": "Lakeside"}), encoding="utf-8")
    with pytest.raises(ValueError):
        ZoneMappingResolver.from_json(path)

    path.write_text(json.dumps([{"counties": ["Hall"]}]), encoding="utf-8")
    with pytest.raises(ValueError):
        ZoneMappingResolver.from_json(path)
