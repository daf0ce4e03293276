"""Zone-membership resolution for stop locations."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Sequence


@dataclass(frozen=True, slots=True)
class ZoneMapping:
    zone: str
    counties: frozenset[str] = field(default_factory=frozenset)
    cities: frozenset[str] = field(default_factory=frozenset)
    customizable: bool = True


class ZoneMappingResolver:
    """Decide whether a county/city pair falls inside target zones or counties.

    A location matches when its county is one of the target counties, or when
    a target zone lists its county or (case-insensitively) its city. Zones
    without a mapping match nothing.
    """

    def __init__(self, mappings: Iterable[ZoneMapping]) -> None:
        self._mappings: dict[str, ZoneMapping] = {}
        self._cities: dict[str, frozenset[str]] = {}
        for mapping in mappings:
            self._mappings[mapping.zone] = mapping
            self._cities[mapping.zone] = frozenset(_normalize(city) for city in mapping.cities)

    @property
    def zones(self) -> list[str]:
        return list(self._mappings)

    def get_mapping(self, zone: str) -> Optional[ZoneMapping]:
        return self._mappings.get(zone)

    def matches(
        self,
        county: str,
        city: str,
        target_zones: Sequence[str],
        target_counties: Sequence[str],
    ) -> bool:
        county = (county or "").strip()
        city_key = _normalize(city or "")

        if county and county in target_counties:
            return True

        for zone in target_zones:
            mapping = self._mappings.get(zone)
            if mapping is None:
                continue
            if county and county in mapping.counties:
                return True
            if city_key and city_key in self._cities[zone]:
                return True
        return False

    @classmethod
    def from_json(cls, path: Path) -> "ZoneMappingResolver":
        """Load mappings from a JSON list of ``{zone, counties, cities, customizable}``."""
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        if not isinstance(payload, list):
            raise ValueError(f"Zone mappings file '{path}' must contain a JSON list.")
        mappings = []
        for entry in payload:
            if not isinstance(entry, dict) or not entry.get("zone"):
                raise ValueError(f"Zone mapping entry missing 'zone': {entry!r}")
            mappings.append(
                ZoneMapping(
                    zone=entry["zone"],
                    counties=frozenset(entry.get("counties") or ()),
                    cities=frozenset(entry.get("cities") or ()),
                    customizable=bool(entry.get("customizable", True)),
                )
            )
        return cls(mappings)


def _normalize(value: str) -> str:
    return value.strip().lower()
