"""Built-in Metro Atlanta zone table."""

from __future__ import annotations

from .resolver import ZoneMapping, ZoneMappingResolver

DEFAULT_ZONE_MAPPINGS: tuple[ZoneMapping, ...] = (
    ZoneMapping(
        zone="Metro Atlanta Core",
        counties=frozenset({"Fulton"}),
        cities=frozenset({
            "Atlanta",
            "Midtown",
            "Buckhead",
            "Downtown Atlanta",
            "Virginia-Highland",
            "Inman Park",
            "Old Fourth Ward",
            "Poncey-Highland",
        }),
    ),
    ZoneMapping(
        zone="North Metro",
        counties=frozenset({"Fulton", "Gwinnett", "Forsyth", "Cherokee"}),
        cities=frozenset({
            "Alpharetta",
            "Roswell",
            "Sandy Springs",
            "Johns Creek",
            "Milton",
            "Cumming",
            "Suwanee",
            "Duluth",
            "Lawrenceville",
            "Buford",
        }),
    ),
    ZoneMapping(
        zone="South Metro",
        counties=frozenset({"Fulton", "Clayton", "Fayette"}),
        cities=frozenset({
            "College Park",
            "East Point",
            "Hapeville",
            "Union City",
            "Forest Park",
            "Jonesboro",
            "Riverdale",
            "Fayetteville",
        }),
    ),
    ZoneMapping(
        zone="East Metro",
        counties=frozenset({"DeKalb", "Gwinnett", "Rockdale"}),
        cities=frozenset({
            "Decatur",
            "Stone Mountain",
            "Snellville",
            "Tucker",
            "Lithonia",
            "Conyers",
            "Chamblee",
            "Doraville",
            "Norcross",
            "Lilburn",
        }),
    ),
    ZoneMapping(
        zone="West Metro",
        counties=frozenset({"Cobb", "Douglas", "Paulding"}),
        cities=frozenset({
            "Marietta",
            "Smyrna",
            "Mableton",
            "Kennesaw",
            "Acworth",
            "Powder Springs",
            "Austell",
            "Douglasville",
            "Hiram",
        }),
    ),
    ZoneMapping(
        zone="Extended/Suburban",
        counties=frozenset({
            "Barrow",
            "Bartow",
            "Carroll",
            "Coweta",
            "Fayette",
            "Henry",
            "Newton",
            "Spalding",
            "Walton",
        }),
        cities=frozenset({
            "Winder",
            "Cartersville",
            "Carrollton",
            "Newnan",
            "McDonough",
            "Covington",
            "Griffin",
            "Monroe",
        }),
    ),
    # Manual approval only, so it never matches for auto-assignment.
    ZoneMapping(zone="Out-of-area (manual approval)", customizable=False),
)


def default_resolver() -> ZoneMappingResolver:
    return ZoneMappingResolver(DEFAULT_ZONE_MAPPINGS)
