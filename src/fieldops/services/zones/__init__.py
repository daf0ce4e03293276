"""Zone-membership resolution."""

from .defaults import DEFAULT_ZONE_MAPPINGS, default_resolver
from .resolver import ZoneMapping, ZoneMappingResolver

__all__ = ["ZoneMapping", "ZoneMappingResolver", "DEFAULT_ZONE_MAPPINGS", "default_resolver"]
