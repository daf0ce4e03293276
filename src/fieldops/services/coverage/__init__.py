"""Coverage matching."""

from .matcher import CoverageMatcher

__all__ = ["CoverageMatcher"]
