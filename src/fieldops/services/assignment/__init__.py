"""Auto-assignment and reassignment services."""

from .auto import AutoAssigner
from .engine import AssignmentEngine
from .reassignment import ReassignmentService
from .results import (
    AssignmentDetail,
    AutoAssignmentResult,
    AvailableTechnician,
    ItemError,
    ManualAssignmentResult,
    ReassignmentResult,
)

__all__ = [
    "AssignmentEngine",
    "AutoAssigner",
    "ReassignmentService",
    "AssignmentDetail",
    "AutoAssignmentResult",
    "AvailableTechnician",
    "ItemError",
    "ManualAssignmentResult",
    "ReassignmentResult",
]
