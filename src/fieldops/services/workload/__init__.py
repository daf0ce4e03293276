"""Workload calculation."""

from .calculator import WorkloadCalculator

__all__ = ["WorkloadCalculator"]
