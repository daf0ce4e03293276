"""Workload balancing."""

from .service import BalanceTarget, WorkloadBalancer, compute_balance_target

__all__ = ["BalanceTarget", "WorkloadBalancer", "compute_balance_target"]
