"""Utilities to serialize assignment runs into JSON/CSV artifacts."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

from ...persistence.filesystem import FileStorage
from ..assignment.results import AutoAssignmentResult

logger = logging.getLogger(__name__)

DETAIL_FIELDS = ["stop_id", "action", "reason", "cluster_id"]


def auto_assignment_to_json(result: AutoAssignmentResult) -> dict:
    return result.to_dict()


def auto_assignment_to_csv(result: AutoAssignmentResult) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=DETAIL_FIELDS, lineterminator="\n")
    writer.writeheader()
    for detail in result.details:
        writer.writerow(
            {
                "stop_id": detail.stop_id,
                "action": detail.action,
                "reason": detail.reason or "",
                "cluster_id": detail.cluster_id or "",
            }
        )
    return buffer.getvalue()


def persist_auto_assignment(result: AutoAssignmentResult, storage: FileStorage | None = None) -> Path:
    storage = storage or FileStorage()
    run_dir = storage.save_run(
        f"auto_assign_{result.technician_id}",
        {
            "summary.json": auto_assignment_to_json(result),
            "details.csv": auto_assignment_to_csv(result),
        },
    )
    logger.info(f"Saved auto-assignment run for {result.technician_id} to {run_dir}")
    return run_dir
