"""Technician workload, auto-assignment and reassignment endpoints."""

from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, status

from ...schemas.assignment import (
    AssignStopsRequest,
    AssignStopsResponse,
    AutoAssignRequest,
    AutoAssignResponse,
    AvailableTechniciansResponse,
    BalanceResponse,
    ReassignRequest,
    ReassignResponse,
    WorkloadModel,
)
from ...services.outputs.formatter import persist_auto_assignment
from ..dependencies import get_assignment_engine
from ..errors import to_http_exception

router = APIRouter(prefix="/technicians", tags=["technicians"])


@router.get("/{technician_id}/workload", response_model=WorkloadModel, status_code=status.HTTP_200_OK)
def get_workload(technician_id: str) -> WorkloadModel:
    try:
        workload = get_assignment_engine().calculate_workload(technician_id)
    except Exception as exc:
        raise to_http_exception(exc) from exc
    if workload is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Technician '{technician_id}' not found",
        )
    return WorkloadModel.model_validate(asdict(workload))


@router.get("/{technician_id}/balance", response_model=BalanceResponse, status_code=status.HTTP_200_OK)
def get_balance(technician_id: str) -> BalanceResponse:
    """Fair-share target for the technician against peers covering the same area."""
    try:
        target = get_assignment_engine().balance_for_technician(technician_id)
    except Exception as exc:
        raise to_http_exception(exc) from exc
    return BalanceResponse(technician_id=technician_id, **asdict(target))


@router.post("/{technician_id}/auto-assign", response_model=AutoAssignResponse, status_code=status.HTTP_200_OK)
def auto_assign(technician_id: str, payload: AutoAssignRequest | None = None) -> AutoAssignResponse:
    """Assign nearby unassigned stops in geographic clusters up to the balance target."""
    payload = payload or AutoAssignRequest()
    try:
        result = get_assignment_engine().auto_assign(
            technician_id,
            zones=payload.zones,
            counties=payload.counties,
            max_assignments=payload.max_assignments,
        )
    except Exception as exc:
        raise to_http_exception(exc) from exc

    # Stops are already written; a failed save is reported, not raised.
    run_directory = None
    persist_error = None
    if payload.persist:
        try:
            run_directory = str(persist_auto_assignment(result))
        except Exception as exc:
            logging.exception(f"Failed to persist auto-assign run for {technician_id}")
            persist_error = str(exc) or exc.__class__.__name__

    message = f"Auto-assigned {result.assigned} stop(s) to technician {technician_id}"
    if result.skipped:
        message += f", skipped {result.skipped}"
    if result.errors:
        logging.warning(f"Auto-assign for {technician_id} finished with {len(result.errors)} error(s)")
    return AutoAssignResponse(
        message=message,
        run_directory=run_directory,
        persist_error=persist_error,
        **result.to_dict(),
    )


@router.post("/{technician_id}/reassign", response_model=ReassignResponse, status_code=status.HTTP_200_OK)
def reassign_stops(technician_id: str, payload: ReassignRequest) -> ReassignResponse:
    """Move stops from this technician to another one."""
    try:
        result = get_assignment_engine().reassign(
            technician_id,
            payload.target_technician_id,
            payload.stop_ids,
        )
    except Exception as exc:
        raise to_http_exception(exc) from exc

    return ReassignResponse(
        message=f"Reassigned {len(result.reassigned)} stop(s) to technician {result.destination_technician_id}",
        **asdict(result),
    )


@router.get(
    "/{technician_id}/reassign",
    response_model=AvailableTechniciansResponse,
    status_code=status.HTTP_200_OK,
)
def list_reassignment_targets(technician_id: str) -> AvailableTechniciansResponse:
    """Peers sharing coverage with this technician, most spare capacity first."""
    try:
        available = get_assignment_engine().list_available_technicians(technician_id)
    except Exception as exc:
        raise to_http_exception(exc) from exc
    return AvailableTechniciansResponse(
        technician_id=technician_id,
        available_technicians=[asdict(item) for item in available],
    )


@router.post("/{technician_id}/assign-stops", response_model=AssignStopsResponse, status_code=status.HTTP_200_OK)
def assign_stops(technician_id: str, payload: AssignStopsRequest) -> AssignStopsResponse:
    try:
        result = get_assignment_engine().assign_stops(technician_id, payload.stop_ids)
    except Exception as exc:
        raise to_http_exception(exc) from exc

    return AssignStopsResponse(
        message=f"Assigned {len(result.assigned)} stop(s) to technician {technician_id}",
        **asdict(result),
    )
