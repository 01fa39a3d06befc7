"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from backend.services.simulation_service import MedicalSimulationService
from backend.services.summary_service import MedicalSummaryService


def get_simulation_service(request: Request) -> MedicalSimulationService:
    service = getattr(request.app.state, "simulation_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Simulation service is not initialized",
        )
    return service


def get_summary_service(request: Request) -> MedicalSummaryService:
    service = getattr(request.app.state, "summary_service", None)
    if service is None:
        service = MedicalSummaryService()
        request.app.state.summary_service = service
    return service
