"""HTTP controller layer for medical floor staffing simulation."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from backend.controllers.dependencies import get_simulation_service, get_summary_service
from backend.domain.constraints import ScenarioValidationError
from backend.domain.models import ScenarioInput
from backend.services.allocation_service import InfeasibleAllocationError
from backend.services.simulation_service import MedicalSimulationService
from backend.services.summary_service import MedicalSummaryService
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["simulation"])


class SimulateRequest(BaseModel):
    """Input DTO; range rules live in the domain validator so all are reported."""

    min_workers: int
    max_workers: int
    desk_workers: int = 0
    number_of_patients: int
    number_of_rooms: int
    supervisor_to_worker_ratio: float
    time_between_rooms: float = 0.0
    patient_care_minimum_time: float
    patient_care_maximum_time: float
    include_trials: bool = False
    seed: Optional[int] = Field(default=None, ge=0)

    def to_scenario(self) -> ScenarioInput:
        return ScenarioInput(
            min_workers=self.min_workers,
            max_workers=self.max_workers,
            desk_workers=self.desk_workers,
            number_of_patients=self.number_of_patients,
            number_of_rooms=self.number_of_rooms,
            supervisor_to_worker_ratio=self.supervisor_to_worker_ratio,
            time_between_rooms=self.time_between_rooms,
            patient_care_minimum_time=self.patient_care_minimum_time,
            patient_care_maximum_time=self.patient_care_maximum_time,
        )


class WorkerCountPlanResponse(BaseModel):
    num_workers: int = Field(gt=0)
    supervisor_ratio: float = Field(gt=0.0, lt=1.0)
    desk_workers: int
    number_of_supervisors: int = Field(ge=0)
    total_workers: int


class RoomResponse(BaseModel):
    number_of_patients: int = Field(ge=0)


class WorkerRoundSummaryResponse(BaseModel):
    worker_id: int = Field(ge=0)
    number_of_patients: int = Field(ge=0)
    number_of_rooms: int = Field(ge=0)
    min_round_time: float = Field(ge=0.0)
    max_round_time: float = Field(ge=0.0)
    mean_round_time: float = Field(ge=0.0)


class WorkerCountSummaryResponse(BaseModel):
    plan: WorkerCountPlanResponse
    trials: int = Field(ge=0)
    min_round_time: float = Field(ge=0.0)
    max_round_time: float = Field(ge=0.0)
    mean_round_time: float = Field(ge=0.0)
    workers: list[WorkerRoundSummaryResponse]


class TrialOutputResponse(BaseModel):
    worker_id: int = Field(ge=0)
    number_of_patients: int = Field(ge=0)
    number_of_rooms: int = Field(ge=0)
    time_per_patient: list[float]
    time_per_round: float = Field(ge=0.0)


class SimulateResponse(BaseModel):
    worker_counts: list[WorkerCountPlanResponse]
    rooms: list[RoomResponse]
    trials_per_worker_count: int = Field(gt=0)
    summary: list[WorkerCountSummaryResponse]
    outputs: Optional[list[list[TrialOutputResponse]]] = None


@router.post(
    "/simulate",
    response_model=SimulateResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def simulate(
    payload: SimulateRequest,
    service: MedicalSimulationService = Depends(get_simulation_service),
    summary_service: MedicalSummaryService = Depends(get_summary_service),
) -> SimulateResponse:
    """Sweep the worker range and summarize round times per worker count."""
    try:
        result = service.simulate_with_seed(payload.to_scenario(), payload.seed)
        summaries = summary_service.summarize(result)
        return SimulateResponse(
            worker_counts=[
                WorkerCountPlanResponse(**plan.to_dict())
                for plan in result.worker_counts
            ],
            rooms=[
                RoomResponse(number_of_patients=room.number_of_patients)
                for room in result.rooms
            ],
            trials_per_worker_count=result.trials_per_worker_count,
            summary=[
                WorkerCountSummaryResponse(**summary.to_dict())
                for summary in summaries
            ],
            outputs=(
                [
                    [TrialOutputResponse(**output.to_dict()) for output in trial]
                    for trial in result.outputs
                ]
                if payload.include_trials
                else None
            ),
        )
    except ScenarioValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.violations,
        ) from exc
    except InfeasibleAllocationError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected simulation failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to run simulation",
        ) from exc
