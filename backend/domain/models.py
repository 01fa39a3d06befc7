"""Domain models for medical floor staffing simulation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ScenarioInput:
    min_workers: int
    max_workers: int
    desk_workers: int
    number_of_patients: int
    number_of_rooms: int
    supervisor_to_worker_ratio: float
    time_between_rooms: float
    patient_care_minimum_time: float
    patient_care_maximum_time: float


@dataclass(frozen=True)
class Room:
    number_of_patients: int = 0


@dataclass
class Worker:
    """Mutable only while the allocator accumulates its load."""

    number_of_patients: int = 0
    number_of_rooms: int = 0


@dataclass(frozen=True)
class WorkerAllocation:
    workers: list[Worker]
    feasible: bool
    error: str | None = None


@dataclass(frozen=True)
class WorkerCountPlan:
    num_workers: int
    supervisor_ratio: float
    desk_workers: int

    @property
    def number_of_supervisors(self) -> int:
        return int(math.ceil(self.num_workers * self.supervisor_ratio))

    @property
    def total_workers(self) -> int:
        return self.num_workers + self.desk_workers + self.number_of_supervisors

    def to_dict(self) -> dict[str, int | float]:
        return {
            "num_workers": self.num_workers,
            "supervisor_ratio": self.supervisor_ratio,
            "desk_workers": self.desk_workers,
            "number_of_supervisors": self.number_of_supervisors,
            "total_workers": self.total_workers,
        }


@dataclass(frozen=True)
class TrialOutput:
    worker_id: int
    number_of_patients: int
    number_of_rooms: int
    time_per_patient: tuple[float, ...]
    time_per_round: float

    def to_dict(self) -> dict[str, int | float | list[float]]:
        return {
            "worker_id": self.worker_id,
            "number_of_patients": self.number_of_patients,
            "number_of_rooms": self.number_of_rooms,
            "time_per_patient": list(self.time_per_patient),
            "time_per_round": self.time_per_round,
        }


@dataclass(frozen=True)
class SimulationResult:
    worker_counts: list[WorkerCountPlan]
    outputs: list[list[TrialOutput]]
    rooms: list[Room]
    trials_per_worker_count: int
    error: str = field(default="")
