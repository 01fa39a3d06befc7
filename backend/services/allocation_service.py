"""Deterministic allocation of patients to rooms and of room load to workers."""

from __future__ import annotations

from backend.domain.models import Room, Worker, WorkerAllocation
from backend.utils.logger import get_logger


logger = get_logger(__name__)

INFEASIBLE_ALLOCATION_MESSAGE = "More workers than patients, no need for simulation"


class InfeasibleAllocationError(Exception):
    """Raised when a swept worker count cannot be usefully staffed."""

    def __init__(self, worker_count: int, message: str = INFEASIBLE_ALLOCATION_MESSAGE) -> None:
        super().__init__(f"{message} (workers={worker_count})")
        self.worker_count = worker_count
        self.message = message


def allocate_rooms(patient_count: int, room_count: int) -> list[Room]:
    """Spread patients round-robin so surplus patients land on the first rooms."""
    if room_count <= 0:
        raise ValueError("room_count must be > 0")

    counts = [0] * room_count
    for patient_index in range(patient_count):
        counts[patient_index % room_count] += 1
    return [Room(number_of_patients=count) for count in counts]


def _build_worker_targets(total_patients: int, worker_count: int) -> list[int]:
    base, remainder = divmod(total_patients, worker_count)
    return [base + 1 if index < remainder else base for index in range(worker_count)]


def _assign_one_room_per_worker(rooms: list[Room], workers: list[Worker]) -> None:
    worker_index = 0
    for room in rooms:
        if room.number_of_patients <= 0:
            continue
        workers[worker_index].number_of_patients += room.number_of_patients
        workers[worker_index].number_of_rooms += 1
        worker_index += 1


def _stripe_rooms_across_workers(
    rooms: list[Room],
    workers: list[Worker],
    targets: list[int],
) -> None:
    worker_index = 0
    for room in rooms:
        room_patients_left = room.number_of_patients
        while room_patients_left > 0:
            worker = workers[worker_index]
            remaining_capacity = targets[worker_index] - worker.number_of_patients

            # any worker touching the room counts a visit, even a partial one
            worker.number_of_rooms += 1

            if remaining_capacity > room_patients_left:
                worker.number_of_patients += room_patients_left
                room_patients_left = 0
            elif remaining_capacity == room_patients_left:
                worker.number_of_patients += remaining_capacity
                room_patients_left = 0
                worker_index += 1
            else:
                worker.number_of_patients += remaining_capacity
                room_patients_left -= remaining_capacity
                worker_index += 1


def allocate_workers(rooms: list[Room], worker_count: int) -> WorkerAllocation:
    """Partition the room load across ``worker_count`` workers in room order.

    Feasibility uses a truncating quotient of workers over patients, so a
    count is only rejected once it reaches twice the patient total. The
    partition is a pure function of its inputs and never mutates ``rooms``.
    """
    if worker_count <= 0:
        raise ValueError("worker_count must be > 0")

    total_patients = sum(room.number_of_patients for room in rooms)
    if total_patients <= 0:
        raise ValueError("room partition must hold at least one patient")

    worker_to_patient_ratio = float(worker_count // total_patients)
    if worker_to_patient_ratio > 1.0:
        logger.info(
            "Worker allocation infeasible | workers=%s | patients=%s",
            worker_count,
            total_patients,
        )
        return WorkerAllocation(
            workers=[],
            feasible=False,
            error=INFEASIBLE_ALLOCATION_MESSAGE,
        )

    workers = [Worker() for _ in range(worker_count)]
    active_rooms = sum(1 for room in rooms if room.number_of_patients > 0)

    if active_rooms == worker_count:
        _assign_one_room_per_worker(rooms, workers)
    else:
        targets = _build_worker_targets(total_patients, worker_count)
        _stripe_rooms_across_workers(rooms, workers, targets)

    return WorkerAllocation(workers=workers, feasible=True)
