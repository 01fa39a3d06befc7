"""Random service-time sampling for a single round of patient visits."""

from __future__ import annotations

import math
import random

from backend.domain.models import TrialOutput, Worker


def triangular_sample(minimum: float, maximum: float, rng: random.Random) -> float:
    """Draw from a triangular distribution whose mode is the midpoint.

    Inverse-CDF construction, see
    https://en.wikipedia.org/wiki/Triangular_distribution
    """
    r = rng.random()
    mode = (minimum + maximum) / 2

    if 0.0 <= r < 0.5:
        return minimum + math.sqrt(r * (maximum - minimum) * (mode - minimum))
    if 0.5 <= r < 1.0:
        return maximum - math.sqrt((1 - r) * (maximum - minimum) * (maximum - mode))
    return mode


def run_trial(
    workers: list[Worker],
    care_minimum: float,
    care_maximum: float,
    time_between_rooms: float,
    rng: random.Random,
) -> list[TrialOutput]:
    outputs: list[TrialOutput] = []
    for worker_id, worker in enumerate(workers):
        time_per_patient = tuple(
            triangular_sample(care_minimum, care_maximum, rng)
            for _ in range(worker.number_of_patients)
        )
        outputs.append(
            TrialOutput(
                worker_id=worker_id,
                number_of_patients=worker.number_of_patients,
                number_of_rooms=worker.number_of_rooms,
                time_per_patient=time_per_patient,
                time_per_round=sum(time_per_patient)
                + time_between_rooms * worker.number_of_rooms,
            )
        )
    return outputs
