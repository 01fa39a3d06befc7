"""Monte Carlo staffing simulation over a sweep of worker counts.

The service holds no per-request state; each run owns its result and random
source.
"""

from __future__ import annotations

import random
from typing import Optional
from uuid import uuid4

from backend.domain.constraints import (
    ScenarioValidationError,
    ensure_valid_scenario,
)
from backend.domain.models import (
    ScenarioInput,
    SimulationResult,
    TrialOutput,
    WorkerCountPlan,
)
from backend.services.allocation_service import (
    InfeasibleAllocationError,
    allocate_rooms,
    allocate_workers,
)
from backend.services.sampling import run_trial
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class MedicalSimulationService:
    """Sweeps candidate worker counts and samples round times per worker."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    @property
    def trials_per_worker_count(self) -> int:
        return self._settings.simulation_trials_per_worker_count

    def _build_random_source(self, seed: Optional[int] = None) -> random.Random:
        resolved_seed = seed if seed is not None else self._settings.simulation_random_seed
        return random.Random(resolved_seed)

    def run_simulation(
        self,
        scenario: ScenarioInput,
        rng: Optional[random.Random] = None,
    ) -> SimulationResult:
        """Run the full sweep; raise on invalid input or an infeasible step."""
        run_id = str(uuid4())
        logger.info(
            (
                "Medical simulation started | run_id=%s | workers=%s-%s | "
                "patients=%s | rooms=%s | trials=%s"
            ),
            run_id,
            scenario.min_workers,
            scenario.max_workers,
            scenario.number_of_patients,
            scenario.number_of_rooms,
            self.trials_per_worker_count,
        )

        try:
            ensure_valid_scenario(scenario)
        except ScenarioValidationError as exc:
            logger.error(
                "Medical simulation rejected | run_id=%s | violations=%s",
                run_id,
                ",".join(exc.violations),
            )
            raise

        random_source = rng if rng is not None else self._build_random_source()
        rooms = allocate_rooms(scenario.number_of_patients, scenario.number_of_rooms)

        worker_counts: list[WorkerCountPlan] = []
        outputs: list[list[TrialOutput]] = []
        for worker_count in range(scenario.min_workers, scenario.max_workers + 1):
            worker_counts.append(
                WorkerCountPlan(
                    num_workers=worker_count,
                    supervisor_ratio=scenario.supervisor_to_worker_ratio,
                    desk_workers=scenario.desk_workers,
                )
            )

            # partition is trial-invariant
            allocation = allocate_workers(rooms, worker_count)
            if not allocation.feasible:
                logger.warning(
                    "Medical simulation aborted | run_id=%s | workers=%s | reason=%s",
                    run_id,
                    worker_count,
                    allocation.error,
                )
                raise InfeasibleAllocationError(worker_count)

            for _ in range(self.trials_per_worker_count):
                outputs.append(
                    run_trial(
                        allocation.workers,
                        scenario.patient_care_minimum_time,
                        scenario.patient_care_maximum_time,
                        scenario.time_between_rooms,
                        random_source,
                    )
                )

        logger.info(
            "Medical simulation completed | run_id=%s | worker_counts=%s | trial_outputs=%s",
            run_id,
            len(worker_counts),
            len(outputs),
        )
        return SimulationResult(
            worker_counts=worker_counts,
            outputs=outputs,
            rooms=rooms,
            trials_per_worker_count=self.trials_per_worker_count,
        )

    def simulate_medical_floor(
        self,
        scenario: ScenarioInput,
        rng: Optional[random.Random] = None,
    ) -> Optional[SimulationResult]:
        """Return the sweep result, or ``None`` when the request cannot run.

        Failures are already logged by ``run_simulation``.
        """
        try:
            return self.run_simulation(scenario, rng=rng)
        except (ScenarioValidationError, InfeasibleAllocationError):
            return None

    def simulate_with_seed(self, scenario: ScenarioInput, seed: Optional[int]) -> SimulationResult:
        return self.run_simulation(scenario, rng=self._build_random_source(seed))
