"""Round-time statistics layered on top of a finished simulation result."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, TypeVar

import numpy as np
import pandas as pd

from backend.domain.models import SimulationResult, TrialOutput, WorkerCountPlan


T = TypeVar("T")


def split_outputs(outputs: Sequence[T], block_size: int = 500) -> list[list[T]]:
    """Cut a flat sequence into consecutive blocks; the last may be shorter."""
    if block_size <= 0:
        raise ValueError("block_size must be > 0")
    return [
        list(outputs[start:start + block_size])
        for start in range(0, len(outputs), block_size)
    ]


@dataclass(frozen=True)
class WorkerRoundSummary:
    worker_id: int
    number_of_patients: int
    number_of_rooms: int
    min_round_time: float
    max_round_time: float
    mean_round_time: float

    def to_dict(self) -> dict[str, int | float]:
        return {
            "worker_id": self.worker_id,
            "number_of_patients": self.number_of_patients,
            "number_of_rooms": self.number_of_rooms,
            "min_round_time": self.min_round_time,
            "max_round_time": self.max_round_time,
            "mean_round_time": self.mean_round_time,
        }


@dataclass(frozen=True)
class WorkerCountSummary:
    plan: WorkerCountPlan
    trials: int
    min_round_time: float
    max_round_time: float
    mean_round_time: float
    workers: list[WorkerRoundSummary]

    def to_dict(self) -> dict[str, object]:
        return {
            "plan": self.plan.to_dict(),
            "trials": self.trials,
            "min_round_time": self.min_round_time,
            "max_round_time": self.max_round_time,
            "mean_round_time": self.mean_round_time,
            "workers": [worker.to_dict() for worker in self.workers],
        }


class MedicalSummaryService:
    """Aggregates trial outputs per worker count and per worker identity."""

    def _build_block_frame(self, block: list[list[TrialOutput]]) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {
                    "trial": trial_index,
                    "worker_id": output.worker_id,
                    "number_of_patients": output.number_of_patients,
                    "number_of_rooms": output.number_of_rooms,
                    "time_per_round": output.time_per_round,
                }
                for trial_index, trial in enumerate(block)
                for output in trial
            ],
            columns=[
                "trial",
                "worker_id",
                "number_of_patients",
                "number_of_rooms",
                "time_per_round",
            ],
        )

    def _summarize_block(
        self,
        plan: WorkerCountPlan,
        block: list[list[TrialOutput]],
    ) -> WorkerCountSummary:
        frame = self._build_block_frame(block)
        if frame.empty:
            return WorkerCountSummary(
                plan=plan,
                trials=len(block),
                min_round_time=0.0,
                max_round_time=0.0,
                mean_round_time=0.0,
                workers=[],
            )

        round_times = frame["time_per_round"].to_numpy(dtype=float)
        per_worker = (
            frame.groupby("worker_id", sort=True)
            .agg(
                number_of_patients=("number_of_patients", "first"),
                number_of_rooms=("number_of_rooms", "first"),
                min_round_time=("time_per_round", "min"),
                max_round_time=("time_per_round", "max"),
                mean_round_time=("time_per_round", "mean"),
            )
            .reset_index()
        )

        workers = [
            WorkerRoundSummary(
                worker_id=int(row.worker_id),
                number_of_patients=int(row.number_of_patients),
                number_of_rooms=int(row.number_of_rooms),
                min_round_time=float(row.min_round_time),
                max_round_time=float(row.max_round_time),
                mean_round_time=float(row.mean_round_time),
            )
            for row in per_worker.itertuples(index=False)
        ]
        return WorkerCountSummary(
            plan=plan,
            trials=len(block),
            min_round_time=float(np.min(round_times)),
            max_round_time=float(np.max(round_times)),
            mean_round_time=float(np.mean(round_times)),
            workers=workers,
        )

    def summarize(self, result: SimulationResult) -> list[WorkerCountSummary]:
        blocks = split_outputs(result.outputs, result.trials_per_worker_count)
        return [
            self._summarize_block(plan, block)
            for plan, block in zip(result.worker_counts, blocks)
        ]
