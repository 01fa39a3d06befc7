#!/usr/bin/env python3
"""Validate local staffing simulator environment readiness."""

from __future__ import annotations

import importlib
import random
import sys
from dataclasses import replace
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.domain.models import ScenarioInput
from backend.services.allocation_service import allocate_rooms, allocate_workers
from backend.services.simulation_service import MedicalSimulationService
from backend.services.summary_service import MedicalSummaryService
from backend.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True

    # CHECK 1 — Python version >= 3.10
    if sys.version_info >= (3, 10):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.10",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2 — Required packages importable
    package_specs = [
        ("fastapi", "fastapi"),
        ("uvicorn", "uvicorn"),
        ("pydantic", "pydantic"),
        ("numpy", "numpy"),
        ("pandas", "pandas"),
        ("httpx", "httpx"),
        ("pytest", "pytest"),
    ]
    import_errors: list[str] = []
    for module_name, dist_name in package_specs:
        try:
            importlib.import_module(module_name)
            version(dist_name)
        except (ImportError, PackageNotFoundError) as exc:
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 3 — Small end-to-end sweep (3 worker counts x 20 trials)
    settings = replace(get_settings(), simulation_trials_per_worker_count=20)
    scenario = ScenarioInput(
        min_workers=4,
        max_workers=6,
        desk_workers=1,
        number_of_patients=30,
        number_of_rooms=10,
        supervisor_to_worker_ratio=0.25,
        time_between_rooms=2.0,
        patient_care_minimum_time=3.0,
        patient_care_maximum_time=5.0,
    )
    try:
        result = MedicalSimulationService(settings=settings).run_simulation(
            scenario,
            rng=random.Random(7),
        )
        if len(result.outputs) != 60:
            raise RuntimeError(f"expected 60 trial outputs, got {len(result.outputs)}")
        summaries = MedicalSummaryService().summarize(result)
        ok, line = _print_result(
            "Simulation sweep",
            True,
            ": " + ", ".join(
                f"{summary.plan.num_workers} workers mean={summary.mean_round_time:.2f}"
                for summary in summaries
            ),
        )
    except Exception as exc:
        ok, line = _print_result("Simulation sweep", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 4 — Infeasibility boundary (200 workers for 100 patients)
    allocation = allocate_workers(allocate_rooms(100, 100), 200)
    ok, line = _print_result(
        "Infeasible allocation detection",
        not allocation.feasible,
        "" if not allocation.feasible else "200 workers for 100 patients was accepted",
    )
    results.append(line)
    all_passed = all_passed and ok

    print(SEPARATOR_LINE)
    print(" Staffing Simulator Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
