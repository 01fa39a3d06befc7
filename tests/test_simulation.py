from __future__ import annotations

import json
import logging
import random
from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from app import create_app
from backend.domain.constraints import ScenarioValidationError
from backend.domain.models import ScenarioInput
from backend.services.allocation_service import InfeasibleAllocationError
from backend.services.simulation_service import MedicalSimulationService
from backend.utils.config import get_settings


def _build_test_settings(trials: int = 500):
    get_settings.cache_clear()
    base = get_settings()
    return replace(
        base,
        simulation_trials_per_worker_count=trials,
        simulation_random_seed=2024,
    )


def _scenario(**overrides) -> ScenarioInput:
    defaults = {
        "min_workers": 8,
        "max_workers": 10,
        "desk_workers": 2,
        "number_of_patients": 30,
        "number_of_rooms": 10,
        "supervisor_to_worker_ratio": 0.25,
        "time_between_rooms": 1.5,
        "patient_care_minimum_time": 3.0,
        "patient_care_maximum_time": 5.0,
    }
    defaults.update(overrides)
    return ScenarioInput(**defaults)


def _payload(**overrides) -> dict:
    payload = {
        "min_workers": 2,
        "max_workers": 4,
        "desk_workers": 1,
        "number_of_patients": 12,
        "number_of_rooms": 5,
        "supervisor_to_worker_ratio": 0.5,
        "time_between_rooms": 1.0,
        "patient_care_minimum_time": 2.0,
        "patient_care_maximum_time": 6.0,
    }
    payload.update(overrides)
    return payload


def test_sweep_produces_contiguous_blocks_per_worker_count():
    service = MedicalSimulationService(settings=_build_test_settings())
    scenario = _scenario()

    result = service.run_simulation(scenario, rng=random.Random(7))

    assert result is not None
    assert result.error == ""
    assert [plan.num_workers for plan in result.worker_counts] == [8, 9, 10]
    assert len(result.outputs) == 3 * 500
    assert len(result.outputs[0]) == 8
    assert len(result.outputs[499]) == 8
    assert len(result.outputs[500]) == 9
    assert len(result.outputs[1000]) == 10
    assert len(result.outputs[-1]) == 10
    assert sum(room.number_of_patients for room in result.rooms) == 30

    for trial in result.outputs:
        assert [output.worker_id for output in trial] == list(range(len(trial)))
        assert sum(output.number_of_patients for output in trial) == 30
        for output in trial:
            if output.number_of_patients >= 2:
                assert output.time_per_round > 2 * scenario.patient_care_minimum_time


def test_worker_count_plans_carry_staffing_totals():
    service = MedicalSimulationService(settings=_build_test_settings(trials=1))

    result = service.run_simulation(_scenario(), rng=random.Random(1))

    plan = result.worker_counts[1]
    assert plan.num_workers == 9
    assert plan.number_of_supervisors == 3  # ceil(9 * 0.25)
    assert plan.total_workers == 9 + 2 + 3


def test_same_seed_gives_identical_results():
    service = MedicalSimulationService(settings=_build_test_settings(trials=20))

    first = service.simulate_with_seed(_scenario(), seed=11)
    second = service.simulate_with_seed(_scenario(), seed=11)

    assert first == second


def test_invalid_scenario_returns_no_result_and_logs_violations(caplog):
    service = MedicalSimulationService(settings=_build_test_settings(trials=5))
    scenario = _scenario(min_workers=0, number_of_rooms=0)

    with caplog.at_level(logging.ERROR):
        assert service.simulate_medical_floor(scenario) is None

    assert "min_workers must be > 0" in caplog.text
    assert "number_of_rooms must be > 0" in caplog.text
    with pytest.raises(ScenarioValidationError):
        service.run_simulation(scenario)


def test_infeasible_step_fails_the_whole_request():
    service = MedicalSimulationService(settings=_build_test_settings(trials=2))
    scenario = _scenario(
        min_workers=199,
        max_workers=200,
        number_of_patients=100,
        number_of_rooms=100,
    )

    assert service.simulate_medical_floor(scenario, rng=random.Random(3)) is None
    with pytest.raises(InfeasibleAllocationError) as exc_info:
        service.run_simulation(scenario, rng=random.Random(3))
    assert exc_info.value.worker_count == 200


def test_simulate_endpoint_returns_plans_and_summary():
    app = create_app(settings=_build_test_settings(trials=25))
    client = TestClient(app)

    response = client.post("/simulate", json=_payload(seed=5))

    assert response.status_code == 200
    body = response.json()
    assert [plan["num_workers"] for plan in body["worker_counts"]] == [2, 3, 4]
    assert body["worker_counts"][0]["number_of_supervisors"] == 1
    assert body["worker_counts"][0]["total_workers"] == 4
    assert [room["number_of_patients"] for room in body["rooms"]] == [3, 3, 2, 2, 2]
    assert body["trials_per_worker_count"] == 25
    assert [len(block["workers"]) for block in body["summary"]] == [2, 3, 4]
    assert all(block["trials"] == 25 for block in body["summary"])
    assert "outputs" not in body


def test_simulate_endpoint_includes_trials_on_request():
    app = create_app(settings=_build_test_settings(trials=4))
    client = TestClient(app)

    response = client.post("/simulate", json=_payload(include_trials=True, seed=1))

    assert response.status_code == 200
    outputs = response.json()["outputs"]
    assert len(outputs) == 3 * 4
    assert len(outputs[0]) == 2
    assert len(outputs[-1]) == 4


def test_simulate_endpoint_reports_every_violation():
    app = create_app(settings=_build_test_settings(trials=4))
    client = TestClient(app)

    response = client.post(
        "/simulate",
        json=_payload(max_workers=2, supervisor_to_worker_ratio=1.0),
    )

    assert response.status_code == 400
    assert response.json()["detail"] == [
        "max_workers must be > min_workers",
        "supervisor_to_worker_ratio must be in (0, 1)",
    ]


def test_simulate_endpoint_rejects_infeasible_sweep():
    app = create_app(settings=_build_test_settings(trials=2))
    client = TestClient(app)

    response = client.post(
        "/simulate",
        json=_payload(
            min_workers=199,
            max_workers=200,
            number_of_patients=100,
            number_of_rooms=100,
        ),
    )

    assert response.status_code == 409
    assert "More workers than patients" in response.json()["detail"]


def test_nan_timing_returns_no_result():
    service = MedicalSimulationService(settings=_build_test_settings(trials=2))

    assert service.simulate_medical_floor(_scenario(time_between_rooms=float("nan"))) is None


def test_simulate_endpoint_rejects_nan_timing():
    app = create_app(settings=_build_test_settings(trials=2))
    client = TestClient(app)
    body = json.dumps(_payload(time_between_rooms=float("nan")))

    response = client.post(
        "/simulate",
        content=body,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == ["time_between_rooms must be >= 0"]


def test_create_app_applies_configured_log_level():
    root_logger = logging.getLogger()
    previous_level = root_logger.level
    try:
        create_app(settings=replace(_build_test_settings(trials=1), log_level="warning"))
        assert root_logger.level == logging.WARNING
    finally:
        root_logger.setLevel(previous_level)
