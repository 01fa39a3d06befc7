"""Domain-level validation rules for simulation scenarios."""

from __future__ import annotations

from backend.domain.models import ScenarioInput


class ScenarioValidationError(ValueError):
    """Raised when a scenario violates one or more input rules."""

    def __init__(self, violations: list[str]) -> None:
        super().__init__(", ".join(violations))
        self.violations = list(violations)


def validate_scenario_input(scenario: ScenarioInput) -> list[str]:
    """Return every violated rule; an empty list means the scenario is valid.

    Each rule is written as the condition that must hold, so NaN fails it.
    """
    violations: list[str] = []
    if not scenario.min_workers > 0:
        violations.append("min_workers must be > 0")
    if not scenario.max_workers > scenario.min_workers:
        violations.append("max_workers must be > min_workers")
    if not scenario.number_of_patients > 0:
        violations.append("number_of_patients must be > 0")
    if not scenario.number_of_rooms > 0:
        violations.append("number_of_rooms must be > 0")
    if not 0.0 < scenario.supervisor_to_worker_ratio < 1.0:
        violations.append("supervisor_to_worker_ratio must be in (0, 1)")
    if not scenario.time_between_rooms >= 0.0:
        violations.append("time_between_rooms must be >= 0")
    if not scenario.patient_care_minimum_time > 0.0:
        violations.append("patient_care_minimum_time must be > 0")
    if not scenario.patient_care_maximum_time >= scenario.patient_care_minimum_time:
        violations.append(
            "patient_care_maximum_time must be >= patient_care_minimum_time"
        )
    if not scenario.patient_care_maximum_time > 0.0:
        violations.append("patient_care_maximum_time must be > 0")
    return violations


def ensure_valid_scenario(scenario: ScenarioInput) -> None:
    violations = validate_scenario_input(scenario)
    if violations:
        raise ScenarioValidationError(violations)
