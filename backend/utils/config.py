"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    log_level: str
    server_host: str
    server_port: int
    simulation_trials_per_worker_count: int
    simulation_random_seed: Optional[int]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process; call ``cache_clear`` to reload."""
    trials = _env_int("SIMULATION_TRIALS_PER_WORKER_COUNT", 500)
    if trials <= 0:
        raise ValueError("SIMULATION_TRIALS_PER_WORKER_COUNT must be > 0")

    return Settings(
        app_name=os.getenv("APP_NAME", "Medical Floor Staffing Simulator"),
        app_version=os.getenv("APP_VERSION", "1.0.0"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        server_host=os.getenv("SERVER_HOST", "127.0.0.1"),
        server_port=_env_int("SERVER_PORT", 8000),
        simulation_trials_per_worker_count=trials,
        simulation_random_seed=_env_optional_int("SIMULATION_RANDOM_SEED"),
    )
