"""
app.py — FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It wires the simulation services and registers routers.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from backend.controllers.simulation_controller import router as simulation_router
from backend.services.simulation_service import MedicalSimulationService
from backend.services.summary_service import MedicalSummaryService
from backend.utils.config import Settings, get_settings
from backend.utils.logger import configure_logging, get_logger


logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and wire the FastAPI application.

    Services are attached to app.state; controllers resolve them per request.
    """
    resolved_settings = settings or get_settings()
    configure_logging(settings=resolved_settings)

    simulation_service = MedicalSimulationService(settings=resolved_settings)
    summary_service = MedicalSummaryService()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Log readiness before accepting requests."""
        _startup(app)
        yield

    app = FastAPI(
        title=resolved_settings.app_name,
        version=resolved_settings.app_version,
        lifespan=lifespan,
    )

    app.include_router(simulation_router)

    app.state.settings = resolved_settings
    app.state.simulation_service = simulation_service
    app.state.summary_service = summary_service

    return app


def _startup(app: FastAPI) -> None:
    settings: Settings = app.state.settings
    logger.info(
        "Startup complete | trials_per_worker_count=%s | random_seed=%s",
        settings.simulation_trials_per_worker_count,
        settings.simulation_random_seed,
    )


# Module-level app object for uvicorn
app = create_app()
