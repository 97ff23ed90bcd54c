"""
CivicPulse — Main FastAPI Application

Civic persona classification and alerting engine.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from civicpulse.core.config import get_settings
from civicpulse.core.logging import configure_logging

settings = get_settings()
configure_logging(settings.log_level)
logger = structlog.get_logger()


# ── Lifespan ─────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown hooks."""
    logger.info("Starting CivicPulse", version=settings.app_version)

    from civicpulse.core.database import async_session_factory, init_db
    from civicpulse.services.persona.persona_service import persona_service
    from civicpulse.workers.scheduler import PersonaRefreshScheduler

    await init_db()

    scheduler = None
    if settings.persona_in_process_refresh:
        scheduler = PersonaRefreshScheduler(
            persona_service,
            async_session_factory,
            interval_seconds=settings.persona_refresh_interval_seconds,
        )
        scheduler.start()

    logger.info(
        "CivicPulse ready",
        batch_limit=settings.persona_batch_limit,
        refresh_interval=settings.persona_refresh_interval_seconds,
        in_process_refresh=settings.persona_in_process_refresh,
    )

    yield

    if scheduler:
        await scheduler.stop()
    logger.info("Shutting down CivicPulse")


# ── App ──────────────────────────────────────────────────────────────────

app = FastAPI(
    title="CivicPulse",
    description="Civic persona classification, regional clustering and behavioral alerts",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Prometheus metrics
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)

# ── Routes ───────────────────────────────────────────────────────────────

from civicpulse.api.routes import health, personas  # noqa: E402

app.include_router(health.router)
app.include_router(personas.router, prefix=settings.api_prefix)
