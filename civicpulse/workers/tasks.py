"""
CivicPulse Celery Worker Tasks

Periodic persona refresh: every tick re-reads the latest event window and
recomputes profiles, clusters and alerts from scratch.
"""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import structlog
from celery import Celery

from civicpulse.core.config import get_settings
from civicpulse.core.logging import configure_logging

settings = get_settings()
configure_logging(settings.log_level)
logger = structlog.get_logger(__name__)

# ── Celery App ───────────────────────────────────────────────────────────

celery_app = Celery(
    "civicpulse",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    task_soft_time_limit=300,
    task_time_limit=600,
    task_default_queue="default",
    task_routes={
        "civicpulse.workers.tasks.refresh_personas_task": {"queue": "personas"},
    },
)

# ── Periodic Tasks ───────────────────────────────────────────────────────

celery_app.conf.beat_schedule = {
    "refresh-personas": {
        "task": "civicpulse.workers.tasks.refresh_personas_task",
        "schedule": settings.persona_refresh_interval_seconds,
    },
    "health-check-every-minute": {
        "task": "civicpulse.workers.tasks.health_check_task",
        "schedule": 60.0,
    },
}


# ── Helpers ──────────────────────────────────────────────────────────────

def run_async(coro):
    """Run an async coroutine from sync Celery task."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


async def _refresh_personas() -> dict:
    from civicpulse.core.database import async_session_factory, get_engine
    from civicpulse.services.persona.persona_service import persona_service

    try:
        async with async_session_factory() as db:
            snapshot = await persona_service.refresh(db)
    finally:
        # pooled connections are bound to this task's event loop
        await get_engine().dispose()
    return snapshot.to_dict()


# ── Tasks ────────────────────────────────────────────────────────────────

@celery_app.task(
    name="civicpulse.workers.tasks.refresh_personas_task",
    bind=True,
    max_retries=3,
    default_retry_delay=10,
)
def refresh_personas_task(self):
    """
    Recompute the persona snapshot from the latest sentiment window.

    The serialized snapshot is the task result, so consumers of the result
    backend can read it without sharing this process.
    """
    try:
        snapshot = run_async(_refresh_personas())
        logger.info(
            "Persona refresh complete",
            profiles=snapshot["total_profiled_authors"],
            clusters=len(snapshot["clusters"]),
            alerts=len(snapshot["alerts"]),
            events=snapshot["total_events"],
        )
        return snapshot
    except Exception as exc:
        logger.error(f"Persona refresh failed: {exc}")
        raise self.retry(exc=exc, countdown=10 * (2 ** self.request.retries))


@celery_app.task(name="civicpulse.workers.tasks.health_check_task")
def health_check_task():
    """Periodic health check — ensures workers are alive."""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}
