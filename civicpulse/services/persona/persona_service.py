"""
CivicPulse Persona Service

Owns the persona engine and the most recent snapshot it produced:
  1. Load the latest event window via the event loader
  2. Run one classification pass
  3. Swap in the new snapshot and update metrics

A failed load leaves the previous snapshot in place.
"""
from __future__ import annotations

import logging
import time
from typing import Iterable, Optional

from prometheus_client import Counter, Gauge, Histogram
from sqlalchemy.ext.asyncio import AsyncSession

from civicpulse.core.config import get_settings
from civicpulse.ml.persona.engine import PersonaEngine
from civicpulse.ml.persona.models import PersonaEngineConfig, PersonaSnapshot, SentimentEvent
from civicpulse.services.persona.event_loader import SentimentLogLoader

logger = logging.getLogger(__name__)

# Prometheus metrics
PASSES_COMPUTED = Counter("civicpulse_persona_passes_total", "Persona passes computed")
EVENTS_PROCESSED = Counter("civicpulse_persona_events_total", "Sentiment events classified")
ALERTS_EMITTED = Counter(
    "civicpulse_persona_alerts_total", "Persona alerts emitted", ["alert_type"],
)
PROFILED_AUTHORS = Gauge("civicpulse_persona_profiled_authors", "Authors profiled in the latest pass")
PASS_DURATION = Histogram("civicpulse_persona_pass_seconds", "Time spent on one persona pass")


class PersonaService:
    """Runs persona passes and keeps the latest snapshot for the API."""

    def __init__(
        self,
        engine: Optional[PersonaEngine] = None,
        loader: Optional[SentimentLogLoader] = None,
    ):
        self.engine = engine or PersonaEngine(PersonaEngineConfig.from_settings(get_settings()))
        self.loader = loader or SentimentLogLoader()
        self._snapshot: PersonaSnapshot = self.engine.compute([])
        self.last_refreshed: Optional[float] = None

    @property
    def latest(self) -> PersonaSnapshot:
        return self._snapshot

    def analyze(self, events: Iterable[SentimentEvent]) -> PersonaSnapshot:
        """Compute a snapshot without storing it."""
        return self.engine.compute(events)

    async def refresh(self, db: AsyncSession) -> PersonaSnapshot:
        events = await self.loader.load_recent(db)

        started = time.perf_counter()
        snapshot = self.engine.compute(events)
        PASS_DURATION.observe(time.perf_counter() - started)

        self._snapshot = snapshot
        self.last_refreshed = time.time()

        PASSES_COMPUTED.inc()
        EVENTS_PROCESSED.inc(snapshot.total_events)
        PROFILED_AUTHORS.set(snapshot.total_profiled_authors)
        for alert in snapshot.alerts:
            ALERTS_EMITTED.labels(alert_type=alert.alert_type.value).inc()

        logger.info(
            f"Persona snapshot refreshed: {snapshot.total_profiled_authors} profiles, "
            f"{len(snapshot.clusters)} regions, {len(snapshot.alerts)} alerts"
        )
        return snapshot


persona_service = PersonaService()
