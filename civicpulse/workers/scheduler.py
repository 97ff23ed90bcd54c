"""
CivicPulse in-process refresh scheduler.

Keeps the API's persona snapshot current without a separate worker: a single
asyncio task calls ``PersonaService.refresh`` every interval. A failed pass is
logged and the previous snapshot keeps serving until the next tick.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from civicpulse.services.persona.persona_service import PersonaService

logger = logging.getLogger(__name__)


class PersonaRefreshScheduler:

    def __init__(
        self,
        service: PersonaService,
        session_factory: Callable,
        interval_seconds: float = 60.0,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.service = service
        self.session_factory = session_factory
        self.interval_seconds = interval_seconds
        self.passes = 0
        self.failures = 0
        self._task: Optional[asyncio.Task] = None
        self._stop = asyncio.Event()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh_once(self) -> bool:
        try:
            async with self.session_factory() as db:
                await self.service.refresh(db)
        except Exception as e:
            self.failures += 1
            logger.error(f"Scheduled persona refresh failed: {e}")
            return False
        self.passes += 1
        return True

    async def _loop(self):
        while not self._stop.is_set():
            await self.refresh_once()
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                pass

    def start(self):
        if self.running:
            return
        self._stop.clear()
        self._task = asyncio.create_task(self._loop())
        logger.info(f"Persona refresh scheduler started (every {self.interval_seconds}s)")

    async def stop(self):
        if not self._task:
            return
        self._stop.set()
        await self._task
        self._task = None
        logger.info("Persona refresh scheduler stopped")
