"""
CivicPulse Event Loader

Pulls the most recent window of sentiment logs and maps each row into a
validated SentimentEvent. Database errors propagate to the caller.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from civicpulse.core.config import get_settings
from civicpulse.ml.persona.models import SentimentEvent
from civicpulse.models.models import SentimentLog

logger = logging.getLogger(__name__)


class SentimentLogLoader:
    """Reads the newest ``limit`` rows across all authors and regions."""

    def __init__(self, default_limit: Optional[int] = None):
        self.default_limit = (
            default_limit if default_limit is not None else get_settings().persona_batch_limit
        )

    async def load_recent(self, db: AsyncSession, limit: Optional[int] = None) -> List[SentimentEvent]:
        limit = limit if limit is not None else self.default_limit
        result = await db.execute(
            select(SentimentLog)
            .order_by(SentimentLog.created_at.desc())
            .limit(limit)
        )
        rows = result.scalars().all()
        events = [SentimentEvent.from_record(row.to_record()) for row in rows]
        logger.info(f"Loaded {len(events)} sentiment events (limit={limit})")
        return events
