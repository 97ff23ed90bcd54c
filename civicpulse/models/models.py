"""
CivicPulse ORM Models.

The persona engine only reads from ``sentiment_logs``; rows are written by the
upstream sentiment-tagging pipeline.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, Index, String, Text, func
from sqlalchemy.dialects.postgresql import JSON, UUID
from sqlalchemy.orm import Mapped, mapped_column

from civicpulse.core.database import Base


class SentimentLog(Base):
    """One sentiment-tagged post from the tagging pipeline."""
    __tablename__ = "sentiment_logs"
    __table_args__ = (
        Index("ix_sentiment_logs_created_at", "created_at"),
        Index("ix_sentiment_logs_author", "author_handle"),
        Index("ix_sentiment_logs_region", "region_detected"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    author_handle: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    region_detected: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    content_text: Mapped[str] = mapped_column(Text, default="")
    sentiment_score: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    emotional_tone: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    content_category: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    engagement_metrics: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def to_record(self) -> dict:
        return {
            "id": str(self.id),
            "author_handle": self.author_handle,
            "region_detected": self.region_detected,
            "content_text": self.content_text,
            "sentiment_score": self.sentiment_score,
            "emotional_tone": self.emotional_tone,
            "content_category": self.content_category,
            "engagement_metrics": self.engagement_metrics,
            "created_at": self.created_at,
        }
