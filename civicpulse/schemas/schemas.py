"""
CivicPulse API Schemas — Pydantic v2 models for request/response validation.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from civicpulse.ml.persona.models import SentimentEvent


# ═══════════════════════════════════════════════════════════════════════
# Input
# ═══════════════════════════════════════════════════════════════════════

class EngagementIn(BaseModel):
    likes: int = Field(0, ge=0)
    shares: int = Field(0, ge=0)
    comments: int = Field(0, ge=0)


class SentimentEventIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    author_token: str = Field(..., min_length=1, max_length=256)
    text: str = ""
    region: Optional[str] = None
    sentiment_score: Optional[float] = Field(None, ge=-1.0, le=1.0)
    emotions: List[str] = []
    topics: List[str] = []
    engagement: EngagementIn = Field(default_factory=EngagementIn)
    created_at: datetime

    def to_event(self) -> SentimentEvent:
        return SentimentEvent.from_record({
            "author_token": self.author_token,
            "text": self.text,
            "region": self.region,
            "sentiment_score": self.sentiment_score,
            "emotions": self.emotions,
            "topics": self.topics,
            "engagement": self.engagement.model_dump(),
            "created_at": self.created_at,
        })


class AnalyzeRequest(BaseModel):
    events: List[SentimentEventIn] = Field(default_factory=list, max_length=10000)


# ═══════════════════════════════════════════════════════════════════════
# Output
# ═══════════════════════════════════════════════════════════════════════

class PersonaProfileSchema(BaseModel):
    profile_id: str
    persona: str
    region: str
    post_count: int
    dominant_emotions: List[str]
    mean_sentiment: float
    influence_score: float
    last_active: datetime
    topics: List[str]
    trend: str


class TopInfluencerSchema(BaseModel):
    rank: int
    persona: str
    influence_score: float
    profile_id: str
    rank_alias: str


class RegionalClusterSchema(BaseModel):
    region: str
    persona_distribution: Dict[str, int]
    persona_shares: Dict[str, float] = {}
    total_authors: int
    top_influencers: List[TopInfluencerSchema]


class PersonaAlertSchema(BaseModel):
    id: str
    persona: str
    region: str
    alert_type: str
    description: str
    severity: str
    created_at: datetime
    profile_id: str


class DistributionSchema(BaseModel):
    total_authors: int
    counts: Dict[str, int]
    shares: Dict[str, float]


class PersonaSnapshotSchema(BaseModel):
    profiles: List[PersonaProfileSchema]
    clusters: List[RegionalClusterSchema]
    alerts: List[PersonaAlertSchema]
    national_distribution: Dict[str, int]
    total_events: int
    total_profiled_authors: int
    computed_from: Optional[datetime] = None


class PersonaDefinitionSchema(BaseModel):
    persona: str
    name: str
    description: str
    emotions: List[str]
    keywords: List[str]


class DrilldownRegionSchema(BaseModel):
    region: str
    count: int
    total_authors: int


class PersonaDrilldownSchema(BaseModel):
    persona: str
    national_count: int
    national_share: float
    regions: List[DrilldownRegionSchema]
    influencers: List[TopInfluencerSchema]
