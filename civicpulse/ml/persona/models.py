"""
CivicPulse Persona Layer — data structures.

Plain dataclasses: every record here is recomputed from the current event
batch on each pass and never persisted by the engine itself.
"""
from __future__ import annotations

import enum
import math
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

UNKNOWN_REGION = "Unknown"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


# ═══════════════════════════════════════════════════════════════════════
# Enums
# ═══════════════════════════════════════════════════════════════════════

class PersonaType(str, enum.Enum):
    ANGRY_VOTER = "angry_voter"
    SARCASTIC_DISSENTER = "sarcastic_dissenter"
    HOPEFUL_PATRIOT = "hopeful_patriot"
    CIVIC_MOBILIZER = "civic_mobilizer"
    APATHETIC_OBSERVER = "apathetic_observer"


class EmotionalTrend(str, enum.Enum):
    STABLE = "stable"
    ESCALATING = "escalating"
    DECLINING = "declining"


class AlertType(str, enum.Enum):
    TONE_SHIFT = "tone_shift"
    INFLUENCE_SURGE = "influence_surge"


class AlertSeverity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ═══════════════════════════════════════════════════════════════════════
# Field coercion helpers
# ═══════════════════════════════════════════════════════════════════════

def _first_present(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _coerce_count(value: Any) -> int:
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(count, 0)


def _coerce_score(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        score = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(score):
        return None
    return max(-1.0, min(1.0, score))


def _coerce_labels(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    try:
        items = list(value)
    except TypeError:
        return ()
    # dict.fromkeys keeps first-seen order
    return tuple(dict.fromkeys(str(v) for v in items if v is not None and str(v)))


def _coerce_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, str) and value:
        try:
            ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return EPOCH
    else:
        return EPOCH
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


# ═══════════════════════════════════════════════════════════════════════
# Input
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Engagement:
    likes: int = 0
    shares: int = 0
    comments: int = 0

    @property
    def total(self) -> int:
        return self.likes + self.shares + self.comments

    @classmethod
    def from_record(cls, record: Any) -> "Engagement":
        if not isinstance(record, Mapping):
            return cls()
        return cls(
            likes=_coerce_count(record.get("likes")),
            shares=_coerce_count(record.get("shares")),
            comments=_coerce_count(record.get("comments")),
        )


@dataclass(frozen=True)
class SentimentEvent:
    """One sentiment-tagged post attributed to an opaque author token."""
    author_token: str
    text: str = ""
    region: Optional[str] = None
    sentiment_score: Optional[float] = None
    emotions: Tuple[str, ...] = ()
    topics: Tuple[str, ...] = ()
    engagement: Engagement = field(default_factory=Engagement)
    created_at: datetime = EPOCH

    def __post_init__(self) -> None:
        # created_at is always timezone-aware UTC
        object.__setattr__(self, "created_at", _coerce_timestamp(self.created_at))

    @property
    def region_label(self) -> str:
        return self.region or UNKNOWN_REGION

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "SentimentEvent":
        """
        Build an event from a loosely-shaped mapping (DB row or JSON body).

        Missing or malformed fields resolve to their defaults; this never
        raises on field content. Legacy sentiment-log column names are
        accepted alongside the canonical ones.
        """
        author = _first_present(record, "author_token", "author_handle")
        author = str(author).strip() if author is not None else ""
        if not author:
            record_id = record.get("id")
            author = f"user_{str(record_id)[:8]}" if record_id is not None else "anonymous"

        region = _first_present(record, "region", "region_detected")
        region = str(region).strip() if region is not None else ""

        text = _first_present(record, "text", "content_text")

        return cls(
            author_token=author,
            text=str(text) if text is not None else "",
            region=region or None,
            sentiment_score=_coerce_score(record.get("sentiment_score")),
            emotions=_coerce_labels(_first_present(record, "emotions", "emotional_tone")),
            topics=_coerce_labels(_first_present(record, "topics", "content_category")),
            engagement=Engagement.from_record(
                _first_present(record, "engagement", "engagement_metrics")
            ),
            created_at=_coerce_timestamp(record.get("created_at")),
        )


# ═══════════════════════════════════════════════════════════════════════
# Derived records
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class EmotionalProfile:
    dominant_emotions: List[str]
    mean_sentiment: float
    emotion_counts: Dict[str, int]


@dataclass
class PersonaProfile:
    """Behavioral fingerprint of one eligible author."""
    profile_id: str                   # deterministic digest of the author token
    persona: PersonaType
    region: str                       # region of the most recent event
    post_count: int
    dominant_emotions: List[str]
    mean_sentiment: float
    influence_score: float            # 0..influence_cap
    last_active: datetime
    topics: List[str]
    trend: EmotionalTrend
    # kept out of serialized output; only alert identity is derived from it
    author_token: str = field(default="", repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop("author_token")
        data["persona"] = self.persona.value
        data["trend"] = self.trend.value
        data["last_active"] = self.last_active.isoformat()
        return data


@dataclass
class TopInfluencer:
    rank: int
    persona: PersonaType
    influence_score: float
    profile_id: str
    rank_alias: str                   # display label only, not anonymization

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["persona"] = self.persona.value
        return data


@dataclass
class RegionalCluster:
    region: str
    persona_distribution: Dict[PersonaType, int]
    total_authors: int
    top_influencers: List[TopInfluencer] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "region": self.region,
            "persona_distribution": {p.value: n for p, n in self.persona_distribution.items()},
            "total_authors": self.total_authors,
            "top_influencers": [t.to_dict() for t in self.top_influencers],
        }


@dataclass
class Alert:
    id: str
    persona: PersonaType
    region: str
    alert_type: AlertType
    description: str
    severity: AlertSeverity
    created_at: datetime
    profile_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "persona": self.persona.value,
            "region": self.region,
            "alert_type": self.alert_type.value,
            "description": self.description,
            "severity": self.severity.value,
            "created_at": self.created_at.isoformat(),
            "profile_id": self.profile_id,
        }


@dataclass
class PersonaSnapshot:
    """Everything one pass derives from one event batch."""
    profiles: List[PersonaProfile]
    clusters: List[RegionalCluster]
    alerts: List[Alert]
    national_distribution: Dict[PersonaType, int]
    total_events: int = 0
    computed_from: Optional[datetime] = None    # newest created_at in the batch

    @property
    def total_profiled_authors(self) -> int:
        return len(self.profiles)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profiles": [p.to_dict() for p in self.profiles],
            "clusters": [c.to_dict() for c in self.clusters],
            "alerts": [a.to_dict() for a in self.alerts],
            "national_distribution": {p.value: n for p, n in self.national_distribution.items()},
            "total_events": self.total_events,
            "total_profiled_authors": self.total_profiled_authors,
            "computed_from": self.computed_from.isoformat() if self.computed_from else None,
        }


# ═══════════════════════════════════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PersonaEngineConfig:
    """Tunable thresholds; defaults reproduce the reference rules exactly."""
    min_posts_for_classification: int = 3
    min_posts_for_trend: int = 5
    trend_stability_band: float = 0.1
    influence_cap: float = 100.0
    top_influencers_per_region: int = 5
    max_topics_per_profile: int = 5
    tone_shift_high_influence: float = 70.0
    influence_surge_threshold: float = 80.0
    engagement_weight: float = 0.1

    def __post_init__(self) -> None:
        if self.min_posts_for_classification < 1:
            raise ValueError("min_posts_for_classification must be at least 1")
        if self.min_posts_for_trend < 2:
            raise ValueError("min_posts_for_trend must be at least 2")
        if self.trend_stability_band < 0:
            raise ValueError("trend_stability_band must be non-negative")
        if self.influence_cap < 0:
            raise ValueError("influence_cap must be non-negative")
        if self.top_influencers_per_region < 0:
            raise ValueError("top_influencers_per_region must be non-negative")
        if self.max_topics_per_profile < 0:
            raise ValueError("max_topics_per_profile must be non-negative")
        if self.engagement_weight < 0:
            raise ValueError("engagement_weight must be non-negative")

    @classmethod
    def from_settings(cls, settings: Any) -> "PersonaEngineConfig":
        return cls(
            min_posts_for_classification=settings.persona_min_posts_for_classification,
            min_posts_for_trend=settings.persona_min_posts_for_trend,
            trend_stability_band=settings.persona_trend_stability_band,
            influence_cap=settings.persona_influence_cap,
            top_influencers_per_region=settings.persona_top_influencers_per_region,
            max_topics_per_profile=settings.persona_max_topics_per_profile,
            tone_shift_high_influence=settings.persona_tone_shift_high_influence,
            influence_surge_threshold=settings.persona_influence_surge_threshold,
            engagement_weight=settings.persona_engagement_weight,
        )


def empty_distribution() -> Dict[PersonaType, int]:
    return {persona: 0 for persona in PersonaType}


EventBatch = Iterable[SentimentEvent]
