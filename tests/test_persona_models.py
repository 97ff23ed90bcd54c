"""Tests for civicpulse.ml.persona.models: input coercion and configuration."""

from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from civicpulse.core.config import Settings
from civicpulse.ml.persona.models import (
    EPOCH,
    Engagement,
    PersonaEngineConfig,
    PersonaType,
    SentimentEvent,
    empty_distribution,
)

# ---------------------------------------------------------------------------
# SentimentEvent.from_record
# ---------------------------------------------------------------------------


class TestSentimentEventFromRecord:

    def test_canonical_fields(self) -> None:
        event = SentimentEvent.from_record({
            "author_token": "u1",
            "text": "Vote together",
            "region": "Littoral",
            "sentiment_score": 0.4,
            "emotions": ["hope"],
            "topics": ["elections"],
            "engagement": {"likes": 3, "shares": 2, "comments": 1},
            "created_at": datetime(2026, 1, 1, tzinfo=timezone.utc),
        })
        assert event.author_token == "u1"
        assert event.text == "Vote together"
        assert event.region == "Littoral"
        assert event.sentiment_score == 0.4
        assert event.emotions == ("hope",)
        assert event.topics == ("elections",)
        assert event.engagement.total == 6

    def test_legacy_column_names(self) -> None:
        event = SentimentEvent.from_record({
            "id": "abcdef123456",
            "author_handle": "@citizen",
            "region_detected": "North",
            "content_text": "Useless roads",
            "emotional_tone": ["anger", "frustration"],
            "content_category": ["infrastructure"],
            "engagement_metrics": {"likes": 10},
            "sentiment_score": -0.7,
        })
        assert event.author_token == "@citizen"
        assert event.region == "North"
        assert event.text == "Useless roads"
        assert event.emotions == ("anger", "frustration")
        assert event.topics == ("infrastructure",)
        assert event.engagement == Engagement(likes=10, shares=0, comments=0)

    def test_missing_author_falls_back_to_record_id(self) -> None:
        event = SentimentEvent.from_record({"id": "0123456789abcdef"})
        assert event.author_token == "user_01234567"

    def test_missing_author_and_id(self) -> None:
        assert SentimentEvent.from_record({}).author_token == "anonymous"

    def test_empty_record_defaults(self) -> None:
        event = SentimentEvent.from_record({})
        assert event.text == ""
        assert event.region is None
        assert event.region_label == "Unknown"
        assert event.sentiment_score is None
        assert event.emotions == ()
        assert event.topics == ()
        assert event.engagement.total == 0
        assert event.created_at == EPOCH

    def test_blank_region_is_unknown(self) -> None:
        event = SentimentEvent.from_record({"author_token": "u1", "region": "   "})
        assert event.region is None
        assert event.region_label == "Unknown"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (None, None),
            ("not a number", None),
            (True, None),
            (float("nan"), None),
            ("-0.25", -0.25),
            (3.5, 1.0),
            (-7, -1.0),
        ],
    )
    def test_sentiment_score_coercion(self, raw, expected) -> None:
        event = SentimentEvent.from_record({"author_token": "u1", "sentiment_score": raw})
        assert event.sentiment_score == expected

    def test_emotions_deduplicated_in_first_seen_order(self) -> None:
        event = SentimentEvent.from_record({
            "author_token": "u1", "emotions": ["anger", "fear", "anger", "hope"],
        })
        assert event.emotions == ("anger", "fear", "hope")

    def test_single_string_emotion(self) -> None:
        event = SentimentEvent.from_record({"author_token": "u1", "emotions": "anger"})
        assert event.emotions == ("anger",)

    def test_malformed_engagement(self) -> None:
        event = SentimentEvent.from_record({
            "author_token": "u1",
            "engagement": {"likes": "lots", "shares": -4, "comments": "2"},
        })
        assert event.engagement == Engagement(likes=0, shares=0, comments=2)

    def test_non_finite_engagement(self) -> None:
        event = SentimentEvent.from_record({
            "author_token": "u1",
            "engagement": {"likes": float("inf"), "shares": float("nan"), "comments": 3},
        })
        assert event.engagement == Engagement(likes=0, shares=0, comments=3)

    def test_direct_naive_timestamp_read_as_utc(self) -> None:
        event = SentimentEvent("u1", created_at=datetime(2026, 1, 1, 9, 30))
        assert event.created_at == datetime(2026, 1, 1, 9, 30, tzinfo=timezone.utc)
        assert SentimentEvent("u1").created_at == EPOCH

    def test_engagement_not_a_mapping(self) -> None:
        event = SentimentEvent.from_record({"author_token": "u1", "engagement": [1, 2]})
        assert event.engagement.total == 0

    def test_iso_timestamp_with_z(self) -> None:
        event = SentimentEvent.from_record({
            "author_token": "u1", "created_at": "2026-02-01T08:30:00Z",
        })
        assert event.created_at == datetime(2026, 2, 1, 8, 30, tzinfo=timezone.utc)

    def test_naive_timestamp_read_as_utc(self) -> None:
        event = SentimentEvent.from_record({
            "author_token": "u1", "created_at": datetime(2026, 2, 1, 8, 30),
        })
        assert event.created_at.tzinfo == timezone.utc

    def test_unparseable_timestamp(self) -> None:
        event = SentimentEvent.from_record({"author_token": "u1", "created_at": "yesterday"})
        assert event.created_at == EPOCH


# ---------------------------------------------------------------------------
# PersonaEngineConfig
# ---------------------------------------------------------------------------


class TestPersonaEngineConfig:

    def test_defaults(self) -> None:
        cfg = PersonaEngineConfig()
        assert cfg.min_posts_for_classification == 3
        assert cfg.min_posts_for_trend == 5
        assert cfg.trend_stability_band == 0.1
        assert cfg.influence_cap == 100.0
        assert cfg.top_influencers_per_region == 5

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_posts_for_classification": 0},
            {"min_posts_for_trend": 1},
            {"trend_stability_band": -0.1},
            {"influence_cap": -1},
            {"top_influencers_per_region": -1},
            {"engagement_weight": -0.5},
        ],
    )
    def test_invalid_values_rejected(self, kwargs) -> None:
        with pytest.raises(ValueError):
            PersonaEngineConfig(**kwargs)

    def test_from_settings(self) -> None:
        settings = Settings(
            persona_min_posts_for_classification=4,
            persona_top_influencers_per_region=3,
            persona_influence_cap=50.0,
        )
        cfg = PersonaEngineConfig.from_settings(settings)
        assert cfg.min_posts_for_classification == 4
        assert cfg.top_influencers_per_region == 3
        assert cfg.influence_cap == 50.0
        assert cfg.min_posts_for_trend == 5

    def test_from_settings_accepts_any_attribute_holder(self) -> None:
        defaults = PersonaEngineConfig()
        holder = SimpleNamespace(**{
            f"persona_{name}": getattr(defaults, name)
            for name in defaults.__dataclass_fields__
        })
        assert PersonaEngineConfig.from_settings(holder) == defaults


def test_empty_distribution_covers_every_persona() -> None:
    assert empty_distribution() == {p: 0 for p in PersonaType}
    assert len(empty_distribution()) == 5
