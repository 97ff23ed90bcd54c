"""
CivicPulse Persona Layer — classification pipeline.

One pass maps an event batch to profiles, regional clusters, alerts and the
national persona distribution:

  batch ─▶ most-recent-first order ─▶ author / region groups
        ─▶ per-author profile (emotions, persona, influence, trend)
        ─▶ regional clusters + national distribution  (after all profiles)
        ─▶ alerts

The pass performs no I/O, reads no clock and keeps no state between calls.
"""
from __future__ import annotations

import hashlib
import logging
from typing import List, Optional

from civicpulse.ml.persona.aggregation import (
    group_by_author, group_by_region, order_most_recent_first,
)
from civicpulse.ml.persona.alerts import generate_persona_alerts
from civicpulse.ml.persona.classifier import classify_persona, combined_text
from civicpulse.ml.persona.clustering import build_regional_clusters, national_distribution
from civicpulse.ml.persona.influence import calculate_influence_score
from civicpulse.ml.persona.models import (
    EventBatch, PersonaEngineConfig, PersonaProfile, PersonaSnapshot, SentimentEvent,
)
from civicpulse.ml.persona.profiler import analyze_emotional_pattern, extract_topics
from civicpulse.ml.persona.trend import determine_emotional_trend

logger = logging.getLogger(__name__)


def profile_id_for(author_token: str) -> str:
    return hashlib.sha256(f"profile|{author_token}".encode("utf-8")).hexdigest()[:16]


class PersonaEngine:
    """Stateless persona classifier over one event batch at a time."""

    def __init__(self, config: Optional[PersonaEngineConfig] = None):
        self.config = config or PersonaEngineConfig()

    def build_profile(self, author_token: str, posts: List[SentimentEvent]) -> PersonaProfile:
        """Profile one author group; *posts* must already be most-recent-first."""
        cfg = self.config
        emotional = analyze_emotional_pattern(posts)
        persona = classify_persona(emotional, combined_text(posts))
        latest = posts[0]

        return PersonaProfile(
            profile_id=profile_id_for(author_token),
            persona=persona,
            region=latest.region_label,
            post_count=len(posts),
            dominant_emotions=emotional.dominant_emotions,
            mean_sentiment=emotional.mean_sentiment,
            influence_score=calculate_influence_score(
                posts, cap=cfg.influence_cap, engagement_weight=cfg.engagement_weight,
            ),
            last_active=latest.created_at,
            topics=extract_topics(posts, limit=cfg.max_topics_per_profile),
            trend=determine_emotional_trend(
                posts, min_posts=cfg.min_posts_for_trend,
                stability_band=cfg.trend_stability_band,
            ),
            author_token=author_token,
        )

    def compute(self, batch: EventBatch) -> PersonaSnapshot:
        cfg = self.config
        events = order_most_recent_first(batch)
        author_groups = group_by_author(events)
        region_groups = group_by_region(events)

        profiles = []
        for author_token, posts in author_groups.items():
            if len(posts) < cfg.min_posts_for_classification:
                continue
            profile = self.build_profile(author_token, posts)
            logger.debug(
                "Classified %s as %s (posts=%d, influence=%.1f, trend=%s)",
                profile.profile_id, profile.persona.value, profile.post_count,
                profile.influence_score, profile.trend.value,
            )
            profiles.append(profile)

        # Clusters and alerts need every profile of the batch
        clusters = build_regional_clusters(
            profiles, region_groups.keys(), top_n=cfg.top_influencers_per_region,
        )
        alerts = generate_persona_alerts(
            profiles,
            high_influence=cfg.tone_shift_high_influence,
            surge_threshold=cfg.influence_surge_threshold,
        )

        logger.info(
            "Persona pass: %d events, %d authors, %d profiled, %d regions, %d alerts",
            len(events), len(author_groups), len(profiles), len(clusters), len(alerts),
        )

        return PersonaSnapshot(
            profiles=profiles,
            clusters=clusters,
            alerts=alerts,
            national_distribution=national_distribution(profiles),
            total_events=len(events),
            computed_from=events[0].created_at if events else None,
        )


def analyze_user_personas(
    batch: EventBatch, config: Optional[PersonaEngineConfig] = None
) -> PersonaSnapshot:
    """Convenience wrapper: one pass with a throwaway engine."""
    return PersonaEngine(config).compute(batch)
