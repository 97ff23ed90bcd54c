"""Bounded influence score from post volume and engagement."""
from __future__ import annotations

from typing import List

from civicpulse.ml.persona.models import SentimentEvent

POST_WEIGHT = 10


def calculate_influence_score(
    posts: List[SentimentEvent],
    cap: float = 100.0,
    engagement_weight: float = 0.1,
) -> float:
    base = len(posts) * POST_WEIGHT
    engagement = sum(p.engagement.total for p in posts)
    return float(min(cap, base + engagement * engagement_weight))
