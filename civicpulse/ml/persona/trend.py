"""Emotional trend from recent-half vs older-half sentiment."""
from __future__ import annotations

from typing import List

import numpy as np

from civicpulse.ml.persona.models import EmotionalTrend, SentimentEvent


def determine_emotional_trend(
    posts: List[SentimentEvent],
    min_posts: int = 5,
    stability_band: float = 0.1,
) -> EmotionalTrend:
    """
    Compare the newer half of a most-recent-first group with the older half.

    The recent half holds floor(n/2) posts, the older half the remainder.
    Unscored posts count as 0 here, unlike the profile mean.
    """
    if len(posts) < min_posts:
        return EmotionalTrend.STABLE

    mid = len(posts) // 2
    if mid == 0:
        return EmotionalTrend.STABLE
    scores = np.array([p.sentiment_score or 0.0 for p in posts], dtype=float)
    difference = float(scores[:mid].mean() - scores[mid:].mean())

    if abs(difference) < stability_band:
        return EmotionalTrend.STABLE
    return EmotionalTrend.ESCALATING if difference > 0 else EmotionalTrend.DECLINING
