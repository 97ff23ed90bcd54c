"""Emotional fingerprint of one author group."""
from __future__ import annotations

from collections import Counter
from typing import List

import numpy as np

from civicpulse.ml.persona.models import EmotionalProfile, SentimentEvent

DOMINANT_EMOTION_COUNT = 3


def analyze_emotional_pattern(posts: List[SentimentEvent]) -> EmotionalProfile:
    """
    Tally emotion tags and average the scored posts.

    Counter keeps first-seen order and the sort is stable, so ties resolve to
    whichever emotion appeared first in the group.
    """
    counts: Counter = Counter()
    for post in posts:
        counts.update(post.emotions)

    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    scores = [p.sentiment_score for p in posts if p.sentiment_score is not None]
    mean_sentiment = float(np.mean(scores)) if scores else 0.0

    return EmotionalProfile(
        dominant_emotions=[e for e, _ in ranked[:DOMINANT_EMOTION_COUNT]],
        mean_sentiment=mean_sentiment,
        emotion_counts=dict(counts),
    )


def extract_topics(posts: List[SentimentEvent], limit: int = 5) -> List[str]:
    topics = {}
    for post in posts:
        for topic in post.topics:
            topics.setdefault(topic, None)
    return list(topics)[:limit]
