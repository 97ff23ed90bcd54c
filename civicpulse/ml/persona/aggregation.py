"""Batch partitioning by author token and by region."""
from __future__ import annotations

from typing import Dict, List

from civicpulse.ml.persona.models import EventBatch, SentimentEvent


def order_most_recent_first(batch: EventBatch) -> List[SentimentEvent]:
    """Stable sort by ``created_at`` descending; equal timestamps keep batch order."""
    return sorted(batch, key=lambda e: e.created_at, reverse=True)


def group_by_author(events: List[SentimentEvent]) -> Dict[str, List[SentimentEvent]]:
    """Author token -> events, preserving batch order within and across groups."""
    groups: Dict[str, List[SentimentEvent]] = {}
    for event in events:
        groups.setdefault(event.author_token, []).append(event)
    return groups


def group_by_region(events: List[SentimentEvent]) -> Dict[str, List[SentimentEvent]]:
    """Region -> events; events without a region land under ``"Unknown"``."""
    groups: Dict[str, List[SentimentEvent]] = {}
    for event in events:
        groups.setdefault(event.region_label, []).append(event)
    return groups
