"""
Rule-based persona classification.

Rules run in a fixed priority order and the first match wins:

  1. angry_voter          mean < -0.4 and "anger" among dominant emotions
  2. hopeful_patriot      mean >  0.3 and "hope" or "pride" dominant
  3. civic_mobilizer      any mobilizer keyword in the author's text
  4. sarcastic_dissenter  mean < -0.2 and any sarcasm keyword in the text
  5. apathetic_observer   fallback

Keywords match as substrings of the lowercased, space-joined text.
"""
from __future__ import annotations

import logging
from typing import Iterable, List

from civicpulse.ml.persona.catalog import PERSONA_TYPES
from civicpulse.ml.persona.models import EmotionalProfile, PersonaType, SentimentEvent

logger = logging.getLogger(__name__)

ANGRY_SENTIMENT_CEILING = -0.4
HOPEFUL_SENTIMENT_FLOOR = 0.3
SARCASTIC_SENTIMENT_CEILING = -0.2

MOBILIZER_KEYWORDS = PERSONA_TYPES[PersonaType.CIVIC_MOBILIZER].keywords
SARCASM_KEYWORDS = PERSONA_TYPES[PersonaType.SARCASTIC_DISSENTER].keywords


def combined_text(posts: List[SentimentEvent]) -> str:
    return " ".join(p.text.lower() for p in posts)


def _mentions_any(text: str, keywords: Iterable[str]) -> bool:
    return any(k in text for k in keywords)


def classify_persona(profile: EmotionalProfile, content_text: str) -> PersonaType:
    dominant = profile.dominant_emotions
    mean = profile.mean_sentiment

    if mean < ANGRY_SENTIMENT_CEILING and "anger" in dominant:
        return PersonaType.ANGRY_VOTER

    if mean > HOPEFUL_SENTIMENT_FLOOR and ("hope" in dominant or "pride" in dominant):
        return PersonaType.HOPEFUL_PATRIOT

    if _mentions_any(content_text, MOBILIZER_KEYWORDS):
        return PersonaType.CIVIC_MOBILIZER

    if mean < SARCASTIC_SENTIMENT_CEILING and _mentions_any(content_text, SARCASM_KEYWORDS):
        return PersonaType.SARCASTIC_DISSENTER

    return PersonaType.APATHETIC_OBSERVER
