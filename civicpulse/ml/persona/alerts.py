"""
Behavioral alerts over classified profiles.

  tone_shift       escalating angry_voter; high above the influence bar, else medium
  influence_surge  civic_mobilizer above the surge bar; always medium

Alert ids are digests of persona, region, author token and alert type, so
re-running a pass over the same batch reproduces the same ids.
"""
from __future__ import annotations

import hashlib
import logging
from typing import List

from civicpulse.ml.persona.models import (
    Alert, AlertSeverity, AlertType, EmotionalTrend, PersonaProfile, PersonaType,
)

logger = logging.getLogger(__name__)

ID_LENGTH = 16


def alert_id(persona: PersonaType, region: str, author_token: str, alert_type: AlertType) -> str:
    key = "|".join((persona.value, region, author_token, alert_type.value))
    return hashlib.sha256(key.encode("utf-8")).hexdigest()[:ID_LENGTH]


def _alert(profile: PersonaProfile, alert_type: AlertType, description: str,
           severity: AlertSeverity) -> Alert:
    return Alert(
        id=alert_id(profile.persona, profile.region, profile.author_token, alert_type),
        persona=profile.persona,
        region=profile.region,
        alert_type=alert_type,
        description=description,
        severity=severity,
        created_at=profile.last_active,
        profile_id=profile.profile_id,
    )


def generate_persona_alerts(
    profiles: List[PersonaProfile],
    high_influence: float = 70.0,
    surge_threshold: float = 80.0,
) -> List[Alert]:
    alerts: List[Alert] = []
    for profile in profiles:
        if (profile.trend == EmotionalTrend.ESCALATING
                and profile.persona == PersonaType.ANGRY_VOTER):
            severity = (AlertSeverity.HIGH if profile.influence_score > high_influence
                        else AlertSeverity.MEDIUM)
            alerts.append(_alert(
                profile, AlertType.TONE_SHIFT,
                f"Angry Voter persona showing escalating sentiment in {profile.region}",
                severity,
            ))

        if (profile.persona == PersonaType.CIVIC_MOBILIZER
                and profile.influence_score > surge_threshold):
            alerts.append(_alert(
                profile, AlertType.INFLUENCE_SURGE,
                f"High-influence Civic Mobilizer detected in {profile.region}",
                AlertSeverity.MEDIUM,
            ))

    if alerts:
        logger.debug("Generated %d persona alerts from %d profiles", len(alerts), len(profiles))
    return alerts
