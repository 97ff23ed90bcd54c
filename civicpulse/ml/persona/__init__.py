"""Civic persona classification and alerting."""

from civicpulse.ml.persona.catalog import PERSONA_TYPES, PersonaDefinition
from civicpulse.ml.persona.clustering import persona_drilldown, persona_shares
from civicpulse.ml.persona.engine import PersonaEngine, analyze_user_personas
from civicpulse.ml.persona.models import (
    Alert,
    AlertSeverity,
    AlertType,
    EmotionalProfile,
    EmotionalTrend,
    Engagement,
    PersonaEngineConfig,
    PersonaProfile,
    PersonaSnapshot,
    PersonaType,
    RegionalCluster,
    SentimentEvent,
    TopInfluencer,
)

__all__ = [
    "PERSONA_TYPES",
    "Alert",
    "AlertSeverity",
    "AlertType",
    "EmotionalProfile",
    "EmotionalTrend",
    "Engagement",
    "PersonaDefinition",
    "PersonaEngine",
    "PersonaEngineConfig",
    "PersonaProfile",
    "PersonaSnapshot",
    "PersonaType",
    "RegionalCluster",
    "SentimentEvent",
    "TopInfluencer",
    "analyze_user_personas",
    "persona_drilldown",
    "persona_shares",
]
