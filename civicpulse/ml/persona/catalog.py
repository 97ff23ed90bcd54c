"""Persona catalog — display metadata and the keyword lists the classifier reads."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from civicpulse.ml.persona.models import PersonaType


@dataclass(frozen=True)
class PersonaDefinition:
    persona: PersonaType
    name: str
    description: str
    emotions: Tuple[str, ...]
    keywords: Tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "persona": self.persona.value,
            "name": self.name,
            "description": self.description,
            "emotions": list(self.emotions),
            "keywords": list(self.keywords),
        }


PERSONA_TYPES: Dict[PersonaType, PersonaDefinition] = {
    PersonaType.ANGRY_VOTER: PersonaDefinition(
        persona=PersonaType.ANGRY_VOTER,
        name="The Angry Voter",
        description="Consistently expresses anger and frustration with government",
        emotions=("anger", "frustration", "outrage"),
        keywords=("corrupt", "incompetent", "failed", "disgrace", "useless"),
    ),
    PersonaType.SARCASTIC_DISSENTER: PersonaDefinition(
        persona=PersonaType.SARCASTIC_DISSENTER,
        name="The Sarcastic Dissenter",
        description="Uses humor and sarcasm to critique political situations",
        emotions=("sarcasm", "humor", "cynicism"),
        keywords=("obviously", "brilliant", "genius", "perfect", "amazing"),
    ),
    PersonaType.HOPEFUL_PATRIOT: PersonaDefinition(
        persona=PersonaType.HOPEFUL_PATRIOT,
        name="The Hopeful Patriot",
        description="Maintains optimism and faith in national progress",
        emotions=("hope", "pride", "optimism"),
        keywords=("progress", "development", "unity", "forward", "better"),
    ),
    PersonaType.APATHETIC_OBSERVER: PersonaDefinition(
        persona=PersonaType.APATHETIC_OBSERVER,
        name="The Apathetic Observer",
        description="Shows disengagement and lack of emotional investment",
        emotions=("indifference", "detachment", "neutrality"),
        keywords=("whatever", "same", "nothing new", "typical", "expected"),
    ),
    PersonaType.CIVIC_MOBILIZER: PersonaDefinition(
        persona=PersonaType.CIVIC_MOBILIZER,
        name="The Civic Mobilizer",
        description="Actively encourages civic engagement and action",
        emotions=("determination", "urgency", "motivation"),
        keywords=("action", "vote", "unite", "change", "together", "organize"),
    ),
}
