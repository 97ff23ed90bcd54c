"""Shared test fixtures for CivicPulse tests."""

from __future__ import annotations

import pytest

from civicpulse.ml.persona.models import SentimentEvent
from tests.factories import make_history


@pytest.fixture
def angry_centre_batch() -> list[SentimentEvent]:
    """Five angry posts from one author in Centre, no engagement."""
    return make_history(
        "u1",
        [-0.6, -0.5, -0.7, -0.4, -0.6],
        emotions=("anger",),
        text="The council failed us again",
    )
