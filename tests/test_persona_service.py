"""Tests for civicpulse.services.persona: snapshot refresh and event loading."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

import pytest

from civicpulse.ml.persona.models import PersonaType
from civicpulse.models.models import SentimentLog
from civicpulse.services.persona.event_loader import SentimentLogLoader
from civicpulse.services.persona.persona_service import PersonaService
from tests.factories import make_history


class _StaticLoader:
    def __init__(self, events):
        self.events = events
        self.calls = 0

    async def load_recent(self, db, limit=None):
        self.calls += 1
        return list(self.events)


class _FailingLoader:
    async def load_recent(self, db, limit=None):
        raise ConnectionError("database unavailable")


class _ScalarResult:
    def __init__(self, rows):
        self._rows = rows

    def scalars(self):
        return self

    def all(self):
        return self._rows


class _FakeSession:
    def __init__(self, rows):
        self.rows = rows
        self.statements = []

    async def execute(self, statement):
        self.statements.append(statement)
        return _ScalarResult(self.rows)


# ---------------------------------------------------------------------------
# PersonaService
# ---------------------------------------------------------------------------


class TestPersonaService:

    def test_initial_snapshot_is_empty(self) -> None:
        service = PersonaService(loader=_StaticLoader([]))
        snapshot = service.latest
        assert snapshot.profiles == []
        assert snapshot.national_distribution == {p: 0 for p in PersonaType}
        assert service.last_refreshed is None

    @pytest.mark.asyncio
    async def test_refresh_replaces_snapshot(self, angry_centre_batch) -> None:
        loader = _StaticLoader(angry_centre_batch)
        service = PersonaService(loader=loader)
        snapshot = await service.refresh(db=None)
        assert loader.calls == 1
        assert service.latest is snapshot
        assert snapshot.profiles[0].persona == PersonaType.ANGRY_VOTER
        assert service.last_refreshed is not None

    @pytest.mark.asyncio
    async def test_failed_load_keeps_previous_snapshot(self, angry_centre_batch) -> None:
        service = PersonaService(loader=_StaticLoader(angry_centre_batch))
        previous = await service.refresh(db=None)
        service.loader = _FailingLoader()
        with pytest.raises(ConnectionError):
            await service.refresh(db=None)
        assert service.latest is previous

    def test_analyze_does_not_store(self, angry_centre_batch) -> None:
        service = PersonaService(loader=_StaticLoader([]))
        snapshot = service.analyze(angry_centre_batch)
        assert len(snapshot.profiles) == 1
        assert service.latest.profiles == []

    @pytest.mark.asyncio
    async def test_refresh_counts_alerts(self) -> None:
        events = make_history("mob", [0.0] * 9, text="vote together")
        service = PersonaService(loader=_StaticLoader(events))
        snapshot = await service.refresh(db=None)
        assert len(snapshot.alerts) == 1


# ---------------------------------------------------------------------------
# SentimentLogLoader
# ---------------------------------------------------------------------------


def _row(author, score, minutes):
    return SentimentLog(
        id=uuid.uuid4(),
        author_handle=author,
        region_detected="Centre",
        content_text="Roads failed",
        sentiment_score=score,
        emotional_tone=["anger"],
        content_category=["infrastructure"],
        engagement_metrics={"likes": 2},
        created_at=datetime(2026, 3, 1, 12, minutes, tzinfo=timezone.utc),
    )


class TestSentimentLogLoader:

    @pytest.mark.asyncio
    async def test_rows_map_to_events(self) -> None:
        session = _FakeSession([_row("@a", -0.5, 10), _row(None, 0.2, 5)])
        events = await SentimentLogLoader(default_limit=50).load_recent(session)

        assert len(session.statements) == 1
        assert events[0].author_token == "@a"
        assert events[0].emotions == ("anger",)
        assert events[0].topics == ("infrastructure",)
        assert events[0].engagement.likes == 2
        assert events[1].author_token.startswith("user_")

    @pytest.mark.asyncio
    async def test_limit_in_query(self) -> None:
        session = _FakeSession([])
        await SentimentLogLoader(default_limit=50).load_recent(session, limit=7)
        compiled = session.statements[0].compile(compile_kwargs={"literal_binds": True})
        assert "LIMIT 7" in str(compiled)
        assert "ORDER BY sentiment_logs.created_at DESC" in str(compiled)

    @pytest.mark.asyncio
    async def test_explicit_zero_limit_is_kept(self) -> None:
        session = _FakeSession([])
        events = await SentimentLogLoader(default_limit=50).load_recent(session, limit=0)
        compiled = session.statements[0].compile(compile_kwargs={"literal_binds": True})
        assert "LIMIT 0" in str(compiled)
        assert events == []
