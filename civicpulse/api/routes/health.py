"""CivicPulse API — health and service info."""
from __future__ import annotations

from fastapi import APIRouter

from civicpulse.core.config import get_settings
from civicpulse.services.persona.persona_service import persona_service

router = APIRouter(tags=["Health"])


@router.get("/")
async def root():
    settings = get_settings()
    return {
        "name": settings.app_name,
        "description": "Civic persona classification and alerting engine",
        "version": settings.app_version,
        "personas": "/api/v1/personas/snapshot",
        "docs": "/docs",
    }


@router.get("/health")
async def health():
    snapshot = persona_service.latest
    return {
        "status": "healthy",
        "last_refreshed": persona_service.last_refreshed,
        "profiled_authors": snapshot.total_profiled_authors,
    }
