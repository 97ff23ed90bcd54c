"""
CivicPulse API — Persona Routes.

  GET  /personas/snapshot              — Latest full snapshot
  GET  /personas/profiles              — Profiles, filterable by persona / region
  GET  /personas/clusters              — Regional clusters with persona shares
  GET  /personas/alerts                — Alerts, filterable by severity
  GET  /personas/distribution          — National distribution with shares
  GET  /personas/catalog               — Persona display metadata
  GET  /personas/{persona}/drilldown   — Regions and influencers for one persona
  POST /personas/analyze               — One pass over a posted batch (not stored)
"""
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from civicpulse.ml.persona.catalog import PERSONA_TYPES
from civicpulse.ml.persona.clustering import persona_drilldown, persona_shares
from civicpulse.ml.persona.models import (
    AlertSeverity, PersonaSnapshot, PersonaType, RegionalCluster,
)
from civicpulse.schemas.schemas import (
    AnalyzeRequest,
    DistributionSchema,
    PersonaAlertSchema,
    PersonaDefinitionSchema,
    PersonaDrilldownSchema,
    PersonaProfileSchema,
    PersonaSnapshotSchema,
    RegionalClusterSchema,
)
from civicpulse.services.persona.persona_service import persona_service

router = APIRouter(prefix="/personas", tags=["Personas"])


def _cluster_payload(cluster: RegionalCluster) -> dict:
    data = cluster.to_dict()
    data["persona_shares"] = {
        p.value: share for p, share in persona_shares(cluster.persona_distribution).items()
    }
    return data


def _snapshot_payload(snapshot: PersonaSnapshot) -> dict:
    data = snapshot.to_dict()
    data["clusters"] = [_cluster_payload(c) for c in snapshot.clusters]
    return data


def _parse_persona(value: str) -> PersonaType:
    try:
        return PersonaType(value)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown persona: {value}")


@router.get("/snapshot", response_model=PersonaSnapshotSchema)
async def get_snapshot():
    return _snapshot_payload(persona_service.latest)


@router.get("/profiles", response_model=List[PersonaProfileSchema])
async def list_profiles(
    persona: Optional[PersonaType] = None,
    region: Optional[str] = None,
):
    profiles = persona_service.latest.profiles
    if persona:
        profiles = [p for p in profiles if p.persona == persona]
    if region:
        profiles = [p for p in profiles if p.region == region]
    return [p.to_dict() for p in profiles]


@router.get("/clusters", response_model=List[RegionalClusterSchema])
async def list_clusters():
    return [_cluster_payload(c) for c in persona_service.latest.clusters]


@router.get("/alerts", response_model=List[PersonaAlertSchema])
async def list_alerts(severity: Optional[AlertSeverity] = None):
    alerts = persona_service.latest.alerts
    if severity:
        alerts = [a for a in alerts if a.severity == severity]
    return [a.to_dict() for a in alerts]


@router.get("/distribution", response_model=DistributionSchema)
async def get_distribution():
    distribution = persona_service.latest.national_distribution
    return DistributionSchema(
        total_authors=sum(distribution.values()),
        counts={p.value: n for p, n in distribution.items()},
        shares={p.value: s for p, s in persona_shares(distribution).items()},
    )


@router.get("/catalog", response_model=List[PersonaDefinitionSchema])
async def get_catalog():
    return [definition.to_dict() for definition in PERSONA_TYPES.values()]


@router.get("/{persona}/drilldown", response_model=PersonaDrilldownSchema)
async def get_drilldown(persona: str, limit: Optional[int] = Query(None, ge=1, le=100)):
    drilldown = persona_drilldown(persona_service.latest, _parse_persona(persona), limit)
    return drilldown.to_dict()


@router.post("/analyze", response_model=PersonaSnapshotSchema)
async def analyze_batch(request: AnalyzeRequest):
    snapshot = persona_service.analyze(e.to_event() for e in request.events)
    return _snapshot_payload(snapshot)
