"""Regional persona clusters, national distribution and drilldowns."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from civicpulse.ml.persona.models import (
    PersonaProfile, PersonaSnapshot, PersonaType, RegionalCluster, TopInfluencer,
    empty_distribution,
)


def tally_personas(profiles: Iterable[PersonaProfile]) -> Dict[PersonaType, int]:
    """Count profiles per persona; every persona is present, zero or not."""
    distribution = empty_distribution()
    for profile in profiles:
        distribution[profile.persona] += 1
    return distribution


def national_distribution(profiles: List[PersonaProfile]) -> Dict[PersonaType, int]:
    return tally_personas(profiles)


def rank_alias(persona: PersonaType, region: str, rank: int) -> str:
    return f"{persona.value}_{region}_{rank}"


def top_influencers(
    profiles: List[PersonaProfile], region: str, limit: int = 5
) -> List[TopInfluencer]:
    # sorted() is stable: equal scores keep profile order
    ranked = sorted(profiles, key=lambda p: p.influence_score, reverse=True)[:limit]
    return [
        TopInfluencer(
            rank=idx,
            persona=p.persona,
            influence_score=p.influence_score,
            profile_id=p.profile_id,
            rank_alias=rank_alias(p.persona, region, idx),
        )
        for idx, p in enumerate(ranked, start=1)
    ]


def build_regional_clusters(
    profiles: List[PersonaProfile],
    regions: Iterable[str],
    top_n: int = 5,
) -> List[RegionalCluster]:
    """
    One cluster per region seen in the batch, in the order given.

    Regions whose authors all fell below the eligibility floor still get a
    cluster with zero authors.
    """
    by_region: Dict[str, List[PersonaProfile]] = {}
    for profile in profiles:
        by_region.setdefault(profile.region, []).append(profile)

    clusters = []
    for region in regions:
        members = by_region.get(region, [])
        clusters.append(RegionalCluster(
            region=region,
            persona_distribution=tally_personas(members),
            total_authors=len(members),
            top_influencers=top_influencers(members, region, top_n),
        ))
    return clusters


def persona_shares(distribution: Dict[PersonaType, int]) -> Dict[PersonaType, float]:
    """Percentage of the total held by each persona (all 0.0 for an empty total)."""
    total = sum(distribution.values())
    return {
        persona: (distribution.get(persona, 0) / total * 100.0) if total else 0.0
        for persona in PersonaType
    }


# ═══════════════════════════════════════════════════════════════════════
# Drilldown
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class PersonaDrilldown:
    persona: PersonaType
    national_count: int
    national_share: float
    regions: List[RegionalCluster] = field(default_factory=list)
    influencers: List[TopInfluencer] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "persona": self.persona.value,
            "national_count": self.national_count,
            "national_share": self.national_share,
            "regions": [
                {
                    "region": c.region,
                    "count": c.persona_distribution[self.persona],
                    "total_authors": c.total_authors,
                }
                for c in self.regions
            ],
            "influencers": [i.to_dict() for i in self.influencers],
        }


def persona_drilldown(
    snapshot: PersonaSnapshot, persona: PersonaType, influencer_limit: Optional[int] = None
) -> PersonaDrilldown:
    """Regions ranked by how many authors hold *persona*, plus its top influencers."""
    regions = [c for c in snapshot.clusters if c.persona_distribution.get(persona, 0) > 0]
    regions.sort(key=lambda c: c.persona_distribution[persona], reverse=True)

    influencers = [
        entry
        for cluster in snapshot.clusters
        for entry in cluster.top_influencers
        if entry.persona == persona
    ]
    if influencer_limit is not None:
        influencers = influencers[:influencer_limit]

    shares = persona_shares(snapshot.national_distribution)
    return PersonaDrilldown(
        persona=persona,
        national_count=snapshot.national_distribution.get(persona, 0),
        national_share=shares[persona],
        regions=regions,
        influencers=influencers,
    )
