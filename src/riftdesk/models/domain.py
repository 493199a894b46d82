"""Domain models for riftdesk.

Pure Python dataclasses representing domain entities.
These models are independent of SQLAlchemy and are what the
aggregation layer consumes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

MatchType = Literal["SCRIM", "SOLOQ", "TOURNAMENT"]
MatchResult = Literal["WIN", "LOSS", "REMAKE"]
Side = Literal["BLUE", "RED"]


# ============================================================================
# Match Domain
# ============================================================================


@dataclass
class ParticipantEntity:
    """Domain model for a single champion pick."""

    participant_id: str
    match_id: str
    champion_name: str
    is_enemy: bool
    position: str | None = None
    player_profile_id: str | None = None
    player_name: str | None = None
    summoner_name: str | None = None
    lane_opponent: str | None = None
    kills: int | None = None
    deaths: int | None = None
    assists: int | None = None
    cs: int | None = None
    damage_dealt: int | None = None
    vision_score: int | None = None

    @property
    def is_tracked(self) -> bool:
        """True when the pick belongs to one of our roster players."""
        return self.player_profile_id is not None


@dataclass
class MatchEntity:
    """Domain model for a match, optionally with its participants."""

    match_id: str
    date: datetime
    match_type: MatchType
    result: MatchResult | None = None
    our_side: Side | None = None
    blue_bans: list[str] = field(default_factory=list)
    red_bans: list[str] = field(default_factory=list)
    enemy_team_id: str | None = None
    enemy_team_name: str | None = None
    lineup_id: str | None = None
    duration: int | None = None
    game_version: str | None = None
    participants: list[ParticipantEntity] = field(default_factory=list)

    @property
    def enemy_bans(self) -> list[str]:
        """Bans made by the opposing side."""
        if self.our_side == "BLUE":
            return self.red_bans
        if self.our_side == "RED":
            return self.blue_bans
        return []


@dataclass
class ParticipationRecord:
    """A participant tagged with its parent match."""

    participant: ParticipantEntity
    match: MatchEntity


# ============================================================================
# Scouting Domain
# ============================================================================


@dataclass
class TeamEntity:
    """Domain model for a rival team."""

    team_id: str
    name: str
    is_rival: bool = True
    is_visible: bool = True
    notes: str | None = None
    opgg_url: str | None = None


@dataclass
class EnemyPlayerEntity:
    """Domain model for a rival roster member."""

    enemy_player_id: str
    team_id: str
    name: str
    role: str | None = None
    opgg_url: str | None = None
    notes: str | None = None


@dataclass
class EnemyBanEntity:
    """Domain model for a manually recorded rival ban tendency."""

    enemy_ban_id: str
    team_id: str
    champion_name: str
    count: int
    notes: str | None = None


# ============================================================================
# Champion / Tier List Domain
# ============================================================================


@dataclass
class ChampionDefinitionEntity:
    """Domain model for champion metadata."""

    name: str
    champion_class: str | None = None
    comp_style: str | None = None
    lane_style: str | None = None
    primary_role: str | None = None
    secondary_role: str | None = None
    notes: str | None = None


@dataclass
class TierListChampionEntity:
    """Domain model for a tier list entry."""

    champion_name: str
    tier: str
    role: str | None = None
    notes: str | None = None


@dataclass
class TierListEntity:
    """Domain model for a tier list with its entries."""

    tier_list_id: str
    name: str
    is_active: bool
    updated_at: datetime
    description: str | None = None
    lineup_id: str | None = None
    enemy_team_id: str | None = None
    champions: list[TierListChampionEntity] = field(default_factory=list)


# ============================================================================
# Draft Domain
# ============================================================================


@dataclass
class DraftPlanEntity:
    """Domain model for a draft-planning session."""

    draft_plan_id: str
    name: str
    our_side: Side
    lineup_id: str | None = None
    enemy_team_id: str | None = None
    ally_tier_list_id: str | None = None
