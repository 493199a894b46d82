"""Pydantic models for the riftdesk API.

Aggregators return these directly; routes use them as response models.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

# ============================================================================
# Shared
# ============================================================================


class ChampionCount(BaseModel):
    """A champion with an occurrence count."""

    champion: str
    count: int


class SideSplit(BaseModel):
    """Occurrences split by map side."""

    total: int = 0
    blue: int = 0
    red: int = 0


class ChampionDefinitionDetail(BaseModel):
    """Champion metadata for API response."""

    name: str
    champion_class: str | None = None
    comp_style: str | None = None
    lane_style: str | None = None
    primary_role: str | None = None
    secondary_role: str | None = None
    notes: str | None = None


class TierListChampionDetail(BaseModel):
    """Tier list entry for API response."""

    champion_name: str
    tier: str
    role: str | None = None
    notes: str | None = None


class TierListDetail(BaseModel):
    """Tier list for API response."""

    tier_list_id: str
    name: str
    is_active: bool
    updated_at: datetime
    description: str | None = None
    lineup_id: str | None = None
    enemy_team_id: str | None = None
    champions: list[TierListChampionDetail]


# ============================================================================
# Champion statistics
# ============================================================================


class ChampionStatLine(BaseModel):
    """Aggregated statistics for one champion.

    Performance fields only count our tracked players; enemy picks only
    feed played_against.
    """

    name: str
    games: int
    wins: int
    kills: int
    deaths: int
    assists: int
    cs: int
    damage: int
    played_against: int
    bans: int
    winrate: int
    kda: float
    avg_kills: float
    avg_deaths: float
    avg_assists: float
    avg_cs: int
    avg_damage: int
    champion_class: str | None = None
    lane_style: str | None = None
    comp_style: str | None = None


class ChampionTotals(BaseModel):
    """Our combined performance on a champion."""

    games: int
    wins: int
    kills: int
    deaths: int
    assists: int
    cs: int
    duration: int
    winrate: int
    kda: float
    csm: float


class PlayedAgainstRecord(BaseModel):
    """Our record against a champion (wins/losses from our perspective)."""

    total: int = 0
    wins: int = 0
    losses: int = 0


class RoleStatLine(BaseModel):
    """Our performance on a champion in one role."""

    role: str
    games: int
    wins: int
    kills: int
    deaths: int
    assists: int
    winrate: int
    kda: float


class PlayerStatLine(BaseModel):
    """One player's performance on a champion."""

    name: str
    games: int
    wins: int
    kills: int
    deaths: int
    assists: int
    winrate: int
    kda: float


class ChampionMatchLine(BaseModel):
    """A single game on a champion, ours or against us."""

    match_id: str
    player: str
    is_my_team: bool
    result: str | None
    kda: str
    csm: float
    opponent_champion: str | None
    date: datetime
    match_type: str
    side: str | None
    enemy_team: str


class ChampionDetail(BaseModel):
    """Everything known about one champion."""

    name: str
    definition: ChampionDefinitionDetail | None
    stats: ChampionTotals
    bans: SideSplit
    picks: SideSplit
    played_against: PlayedAgainstRecord
    role_stats: list[RoleStatLine]
    player_stats: list[PlayerStatLine]
    matches: list[ChampionMatchLine]


class RecordSummary(BaseModel):
    """Win/loss record from our perspective."""

    total_matches: int
    wins: int
    losses: int
    winrate: int


class SideRecord(BaseModel):
    """Games played and winrate on one side."""

    played: int
    winrate: int


class TopChampionLine(BaseModel):
    """A most-played champion in the global overview."""

    name: str
    played: int
    winrate: int
    kda: float


class GlobalStats(BaseModel):
    """Team-wide overview over finished scrims and tournament games."""

    overview: RecordSummary
    sides: dict[Literal["blue", "red"], SideRecord]
    top_champions: list[TopChampionLine]


# ============================================================================
# Scouting
# ============================================================================


class ScoutingTeamSummary(BaseModel):
    """A rival team row in the scouting list."""

    team_id: str
    name: str
    is_rival: bool
    total_matches: int
    our_wins: int
    our_losses: int
    winrate: int
    last_match: datetime | None


class TeamProfile(BaseModel):
    """Rival team profile."""

    team_id: str
    name: str
    is_rival: bool
    notes: str | None = None
    opgg_url: str | None = None


class EnemyPlayerDetail(BaseModel):
    """Rival roster member."""

    enemy_player_id: str
    name: str
    role: str | None = None
    opgg_url: str | None = None
    notes: str | None = None


class RolePicks(BaseModel):
    """Most played champions by a rival in one role."""

    role: str
    champions: list[ChampionCount]


class ScoutingStats(BaseModel):
    """Aggregated record and draft tendencies of a rival.

    `winrate` is from the rival's perspective; `our_winrate` from ours.
    """

    total_matches: int
    our_wins: int
    our_losses: int
    our_winrate: int
    rival_wins: int
    rival_losses: int
    winrate: int
    top_bans: list[ChampionCount]
    top_picks: list[ChampionCount]
    top_picks_by_role: list[RolePicks]


class ScoutedMatch(BaseModel):
    """A match played against the rival."""

    match_id: str
    date: datetime
    match_type: str
    result: str | None
    our_side: str | None
    blue_bans: list[str]
    red_bans: list[str]
    enemy_picks: list[str]


class ScoutingReport(BaseModel):
    """Full scouting report for a rival team."""

    team: TeamProfile
    stats: ScoutingStats
    matches: list[ScoutedMatch]
    roster: list[EnemyPlayerDetail]
    tier_lists: list[TierListDetail]


# ============================================================================
# Draft planning
# ============================================================================


class OwnChampionStat(BaseModel):
    """Our history on a champion merged with tier list priority."""

    played: int = 0
    winrate: int = 0
    kda: float = 0.0
    tier: str | None = None
    role: str | None = None


class EnemyChampionStat(BaseModel):
    """A rival's history on a champion (winrate from their perspective)."""

    played: int
    winrate: int


class DraftContext(BaseModel):
    """Data backing the draft-planning screen."""

    tier_list: TierListDetail | None
    our_stats: dict[str, OwnChampionStat] = Field(default_factory=dict)
    enemy_stats: dict[str, EnemyChampionStat] = Field(default_factory=dict)
