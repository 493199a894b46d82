"""Database schema for riftdesk.

Tables for match history, rival scouting, champion metadata and draft
planning. Ban sequences are stored as JSON text since SQLite has no
array column type.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Lineup(Base):
    """A named roster grouping (main roster, academy)."""

    __tablename__ = "lineups"

    lineup_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)


class PlayerProfile(Base):
    """A tracked member of our roster."""

    __tablename__ = "player_profiles"

    player_profile_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    position: Mapped[str | None] = mapped_column(String(16), nullable=True)
    lineup_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("lineups.lineup_id"), nullable=True
    )


class Team(Base):
    """A rival organization scouted by the staff."""

    __tablename__ = "teams"

    team_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    is_rival: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    opgg_url: Mapped[str | None] = mapped_column(String(512), nullable=True)


class EnemyPlayer(Base):
    """Known roster member of a rival team."""

    __tablename__ = "enemy_players"

    enemy_player_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    team_id: Mapped[str] = mapped_column(String(64), ForeignKey("teams.team_id"), nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    role: Mapped[str | None] = mapped_column(String(16), nullable=True)
    opgg_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)


class EnemyBan(Base):
    """Manually recorded ban tendency of a rival (e.g. from VODs).

    Invariant: UNIQUE(team_id, champion_name)
    """

    __tablename__ = "enemy_bans"

    enemy_ban_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    team_id: Mapped[str] = mapped_column(String(64), ForeignKey("teams.team_id"), nullable=False)
    champion_name: Mapped[str] = mapped_column(String(64), nullable=False)
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (UniqueConstraint("team_id", "champion_name", name="uq_enemy_ban"),)


class Match(Base):
    """A recorded game.

    `result` is always from our side's perspective and is NULL until the
    game is finished.
    """

    __tablename__ = "matches"

    match_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    match_type: Mapped[str] = mapped_column(String(16), nullable=False, default="SCRIM")
    result: Mapped[str | None] = mapped_column(String(8), nullable=True)
    our_side: Mapped[str | None] = mapped_column(String(8), nullable=True)
    blue_bans_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    red_bans_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    enemy_team_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("teams.team_id"), nullable=True
    )
    lineup_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("lineups.lineup_id"), nullable=True
    )
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    game_version: Mapped[str | None] = mapped_column(String(16), nullable=True)


class MatchParticipant(Base):
    """One champion pick within a match.

    Ally rows linked to a player profile carry our performance stats.
    Enemy rows (is_enemy) never have a player profile.
    """

    __tablename__ = "match_participants"

    participant_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    match_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("matches.match_id"), nullable=False
    )
    champion_name: Mapped[str] = mapped_column(String(64), nullable=False)
    position: Mapped[str | None] = mapped_column(String(16), nullable=True)
    is_enemy: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    player_profile_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("player_profiles.player_profile_id"), nullable=True
    )
    summoner_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    lane_opponent: Mapped[str | None] = mapped_column(String(64), nullable=True)
    kills: Mapped[int | None] = mapped_column(Integer, nullable=True)
    deaths: Mapped[int | None] = mapped_column(Integer, nullable=True)
    assists: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cs: Mapped[int | None] = mapped_column(Integer, nullable=True)
    damage_dealt: Mapped[int | None] = mapped_column(Integer, nullable=True)
    vision_score: Mapped[int | None] = mapped_column(Integer, nullable=True)


class ChampionDefinition(Base):
    """Champion metadata, independent of match history."""

    __tablename__ = "champion_definitions"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    champion_class: Mapped[str | None] = mapped_column(String(32), nullable=True)
    comp_style: Mapped[str | None] = mapped_column(String(32), nullable=True)
    lane_style: Mapped[str | None] = mapped_column(String(32), nullable=True)
    primary_role: Mapped[str | None] = mapped_column(String(16), nullable=True)
    secondary_role: Mapped[str | None] = mapped_column(String(16), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)


class TierList(Base):
    """A ranked set of champion priorities, global or per lineup/rival."""

    __tablename__ = "tier_lists"

    tier_list_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    lineup_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("lineups.lineup_id"), nullable=True
    )
    enemy_team_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("teams.team_id"), nullable=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )


class TierListChampion(Base):
    """A champion entry in a tier list.

    Invariant: UNIQUE(tier_list_id, champion_name, role)
    """

    __tablename__ = "tier_list_champions"

    tier_list_champion_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    tier_list_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("tier_lists.tier_list_id"), nullable=False
    )
    champion_name: Mapped[str] = mapped_column(String(64), nullable=False)
    tier: Mapped[str] = mapped_column(String(8), nullable=False)
    role: Mapped[str | None] = mapped_column(String(16), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("tier_list_id", "champion_name", "role", name="uq_tier_list_entry"),
    )


class DraftPlan(Base):
    """A draft-planning session."""

    __tablename__ = "draft_plans"

    draft_plan_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    our_side: Mapped[str] = mapped_column(String(8), nullable=False, default="BLUE")
    lineup_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("lineups.lineup_id"), nullable=True
    )
    enemy_team_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("teams.team_id"), nullable=True
    )
    ally_tier_list_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("tier_lists.tier_list_id"), nullable=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )
