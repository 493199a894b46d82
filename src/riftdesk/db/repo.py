"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping aggregation logic pure.
Returns domain models (not SQLAlchemy entities) to external callers.

Driver failures are logged and re-raised as DataAccessError so callers
only ever see one failure type from the data layer.
"""

from __future__ import annotations

import functools
import json
import logging
from typing import TYPE_CHECKING, Callable, Iterable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from riftdesk.db.schema import (
    ChampionDefinition,
    DraftPlan,
    EnemyBan,
    EnemyPlayer,
    Match,
    MatchParticipant,
    PlayerProfile,
    Team,
    TierList,
    TierListChampion,
)
from riftdesk.models.domain import (
    ChampionDefinitionEntity,
    DraftPlanEntity,
    EnemyBanEntity,
    EnemyPlayerEntity,
    MatchEntity,
    ParticipantEntity,
    ParticipationRecord,
    TeamEntity,
    TierListChampionEntity,
    TierListEntity,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

__all__ = ["DataAccessError", "DbSession"]

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Match types that count toward team statistics
COMPETITIVE_MATCH_TYPES = ("SCRIM", "TOURNAMENT")


class DataAccessError(RuntimeError):
    """Raised when the backing store cannot serve a query."""


def _wraps_db_errors(func: Callable[..., T]) -> Callable[..., T]:
    """Translate SQLAlchemy failures into DataAccessError."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> T:
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(f"Query {func.__name__} failed: {e}")
            raise DataAccessError(f"Could not load data ({func.__name__})") from e

    return wrapper


# ============================================================================
# Converters: SQLAlchemy -> Domain
# ============================================================================


def _parse_bans(raw: str | None, match_id: str) -> list[str]:
    """Decode a stored ban sequence, dropping empty slots."""
    if not raw:
        return []
    try:
        bans = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning(f"Malformed ban list on match {match_id}, treating as empty")
        return []
    if not isinstance(bans, list):
        logger.warning(f"Ban list on match {match_id} is not a list, treating as empty")
        return []
    return [b for b in bans if isinstance(b, str) and b]


def _match_to_entity(match: Match, enemy_team_name: str | None = None) -> MatchEntity:
    """Convert SQLAlchemy Match to domain entity (without participants)."""
    return MatchEntity(
        match_id=match.match_id,
        date=match.date,
        match_type=match.match_type,
        result=match.result,
        our_side=match.our_side,
        blue_bans=_parse_bans(match.blue_bans_json, match.match_id),
        red_bans=_parse_bans(match.red_bans_json, match.match_id),
        enemy_team_id=match.enemy_team_id,
        enemy_team_name=enemy_team_name,
        lineup_id=match.lineup_id,
        duration=match.duration,
        game_version=match.game_version,
    )


def _participant_to_entity(
    participant: MatchParticipant, player_name: str | None = None
) -> ParticipantEntity:
    """Convert SQLAlchemy MatchParticipant to domain entity."""
    return ParticipantEntity(
        participant_id=participant.participant_id,
        match_id=participant.match_id,
        champion_name=participant.champion_name,
        is_enemy=participant.is_enemy,
        position=participant.position,
        player_profile_id=participant.player_profile_id,
        player_name=player_name,
        summoner_name=participant.summoner_name,
        lane_opponent=participant.lane_opponent,
        kills=participant.kills,
        deaths=participant.deaths,
        assists=participant.assists,
        cs=participant.cs,
        damage_dealt=participant.damage_dealt,
        vision_score=participant.vision_score,
    )


def _team_to_entity(team: Team) -> TeamEntity:
    """Convert SQLAlchemy Team to domain entity."""
    return TeamEntity(
        team_id=team.team_id,
        name=team.name,
        is_rival=team.is_rival,
        is_visible=team.is_visible,
        notes=team.notes,
        opgg_url=team.opgg_url,
    )


def _enemy_player_to_entity(player: EnemyPlayer) -> EnemyPlayerEntity:
    """Convert SQLAlchemy EnemyPlayer to domain entity."""
    return EnemyPlayerEntity(
        enemy_player_id=player.enemy_player_id,
        team_id=player.team_id,
        name=player.name,
        role=player.role,
        opgg_url=player.opgg_url,
        notes=player.notes,
    )


def _enemy_ban_to_entity(ban: EnemyBan) -> EnemyBanEntity:
    """Convert SQLAlchemy EnemyBan to domain entity."""
    return EnemyBanEntity(
        enemy_ban_id=ban.enemy_ban_id,
        team_id=ban.team_id,
        champion_name=ban.champion_name,
        count=ban.count,
        notes=ban.notes,
    )


def _definition_to_entity(definition: ChampionDefinition) -> ChampionDefinitionEntity:
    """Convert SQLAlchemy ChampionDefinition to domain entity."""
    return ChampionDefinitionEntity(
        name=definition.name,
        champion_class=definition.champion_class,
        comp_style=definition.comp_style,
        lane_style=definition.lane_style,
        primary_role=definition.primary_role,
        secondary_role=definition.secondary_role,
        notes=definition.notes,
    )


def _tier_list_to_entity(
    tier_list: TierList, champions: list[TierListChampion]
) -> TierListEntity:
    """Convert SQLAlchemy TierList and its entries to domain entity."""
    return TierListEntity(
        tier_list_id=tier_list.tier_list_id,
        name=tier_list.name,
        is_active=tier_list.is_active,
        updated_at=tier_list.updated_at,
        description=tier_list.description,
        lineup_id=tier_list.lineup_id,
        enemy_team_id=tier_list.enemy_team_id,
        champions=[
            TierListChampionEntity(
                champion_name=c.champion_name,
                tier=c.tier,
                role=c.role,
                notes=c.notes,
            )
            for c in champions
        ],
    )


def _draft_plan_to_entity(plan: DraftPlan) -> DraftPlanEntity:
    """Convert SQLAlchemy DraftPlan to domain entity."""
    return DraftPlanEntity(
        draft_plan_id=plan.draft_plan_id,
        name=plan.name,
        our_side=plan.our_side,
        lineup_id=plan.lineup_id,
        enemy_team_id=plan.enemy_team_id,
        ally_tier_list_id=plan.ally_tier_list_id,
    )


# ============================================================================
# Match Repository
# ============================================================================


def _attach_participants(
    session: DbSession,
    matches: list[MatchEntity],
    *,
    is_enemy: bool | None = None,
) -> list[MatchEntity]:
    """Load participants for matches in one query and attach them."""
    if not matches:
        return matches

    by_id = {m.match_id: m for m in matches}
    query = (
        session.query(MatchParticipant, PlayerProfile.name)
        .outerjoin(
            PlayerProfile,
            MatchParticipant.player_profile_id == PlayerProfile.player_profile_id,
        )
        .filter(MatchParticipant.match_id.in_(list(by_id)))
    )
    if is_enemy is not None:
        query = query.filter(MatchParticipant.is_enemy == is_enemy)

    for participant, player_name in query.order_by(MatchParticipant.participant_id).all():
        by_id[participant.match_id].participants.append(
            _participant_to_entity(participant, player_name)
        )
    return matches


@_wraps_db_errors
def get_matches(session: DbSession, *, game_version: str | None = None) -> list[MatchEntity]:
    """Get all matches (ban lists included, participants not loaded)."""
    query = session.query(Match)
    if game_version:
        query = query.filter(Match.game_version == game_version)
    return [_match_to_entity(m) for m in query.all()]


@_wraps_db_errors
def get_participations(
    session: DbSession,
    *,
    game_version: str | None = None,
    champion_name: str | None = None,
) -> list[ParticipationRecord]:
    """Get every participant row tagged with its parent match, newest first."""
    query = (
        session.query(MatchParticipant, Match, PlayerProfile.name, Team.name)
        .join(Match, MatchParticipant.match_id == Match.match_id)
        .outerjoin(
            PlayerProfile,
            MatchParticipant.player_profile_id == PlayerProfile.player_profile_id,
        )
        .outerjoin(Team, Match.enemy_team_id == Team.team_id)
    )
    if game_version:
        query = query.filter(Match.game_version == game_version)
    if champion_name:
        query = query.filter(MatchParticipant.champion_name == champion_name)

    rows = query.order_by(Match.date.desc(), MatchParticipant.participant_id).all()

    # Share one MatchEntity per match across its participants
    matches: dict[str, MatchEntity] = {}
    records = []
    for participant, match, player_name, team_name in rows:
        if match.match_id not in matches:
            matches[match.match_id] = _match_to_entity(match, team_name)
        records.append(
            ParticipationRecord(
                participant=_participant_to_entity(participant, player_name),
                match=matches[match.match_id],
            )
        )
    return records


@_wraps_db_errors
def get_finished_matches(
    session: DbSession,
    *,
    match_types: Iterable[str] = COMPETITIVE_MATCH_TYPES,
    lineup_id: str | None = None,
) -> list[MatchEntity]:
    """Get finished matches of the given types with our (non-enemy) picks."""
    query = session.query(Match).filter(
        Match.match_type.in_(list(match_types)),
        Match.result.is_not(None),
    )
    if lineup_id:
        query = query.filter(Match.lineup_id == lineup_id)

    matches = [_match_to_entity(m) for m in query.order_by(Match.date.desc()).all()]
    return _attach_participants(session, matches, is_enemy=False)


@_wraps_db_errors
def get_matches_against_team(
    session: DbSession, team_id: str, *, enemy_picks_only: bool = True
) -> list[MatchEntity]:
    """Get matches where the team was the opponent, newest first."""
    rows = (
        session.query(Match, Team.name)
        .outerjoin(Team, Match.enemy_team_id == Team.team_id)
        .filter(Match.enemy_team_id == team_id)
        .order_by(Match.date.desc())
        .all()
    )
    matches = [_match_to_entity(m, team_name) for m, team_name in rows]
    return _attach_participants(
        session, matches, is_enemy=True if enemy_picks_only else None
    )


# ============================================================================
# Team Repository
# ============================================================================


@_wraps_db_errors
def get_team(session: DbSession, team_id: str) -> TeamEntity | None:
    """Get team by ID."""
    team = session.query(Team).filter(Team.team_id == team_id).first()
    return _team_to_entity(team) if team else None


@_wraps_db_errors
def get_visible_teams(session: DbSession) -> list[TeamEntity]:
    """Get all teams not soft-deleted, ordered by name."""
    teams = session.query(Team).filter(Team.is_visible.is_(True)).order_by(Team.name).all()
    return [_team_to_entity(t) for t in teams]


@_wraps_db_errors
def get_match_results_by_team(session: DbSession, team_ids: list[str]) -> dict[str, list[MatchEntity]]:
    """Get matches (no participants) grouped by enemy team, newest first."""
    grouped: dict[str, list[MatchEntity]] = {team_id: [] for team_id in team_ids}
    if not team_ids:
        return grouped
    matches = (
        session.query(Match)
        .filter(Match.enemy_team_id.in_(team_ids))
        .order_by(Match.date.desc())
        .all()
    )
    for match in matches:
        grouped[match.enemy_team_id].append(_match_to_entity(match))
    return grouped


@_wraps_db_errors
def get_enemy_players(session: DbSession, team_id: str) -> list[EnemyPlayerEntity]:
    """Get the known roster of a rival team."""
    players = (
        session.query(EnemyPlayer)
        .filter(EnemyPlayer.team_id == team_id)
        .order_by(EnemyPlayer.name)
        .all()
    )
    return [_enemy_player_to_entity(p) for p in players]


@_wraps_db_errors
def get_enemy_bans(session: DbSession, team_id: str) -> list[EnemyBanEntity]:
    """Get manually recorded bans of a rival team."""
    bans = session.query(EnemyBan).filter(EnemyBan.team_id == team_id).all()
    return [_enemy_ban_to_entity(b) for b in bans]


# ============================================================================
# Champion / Tier List Repository
# ============================================================================


@_wraps_db_errors
def get_champion_definitions(session: DbSession) -> dict[str, ChampionDefinitionEntity]:
    """Get all champion definitions keyed by champion name."""
    return {d.name: _definition_to_entity(d) for d in session.query(ChampionDefinition).all()}


@_wraps_db_errors
def get_champion_definition(session: DbSession, name: str) -> ChampionDefinitionEntity | None:
    """Get one champion definition."""
    definition = session.query(ChampionDefinition).filter(ChampionDefinition.name == name).first()
    return _definition_to_entity(definition) if definition else None


def _load_tier_list(session: DbSession, tier_list: TierList) -> TierListEntity:
    champions = (
        session.query(TierListChampion)
        .filter(TierListChampion.tier_list_id == tier_list.tier_list_id)
        .order_by(TierListChampion.tier, TierListChampion.champion_name)
        .all()
    )
    return _tier_list_to_entity(tier_list, champions)


@_wraps_db_errors
def get_tier_list(session: DbSession, tier_list_id: str) -> TierListEntity | None:
    """Get tier list by ID, with its entries."""
    tier_list = session.query(TierList).filter(TierList.tier_list_id == tier_list_id).first()
    return _load_tier_list(session, tier_list) if tier_list else None


@_wraps_db_errors
def get_latest_active_tier_list(
    session: DbSession, lineup_id: str | None = None
) -> TierListEntity | None:
    """Get the most recently updated active tier list, scoped to a lineup if given."""
    query = session.query(TierList).filter(TierList.is_active.is_(True))
    if lineup_id:
        query = query.filter(TierList.lineup_id == lineup_id)
    tier_list = query.order_by(TierList.updated_at.desc()).first()
    return _load_tier_list(session, tier_list) if tier_list else None


@_wraps_db_errors
def get_tier_lists_for_team(session: DbSession, team_id: str) -> list[TierListEntity]:
    """Get tier lists prepared against a rival team."""
    tier_lists = (
        session.query(TierList)
        .filter(TierList.enemy_team_id == team_id)
        .order_by(TierList.updated_at.desc())
        .all()
    )
    return [_load_tier_list(session, t) for t in tier_lists]


# ============================================================================
# Draft Repository
# ============================================================================


@_wraps_db_errors
def get_draft_plan(session: DbSession, draft_plan_id: str) -> DraftPlanEntity | None:
    """Get draft plan by ID."""
    plan = session.query(DraftPlan).filter(DraftPlan.draft_plan_id == draft_plan_id).first()
    return _draft_plan_to_entity(plan) if plan else None
