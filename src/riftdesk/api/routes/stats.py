"""Champion statistics API endpoints.

GET /api/stats/champions - Per-champion stats list (filterable)
GET /api/stats/champions/{champion_name} - Single champion breakdown
GET /api/stats/global - Team-wide overview
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from riftdesk.aggregation.champion_detail import get_champion_detail
from riftdesk.aggregation.champion_stats import ChampionStatsFilter, get_champion_stats_list
from riftdesk.aggregation.global_stats import get_global_stats
from riftdesk.api.app import get_db_session
from riftdesk.db.repo import DbSession
from riftdesk.models.types import ChampionDetail, ChampionStatLine, GlobalStats

router = APIRouter()


@router.get("/stats/champions", response_model=list[ChampionStatLine])
def list_champion_stats(
    role: str | None = Query(default=None, description="TOP/JUNGLE/MID/ADC/SUPPORT or ALL"),
    game_version: str | None = None,
    comp_style: str | None = None,
    lane_style: str | None = None,
    champion_class: str | None = None,
    session: DbSession = Depends(get_db_session),
) -> list[ChampionStatLine]:
    """Get aggregated stats for every champion in scope.

    Args:
        role: Restrict to picks in this role.
        game_version: Restrict to matches on this patch.
        comp_style: Restrict to champions with this tactical style.
        lane_style: Restrict to champions with this lane allocation.
        champion_class: Restrict to champions of this class.
        session: Database session (injected).

    Returns:
        Stat lines sorted by games played.
    """
    filters = ChampionStatsFilter(
        role=role,
        game_version=game_version,
        comp_style=comp_style,
        lane_style=lane_style,
        champion_class=champion_class,
    )
    return get_champion_stats_list(session, filters)


@router.get("/stats/champions/{champion_name}", response_model=ChampionDetail)
def champion_detail(
    champion_name: str,
    session: DbSession = Depends(get_db_session),
) -> ChampionDetail:
    """Get the detail view for one champion.

    Champions with no history return an empty breakdown, not 404.
    """
    return get_champion_detail(session, champion_name)


@router.get("/stats/global", response_model=GlobalStats)
def global_stats(
    lineup_id: str | None = None,
    session: DbSession = Depends(get_db_session),
) -> GlobalStats:
    """Get our overall record over finished scrims and tournament games."""
    return get_global_stats(session, lineup_id=lineup_id)
