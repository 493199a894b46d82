"""Draft-planning context: tier list, our champion history, rival picks."""

from __future__ import annotations

import logging

from riftdesk.aggregation import rates
from riftdesk.aggregation.scouting import rival_won, tier_list_detail
from riftdesk.db import repo
from riftdesk.db.repo import DbSession
from riftdesk.models.domain import DraftPlanEntity, MatchEntity, TierListEntity
from riftdesk.models.types import DraftContext, EnemyChampionStat, OwnChampionStat

logger = logging.getLogger(__name__)


def build_own_stats(
    matches: list[MatchEntity],
    tier_list: TierListEntity | None = None,
) -> dict[str, OwnChampionStat]:
    """Our per-champion history merged with tier list priorities.

    Only tracked players count. Tier list champions we never played are
    included with zero numbers.
    """
    # name -> [played, wins, kills, deaths, assists]
    totals: dict[str, list[int]] = {}
    for match in matches:
        for p in match.participants:
            if not p.is_tracked:
                continue
            agg = totals.setdefault(p.champion_name, [0, 0, 0, 0, 0])
            agg[0] += 1
            if match.result == "WIN":
                agg[1] += 1
            agg[2] += p.kills or 0
            agg[3] += p.deaths or 0
            agg[4] += p.assists or 0

    stats = {
        name: OwnChampionStat(
            played=played,
            winrate=rates.winrate(wins, played),
            kda=rates.kda(kills, deaths, assists),
        )
        for name, (played, wins, kills, deaths, assists) in totals.items()
    }

    if tier_list is not None:
        for entry in tier_list.champions:
            stat = stats.setdefault(entry.champion_name, OwnChampionStat())
            stat.tier = entry.tier
            stat.role = entry.role

    return stats


def build_enemy_stats(matches: list[MatchEntity]) -> dict[str, EnemyChampionStat]:
    """A rival's picks with winrate from the rival's perspective."""
    # name -> [played, rival wins]
    totals: dict[str, list[int]] = {}
    for match in matches:
        won = rival_won(match)
        for p in match.participants:
            if not p.is_enemy:
                continue
            agg = totals.setdefault(p.champion_name, [0, 0])
            agg[0] += 1
            if won:
                agg[1] += 1

    return {
        name: EnemyChampionStat(played=played, winrate=rates.winrate(wins, played))
        for name, (played, wins) in totals.items()
    }


def build_draft_context(
    tier_list: TierListEntity | None,
    own_matches: list[MatchEntity],
    enemy_matches: list[MatchEntity] | None = None,
) -> DraftContext:
    """Merge tier list, own history and rival history. Pure function."""
    return DraftContext(
        tier_list=tier_list_detail(tier_list) if tier_list is not None else None,
        our_stats=build_own_stats(own_matches, tier_list),
        enemy_stats=build_enemy_stats(enemy_matches or []),
    )


def resolve_tier_list(session: DbSession, draft: DraftPlanEntity) -> TierListEntity | None:
    """The draft's own tier list, else the latest active one for its lineup."""
    if draft.ally_tier_list_id:
        tier_list = repo.get_tier_list(session, draft.ally_tier_list_id)
        if tier_list is None:
            logger.warning(
                f"Draft {draft.draft_plan_id} references missing tier list "
                f"{draft.ally_tier_list_id}"
            )
        return tier_list
    return repo.get_latest_active_tier_list(session, draft.lineup_id)


def get_draft_context(session: DbSession, draft: DraftPlanEntity) -> DraftContext:
    """Load everything the draft screen needs for a draft plan.

    Raises:
        DataAccessError: If the store cannot be read.
    """
    tier_list = resolve_tier_list(session, draft)
    own_matches = repo.get_finished_matches(session, lineup_id=draft.lineup_id)

    enemy_matches: list[MatchEntity] = []
    if draft.enemy_team_id:
        enemy_matches = repo.get_matches_against_team(session, draft.enemy_team_id)

    return build_draft_context(tier_list, own_matches, enemy_matches)
