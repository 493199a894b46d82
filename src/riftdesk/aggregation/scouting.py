"""Rival team scouting reports.

Match results are stored from our perspective, so for a rival:
- stored LOSS -> the rival won
- stored WIN  -> the rival lost
REMAKE and unfinished games count toward total_matches only.
"""

from __future__ import annotations

import logging
from collections import Counter

from riftdesk.aggregation import rates
from riftdesk.db import repo
from riftdesk.db.repo import DbSession
from riftdesk.models.domain import (
    EnemyBanEntity,
    EnemyPlayerEntity,
    MatchEntity,
    TeamEntity,
    TierListEntity,
)
from riftdesk.models.types import (
    ChampionCount,
    EnemyPlayerDetail,
    RolePicks,
    ScoutedMatch,
    ScoutingReport,
    ScoutingStats,
    ScoutingTeamSummary,
    TeamProfile,
    TierListChampionDetail,
    TierListDetail,
)
from riftdesk.roles import CANONICAL_ROLES, normalize_role

logger = logging.getLogger(__name__)

TOP_BANS_LIMIT = 5
TOP_PICKS_LIMIT = 5
TOP_PICKS_PER_ROLE = 3


def rival_won(match: MatchEntity) -> bool:
    """True when the opponent won; results are stored from our side."""
    return match.result == "LOSS"


def rival_lost(match: MatchEntity) -> bool:
    """True when the opponent lost."""
    return match.result == "WIN"


def _top(counts: Counter[str], limit: int) -> list[ChampionCount]:
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [ChampionCount(champion=name, count=count) for name, count in ranked[:limit]]


def tier_list_detail(tier_list: TierListEntity) -> TierListDetail:
    """Convert a tier list entity to its API shape."""
    return TierListDetail(
        tier_list_id=tier_list.tier_list_id,
        name=tier_list.name,
        is_active=tier_list.is_active,
        updated_at=tier_list.updated_at,
        description=tier_list.description,
        lineup_id=tier_list.lineup_id,
        enemy_team_id=tier_list.enemy_team_id,
        champions=[TierListChampionDetail(**vars(c)) for c in tier_list.champions],
    )


def build_scouting_stats(
    matches: list[MatchEntity],
    manual_bans: list[EnemyBanEntity] | None = None,
) -> ScoutingStats:
    """Aggregate a rival's record and draft tendencies.

    Pure function - no database access.

    Args:
        matches: Matches against the rival, with the rival's picks
            (is_enemy participants) attached.
        manual_bans: Ban tendencies recorded by hand.

    Returns:
        ScoutingStats with the record from both perspectives.
    """
    total = len(matches)
    rival_wins = sum(1 for m in matches if rival_won(m))
    rival_losses = sum(1 for m in matches if rival_lost(m))

    ban_counts: Counter[str] = Counter()
    for ban in manual_bans or []:
        ban_counts[ban.champion_name] += ban.count
    for match in matches:
        for champion in match.enemy_bans:
            ban_counts[champion] += 1

    pick_counts: Counter[str] = Counter()
    role_picks: dict[str, Counter[str]] = {role: Counter() for role in CANONICAL_ROLES}
    for match in matches:
        for p in match.participants:
            if not p.is_enemy:
                continue
            pick_counts[p.champion_name] += 1
            role = normalize_role(p.position)
            if role in role_picks:
                role_picks[role][p.champion_name] += 1

    return ScoutingStats(
        total_matches=total,
        our_wins=rival_losses,
        our_losses=rival_wins,
        our_winrate=rates.winrate(rival_losses, total),
        rival_wins=rival_wins,
        rival_losses=rival_losses,
        winrate=rates.winrate(rival_wins, total),
        top_bans=_top(ban_counts, TOP_BANS_LIMIT),
        top_picks=_top(pick_counts, TOP_PICKS_LIMIT),
        top_picks_by_role=[
            RolePicks(role=role, champions=_top(counts, TOP_PICKS_PER_ROLE))
            for role, counts in role_picks.items()
        ],
    )


def build_scouting_report(
    team: TeamEntity,
    matches: list[MatchEntity],
    roster: list[EnemyPlayerEntity],
    manual_bans: list[EnemyBanEntity],
    tier_lists: list[TierListEntity],
) -> ScoutingReport:
    """Compose the full scouting report for a rival. Pure function."""
    return ScoutingReport(
        team=TeamProfile(
            team_id=team.team_id,
            name=team.name,
            is_rival=team.is_rival,
            notes=team.notes,
            opgg_url=team.opgg_url,
        ),
        stats=build_scouting_stats(matches, manual_bans),
        matches=[
            ScoutedMatch(
                match_id=m.match_id,
                date=m.date,
                match_type=m.match_type,
                result=m.result,
                our_side=m.our_side,
                blue_bans=m.blue_bans,
                red_bans=m.red_bans,
                enemy_picks=[p.champion_name for p in m.participants if p.is_enemy],
            )
            for m in matches
        ],
        roster=[
            EnemyPlayerDetail(
                enemy_player_id=player.enemy_player_id,
                name=player.name,
                role=normalize_role(player.role),
                opgg_url=player.opgg_url,
                notes=player.notes,
            )
            for player in roster
        ],
        tier_lists=[tier_list_detail(t) for t in tier_lists],
    )


def summarize_team(team: TeamEntity, matches: list[MatchEntity]) -> ScoutingTeamSummary:
    """Scouting list row: our record against the team and last meeting."""
    our_wins = sum(1 for m in matches if rival_lost(m))
    our_losses = sum(1 for m in matches if rival_won(m))
    return ScoutingTeamSummary(
        team_id=team.team_id,
        name=team.name,
        is_rival=team.is_rival,
        total_matches=len(matches),
        our_wins=our_wins,
        our_losses=our_losses,
        winrate=rates.winrate(our_wins, len(matches)),
        last_match=max((m.date for m in matches), default=None),
    )


def list_scouting_teams(session: DbSession) -> list[ScoutingTeamSummary]:
    """Summaries for every visible team, ordered by name."""
    teams = repo.get_visible_teams(session)
    matches_by_team = repo.get_match_results_by_team(session, [t.team_id for t in teams])
    return [summarize_team(team, matches_by_team[team.team_id]) for team in teams]


def get_scouting_report(session: DbSession, team_id: str) -> ScoutingReport | None:
    """Load and build the scouting report for a team.

    Returns:
        The report, or None if the team does not exist.

    Raises:
        DataAccessError: If the store cannot be read.
    """
    team = repo.get_team(session, team_id)
    if team is None:
        return None

    matches = repo.get_matches_against_team(session, team_id)
    report = build_scouting_report(
        team=team,
        matches=matches,
        roster=repo.get_enemy_players(session, team_id),
        manual_bans=repo.get_enemy_bans(session, team_id),
        tier_lists=repo.get_tier_lists_for_team(session, team_id),
    )
    logger.debug(f"Scouting report for {team.name}: {len(matches)} matches")
    return report
