"""Single-champion breakdown: totals, sides, roles, players and history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from riftdesk.aggregation import rates
from riftdesk.db import repo
from riftdesk.db.repo import DbSession
from riftdesk.models.domain import (
    ChampionDefinitionEntity,
    MatchEntity,
    ParticipationRecord,
)
from riftdesk.models.types import (
    ChampionDefinitionDetail,
    ChampionDetail,
    ChampionMatchLine,
    ChampionTotals,
    PlayedAgainstRecord,
    PlayerStatLine,
    RoleStatLine,
    SideSplit,
)
from riftdesk.roles import normalize_role


@dataclass
class _Tally:
    games: int = 0
    wins: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0

    def add(self, won: bool, kills: int, deaths: int, assists: int) -> None:
        self.games += 1
        if won:
            self.wins += 1
        self.kills += kills
        self.deaths += deaths
        self.assists += assists


def _count_side_bans(champion_name: str, matches: Iterable[MatchEntity]) -> SideSplit:
    bans = SideSplit()
    for match in matches:
        if champion_name in match.blue_bans:
            bans.total += 1
            bans.blue += 1
        if champion_name in match.red_bans:
            bans.total += 1
            bans.red += 1
    return bans


def _match_line(record: ParticipationRecord) -> ChampionMatchLine:
    p = record.participant
    match = record.match

    return ChampionMatchLine(
        match_id=match.match_id,
        player=p.player_name or p.summoner_name or ("Opponent" if p.is_enemy else "Unknown"),
        is_my_team=p.is_tracked,
        result=match.result,
        kda=f"{p.kills or 0}/{p.deaths or 0}/{p.assists or 0}",
        csm=rates.per_minute(p.cs or 0, match.duration or 0),
        opponent_champion=p.lane_opponent,
        date=match.date,
        match_type=match.match_type,
        side=match.our_side,
        enemy_team=match.enemy_team_name or "SoloQ",
    )


def build_champion_detail(
    champion_name: str,
    participations: list[ParticipationRecord],
    ban_matches: Iterable[MatchEntity],
    definition: ChampionDefinitionEntity | None = None,
) -> ChampionDetail:
    """Build the detail view for one champion.

    Pure function - no database access. `participations` should already
    be restricted to the champion and ordered newest first.
    """
    totals = _Tally()
    cs_total = 0
    duration_total = 0
    picks = SideSplit()
    played_against = PlayedAgainstRecord()
    by_role: dict[str, _Tally] = {}
    by_player: dict[str, _Tally] = {}

    for record in participations:
        p = record.participant
        match = record.match
        won = match.result == "WIN"
        kills, deaths, assists = p.kills or 0, p.deaths or 0, p.assists or 0

        if p.is_tracked:
            totals.add(won, kills, deaths, assists)
            cs_total += p.cs or 0
            duration_total += match.duration or 0

            picks.total += 1
            if match.our_side == "BLUE":
                picks.blue += 1
            elif match.our_side == "RED":
                picks.red += 1

            role = normalize_role(p.position) or "UNKNOWN"
            by_role.setdefault(role, _Tally()).add(won, kills, deaths, assists)

            player = p.player_name or p.summoner_name or "Unknown"
            by_player.setdefault(player, _Tally()).add(won, kills, deaths, assists)
        elif p.is_enemy:
            # Stored result is ours: a WIN means we beat this pick
            played_against.total += 1
            if won:
                played_against.wins += 1
            else:
                played_against.losses += 1

    stats = ChampionTotals(
        games=totals.games,
        wins=totals.wins,
        kills=totals.kills,
        deaths=totals.deaths,
        assists=totals.assists,
        cs=cs_total,
        duration=duration_total,
        winrate=rates.winrate(totals.wins, totals.games),
        kda=rates.kda(totals.kills, totals.deaths, totals.assists, digits=2),
        csm=rates.per_minute(cs_total, duration_total),
    )

    return ChampionDetail(
        name=champion_name,
        definition=(
            ChampionDefinitionDetail(**vars(definition)) if definition is not None else None
        ),
        stats=stats,
        bans=_count_side_bans(champion_name, ban_matches),
        picks=picks,
        played_against=played_against,
        role_stats=[
            RoleStatLine(
                role=role,
                games=t.games,
                wins=t.wins,
                kills=t.kills,
                deaths=t.deaths,
                assists=t.assists,
                winrate=rates.winrate(t.wins, t.games),
                kda=rates.kda(t.kills, t.deaths, t.assists, digits=2),
            )
            for role, t in by_role.items()
        ],
        player_stats=[
            PlayerStatLine(
                name=name,
                games=t.games,
                wins=t.wins,
                kills=t.kills,
                deaths=t.deaths,
                assists=t.assists,
                winrate=rates.winrate(t.wins, t.games),
                kda=rates.kda(t.kills, t.deaths, t.assists, digits=2),
            )
            for name, t in by_player.items()
        ],
        matches=[_match_line(record) for record in participations],
    )


def get_champion_detail(session: DbSession, champion_name: str) -> ChampionDetail:
    """Load and build the detail view for one champion.

    Raises:
        DataAccessError: If the store cannot be read.
    """
    definition = repo.get_champion_definition(session, champion_name)
    participations = repo.get_participations(session, champion_name=champion_name)
    ban_matches = repo.get_matches(session)
    return build_champion_detail(champion_name, participations, ban_matches, definition)
