"""Per-champion statistics aggregation.

Reduces participant rows into one stat line per champion. Performance
numbers come only from our tracked players (player_profile_id set);
enemy picks only count as "played against". Ban counts come from the
blue and red ban sequences of every match in scope.
"""

from __future__ import annotations

import logging
from collections import Counter
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
from riftdesk.models.types import ChampionStatLine
from riftdesk.roles import normalize_role

logger = logging.getLogger(__name__)


@dataclass
class ChampionStatsFilter:
    """Recognized filters for the champion stats list. All optional."""

    role: str | None = None
    game_version: str | None = None
    comp_style: str | None = None
    lane_style: str | None = None
    champion_class: str | None = None

    @property
    def normalized_role(self) -> str | None:
        """Role to filter on, or None for all roles."""
        role = normalize_role(self.role)
        return None if role in (None, "ALL") else role

    def accepts_definition(self, definition: ChampionDefinitionEntity | None) -> bool:
        """Check champion metadata against the class/style filters.

        A champion without a definition only passes when no metadata
        filter is set.
        """
        wanted = {
            "champion_class": self.champion_class,
            "comp_style": self.comp_style,
            "lane_style": self.lane_style,
        }
        for attr, value in wanted.items():
            if value is None:
                continue
            if definition is None or getattr(definition, attr) != value:
                return False
        return True


@dataclass
class _ChampionAccumulator:
    """Running totals for one champion."""

    name: str
    games: int = 0
    wins: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    cs: int = 0
    damage: int = 0
    played_against: int = 0
    bans: int = 0

    def is_relevant(self) -> bool:
        return self.games > 0 or self.played_against > 0 or self.bans > 0

    def to_line(self, definition: ChampionDefinitionEntity | None) -> ChampionStatLine:
        return ChampionStatLine(
            name=self.name,
            games=self.games,
            wins=self.wins,
            kills=self.kills,
            deaths=self.deaths,
            assists=self.assists,
            cs=self.cs,
            damage=self.damage,
            played_against=self.played_against,
            bans=self.bans,
            winrate=rates.winrate(self.wins, self.games),
            kda=rates.kda(self.kills, self.deaths, self.assists) if self.games > 0 else 0.0,
            avg_kills=rates.per_game(self.kills, self.games),
            avg_deaths=rates.per_game(self.deaths, self.games),
            avg_assists=rates.per_game(self.assists, self.games),
            avg_cs=rates.per_game_int(self.cs, self.games),
            avg_damage=rates.per_game_int(self.damage, self.games),
            champion_class=definition.champion_class if definition else None,
            lane_style=definition.lane_style if definition else None,
            comp_style=definition.comp_style if definition else None,
        )


def count_bans(matches: Iterable[MatchEntity]) -> Counter[str]:
    """Count ban occurrences over blue + red ban lists of every match."""
    counts: Counter[str] = Counter()
    for match in matches:
        for ban in [*match.blue_bans, *match.red_bans]:
            if ban:
                counts[ban] += 1
    return counts


def aggregate_champion_stats(
    participations: Iterable[ParticipationRecord],
    ban_matches: Iterable[MatchEntity],
    definitions: dict[str, ChampionDefinitionEntity] | None = None,
    filters: ChampionStatsFilter | None = None,
) -> list[ChampionStatLine]:
    """Aggregate participant rows into per-champion stat lines.

    Pure function - no database access.

    Args:
        participations: Participant rows tagged with their match.
        ban_matches: Matches whose ban lists are in scope.
        definitions: Champion metadata keyed by name.
        filters: Optional role/version/metadata filters.

    Returns:
        Stat lines sorted by games played (descending). Champions with no
        games, no games against and no bans are left out. Metadata
        filters only narrow participants, so banned champions stay listed.
    """
    definitions = definitions or {}
    filters = filters or ChampionStatsFilter()
    role = filters.normalized_role

    stats: dict[str, _ChampionAccumulator] = {}

    for name, count in count_bans(ban_matches).items():
        stats[name] = _ChampionAccumulator(name=name, bans=count)

    for record in participations:
        p = record.participant
        match = record.match

        if filters.game_version and match.game_version != filters.game_version:
            continue
        if role and normalize_role(p.position) != role:
            continue
        if not filters.accepts_definition(definitions.get(p.champion_name)):
            continue

        stat = stats.setdefault(p.champion_name, _ChampionAccumulator(name=p.champion_name))

        if p.is_tracked:
            stat.games += 1
            if match.result == "WIN":
                stat.wins += 1
            stat.kills += p.kills or 0
            stat.deaths += p.deaths or 0
            stat.assists += p.assists or 0
            stat.cs += p.cs or 0
            stat.damage += p.damage_dealt or 0
        elif p.is_enemy:
            stat.played_against += 1

    lines = [
        stat.to_line(definitions.get(name))
        for name, stat in stats.items()
        if stat.is_relevant()
    ]
    lines.sort(key=lambda line: (-line.games, line.name))
    return lines


def get_champion_stats_list(
    session: DbSession,
    filters: ChampionStatsFilter | None = None,
) -> list[ChampionStatLine]:
    """Compute the champion stats list from the database.

    Raises:
        DataAccessError: If the store cannot be read.
    """
    filters = filters or ChampionStatsFilter()

    participations = repo.get_participations(session, game_version=filters.game_version)
    ban_matches = repo.get_matches(session, game_version=filters.game_version)
    definitions = repo.get_champion_definitions(session)

    lines = aggregate_champion_stats(participations, ban_matches, definitions, filters)
    logger.debug(
        f"Aggregated {len(lines)} champions from {len(participations)} participants "
        f"and {len(ban_matches)} matches"
    )
    return lines
