"""Team-wide overview over finished scrims and tournament games."""

from __future__ import annotations

from riftdesk.aggregation import rates
from riftdesk.db import repo
from riftdesk.db.repo import DbSession
from riftdesk.models.domain import MatchEntity
from riftdesk.models.types import GlobalStats, RecordSummary, SideRecord, TopChampionLine

TOP_CHAMPIONS_LIMIT = 10


def _side_record(matches: list[MatchEntity], side: str) -> SideRecord:
    played = [m for m in matches if m.our_side == side]
    wins = sum(1 for m in played if m.result == "WIN")
    return SideRecord(played=len(played), winrate=rates.winrate(wins, len(played)))


def build_global_stats(matches: list[MatchEntity]) -> GlobalStats:
    """Summarize our record, side split and most played champions.

    Pure function - no database access. Only tracked participants
    count toward champion numbers.
    """
    wins = sum(1 for m in matches if m.result == "WIN")
    losses = sum(1 for m in matches if m.result == "LOSS")

    # name -> [played, wins, kills, deaths, assists]
    champions: dict[str, list[int]] = {}
    for match in matches:
        for p in match.participants:
            if not p.is_tracked:
                continue
            agg = champions.setdefault(p.champion_name, [0, 0, 0, 0, 0])
            agg[0] += 1
            if match.result == "WIN":
                agg[1] += 1
            agg[2] += p.kills or 0
            agg[3] += p.deaths or 0
            agg[4] += p.assists or 0

    top = sorted(champions.items(), key=lambda item: (-item[1][0], item[0]))
    top_champions = [
        TopChampionLine(
            name=name,
            played=played,
            winrate=rates.winrate(won, played),
            kda=rates.kda(kills, deaths, assists, digits=2),
        )
        for name, (played, won, kills, deaths, assists) in top[:TOP_CHAMPIONS_LIMIT]
    ]

    return GlobalStats(
        overview=RecordSummary(
            total_matches=len(matches),
            wins=wins,
            losses=losses,
            winrate=rates.winrate(wins, len(matches)),
        ),
        sides={
            "blue": _side_record(matches, "BLUE"),
            "red": _side_record(matches, "RED"),
        },
        top_champions=top_champions,
    )


def get_global_stats(session: DbSession, lineup_id: str | None = None) -> GlobalStats:
    """Load finished competitive matches and summarize them."""
    return build_global_stats(repo.get_finished_matches(session, lineup_id=lineup_id))
