#!/usr/bin/env python3
"""Seed a demo database with a small match history.

Usage:
    python scripts/seed_demo.py

This script:
1. Initializes the demo database
2. Seeds a lineup, roster, rival team and champion metadata
3. Records a handful of scrims against the rival, with bans and picks
4. Adds an active tier list and a draft plan
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from riftdesk.db.schema import (  # noqa: E402
    ChampionDefinition,
    DraftPlan,
    EnemyBan,
    EnemyPlayer,
    Lineup,
    Match,
    MatchParticipant,
    PlayerProfile,
    Team,
    TierList,
    TierListChampion,
)
from riftdesk.db.session import get_db_session, init_db  # noqa: E402

DEMO_DB_PATH = PROJECT_ROOT / "demo.db"

DEMO_LINEUP_ID = "main"
DEMO_TEAM_ID = "rival-1"

# (position, player name, champion) for our side
OUR_ROSTER = [
    ("TOP", "Kaiser", "Gnar"),
    ("JUNGLE", "Vex", "Vi"),
    ("MID", "Lumen", "Ahri"),
    ("ADC", "Arrow", "Jinx"),
    ("SUPPORT", "Anchor", "Nautilus"),
]

# Rival picks; BOT is a legacy label kept to exercise normalization
RIVAL_PICKS = [
    ("TOP", "Renekton"),
    ("JUNGLE", "Lee Sin"),
    ("MID", "Syndra"),
    ("BOT", "Kai'Sa"),
    ("SUPPORT", "Rakan"),
]

# (result from our side, our side, kills/deaths/assists for our mid)
DEMO_MATCHES = [
    ("WIN", "BLUE", (5, 2, 3)),
    ("LOSS", "RED", (2, 4, 6)),
    ("WIN", "BLUE", (7, 0, 1)),
    ("LOSS", "BLUE", (1, 3, 2)),
]

DEFINITIONS = [
    ChampionDefinition(name="Ahri", champion_class="MAGE", comp_style="PICK", lane_style="SOLO"),
    ChampionDefinition(name="Gnar", champion_class="FIGHTER", comp_style="TEAMFIGHT", lane_style="SOLO"),
    ChampionDefinition(name="Jinx", champion_class="MARKSMAN", comp_style="TEAMFIGHT", lane_style="DUO"),
    ChampionDefinition(name="Zed", champion_class="ASSASSIN", comp_style="PICK", lane_style="SOLO"),
]


def seed_database(db_path: Path = DEMO_DB_PATH) -> None:
    """Seed the demo database."""
    init_db(db_path)
    with get_db_session(db_path) as session:
        if session.query(Team).filter(Team.team_id == DEMO_TEAM_ID).first():
            print(f"Demo data already exists in {db_path}")
            return

        print("Creating lineup and roster...")
        session.add(Lineup(lineup_id=DEMO_LINEUP_ID, name="Main Roster"))
        for position, name, _ in OUR_ROSTER:
            session.add(
                PlayerProfile(
                    player_profile_id=f"player-{name.lower()}",
                    name=name,
                    position=position,
                    lineup_id=DEMO_LINEUP_ID,
                )
            )

        print("Creating rival team...")
        session.add(Team(team_id=DEMO_TEAM_ID, name="Crimson Wolves", notes="Early game focused"))
        for position, _ in RIVAL_PICKS:
            session.add(
                EnemyPlayer(
                    enemy_player_id=f"{DEMO_TEAM_ID}-{position.lower()}",
                    team_id=DEMO_TEAM_ID,
                    name=f"Wolf {position.title()}",
                    role=position,
                )
            )
        session.add(
            EnemyBan(enemy_ban_id="ban-1", team_id=DEMO_TEAM_ID, champion_name="Zed", count=2)
        )
        session.add_all(DEFINITIONS)

        print("Creating matches...")
        start = datetime.now(timezone.utc) - timedelta(days=len(DEMO_MATCHES))
        for i, (result, side, (kills, deaths, assists)) in enumerate(DEMO_MATCHES):
            match_id = f"match-{i + 1}"
            session.add(
                Match(
                    match_id=match_id,
                    date=start + timedelta(days=i),
                    match_type="SCRIM",
                    result=result,
                    our_side=side,
                    blue_bans_json=json.dumps(["Zed", "Yone", "Azir"]),
                    red_bans_json=json.dumps(["Zed", "Orianna", "Taliyah"]),
                    enemy_team_id=DEMO_TEAM_ID,
                    lineup_id=DEMO_LINEUP_ID,
                    duration=1800,
                    game_version="14.10",
                )
            )
            for position, name, champion in OUR_ROSTER:
                is_mid = position == "MID"
                session.add(
                    MatchParticipant(
                        participant_id=f"{match_id}-{name.lower()}",
                        match_id=match_id,
                        champion_name=champion,
                        position=position,
                        is_enemy=False,
                        player_profile_id=f"player-{name.lower()}",
                        kills=kills if is_mid else 2,
                        deaths=deaths if is_mid else 2,
                        assists=assists if is_mid else 5,
                        cs=250,
                        damage_dealt=18000,
                    )
                )
            for position, champion in RIVAL_PICKS:
                session.add(
                    MatchParticipant(
                        participant_id=f"{match_id}-enemy-{position.lower()}",
                        match_id=match_id,
                        champion_name=champion,
                        position=position,
                        is_enemy=True,
                    )
                )

        print("Creating tier list and draft plan...")
        session.add(
            TierList(
                tier_list_id="tl-main",
                name="Main Roster Priorities",
                is_active=True,
                lineup_id=DEMO_LINEUP_ID,
            )
        )
        for tier, champion, role in [("S", "Ahri", "MID"), ("A", "Azir", "MID"), ("S", "Jinx", "ADC")]:
            session.add(
                TierListChampion(
                    tier_list_champion_id=f"tl-main-{champion.lower()}",
                    tier_list_id="tl-main",
                    champion_name=champion,
                    tier=tier,
                    role=role,
                )
            )
        session.add(
            DraftPlan(
                draft_plan_id="draft-1",
                name="Wolves Finals Prep",
                our_side="BLUE",
                lineup_id=DEMO_LINEUP_ID,
                enemy_team_id=DEMO_TEAM_ID,
            )
        )

    print("Database seeded successfully!")


def main() -> int:
    """Main entry point."""
    print("=" * 60)
    print("riftdesk Demo Seeding Script")
    print("=" * 60)

    seed_database()

    print(f"\nDatabase: {DEMO_DB_PATH}")
    print(f"Serve with: RIFTDESK_DATABASE_PATH={DEMO_DB_PATH} uvicorn riftdesk.api.app:app")
    return 0


if __name__ == "__main__":
    sys.exit(main())
