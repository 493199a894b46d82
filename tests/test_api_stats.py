"""Tests for statistics API endpoints."""

import json
from datetime import datetime

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from riftdesk.db.schema import (
    Base,
    ChampionDefinition,
    Match,
    MatchParticipant,
    PlayerProfile,
)


def create_test_app_and_client():
    """Create app with test database and return (client, engine)."""
    from riftdesk.api.app import create_app, get_db_session

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    app = create_app()

    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db
    client = TestClient(app)

    return client, engine


def setup_test_data(engine) -> None:
    """Two won scrims on Ahri, one enemy Ahri, bans on Zed."""
    with Session(engine) as db_session:
        db_session.add_all(
            [
                ChampionDefinition(name="Ahri", champion_class="MAGE", lane_style="SOLO"),
                ChampionDefinition(name="Jinx", champion_class="MARKSMAN"),
                PlayerProfile(player_profile_id="pp-1", name="Lumen", position="MID"),
                PlayerProfile(player_profile_id="pp-2", name="Arrow", position="ADC"),
            ]
        )
        for i, (kills, deaths, assists) in enumerate([(5, 2, 3), (7, 0, 1)], start=1):
            db_session.add(
                Match(
                    match_id=f"m{i}",
                    date=datetime(2024, 5, i),
                    match_type="SCRIM",
                    result="WIN",
                    our_side="BLUE",
                    blue_bans_json=json.dumps(["Zed"]),
                    red_bans_json=json.dumps(["Zed" if i == 1 else "Azir"]),
                    duration=1800,
                    game_version="14.10",
                )
            )
            db_session.add(
                MatchParticipant(
                    participant_id=f"m{i}-mid",
                    match_id=f"m{i}",
                    champion_name="Ahri",
                    position="MID",
                    is_enemy=False,
                    player_profile_id="pp-1",
                    kills=kills,
                    deaths=deaths,
                    assists=assists,
                    cs=270,
                    damage_dealt=20000,
                )
            )
        db_session.add_all(
            [
                MatchParticipant(
                    participant_id="m1-adc",
                    match_id="m1",
                    champion_name="Jinx",
                    position="BOT",
                    is_enemy=False,
                    player_profile_id="pp-2",
                    kills=4,
                    deaths=1,
                    assists=6,
                ),
                MatchParticipant(
                    participant_id="m2-enemy",
                    match_id="m2",
                    champion_name="Ahri",
                    position="MID",
                    is_enemy=True,
                    kills=30,
                    deaths=0,
                    assists=30,
                ),
            ]
        )
        db_session.commit()


def by_name(lines):
    return {line["name"]: line for line in lines}


class TestChampionStatsEndpoint:
    """Test GET /api/stats/champions."""

    def test_ahri_scenario(self):
        """Two tracked wins aggregate to 100% winrate and KDA 8.0."""
        client, engine = create_test_app_and_client()
        setup_test_data(engine)

        response = client.get("/api/stats/champions")

        assert response.status_code == 200
        ahri = by_name(response.json())["Ahri"]
        assert ahri["games"] == 2
        assert ahri["wins"] == 2
        assert ahri["winrate"] == 100
        assert ahri["kills"] == 12
        assert ahri["deaths"] == 2
        assert ahri["assists"] == 4
        assert ahri["kda"] == 8.0
        assert ahri["played_against"] == 1
        assert ahri["champion_class"] == "MAGE"

    def test_ban_only_champion(self):
        """Zed was banned three times and never picked."""
        client, engine = create_test_app_and_client()
        setup_test_data(engine)

        zed = by_name(client.get("/api/stats/champions").json())["Zed"]

        assert zed["games"] == 0
        assert zed["bans"] == 3
        assert zed["winrate"] == 0

    def test_role_filter_maps_legacy_bot(self):
        """role=ADC returns picks stored as BOT."""
        client, engine = create_test_app_and_client()
        setup_test_data(engine)

        lines = by_name(client.get("/api/stats/champions", params={"role": "ADC"}).json())

        assert lines["Jinx"]["games"] == 1
        assert "Ahri" not in lines

    def test_champion_class_filter(self):
        """Metadata filters drop non-matching picks; banned champions stay."""
        client, engine = create_test_app_and_client()
        setup_test_data(engine)

        response = client.get("/api/stats/champions", params={"champion_class": "MARKSMAN"})

        lines = response.json()
        assert [line["name"] for line in lines] == ["Jinx", "Azir", "Zed"]
        assert lines[2]["games"] == 0
        assert lines[2]["bans"] == 3

    def test_game_version_filter(self):
        """Picks and bans are both restricted to the requested patch."""
        client, engine = create_test_app_and_client()
        setup_test_data(engine)
        with Session(engine) as db_session:
            db_session.add_all(
                [
                    Match(
                        match_id="m3",
                        date=datetime(2024, 4, 20),
                        match_type="SCRIM",
                        result="LOSS",
                        our_side="RED",
                        blue_bans_json=json.dumps(["Yone"]),
                        red_bans_json=json.dumps(["Zed"]),
                        game_version="14.9",
                    ),
                    MatchParticipant(
                        participant_id="m3-mid",
                        match_id="m3",
                        champion_name="Ahri",
                        position="MID",
                        is_enemy=False,
                        player_profile_id="pp-1",
                    ),
                ]
            )
            db_session.commit()

        current = by_name(client.get("/api/stats/champions", params={"game_version": "14.10"}).json())
        previous = by_name(client.get("/api/stats/champions", params={"game_version": "14.9"}).json())

        assert current["Ahri"]["games"] == 2
        assert current["Zed"]["bans"] == 3
        assert "Yone" not in current
        assert set(previous) == {"Ahri", "Yone", "Zed"}
        assert previous["Ahri"]["games"] == 1
        assert previous["Zed"]["bans"] == 1
        assert previous["Yone"]["bans"] == 1

    def test_unknown_game_version(self):
        """A patch with no matches returns an empty list."""
        client, engine = create_test_app_and_client()
        setup_test_data(engine)

        response = client.get("/api/stats/champions", params={"game_version": "13.1"})

        assert response.status_code == 200
        assert response.json() == []

    def test_empty_database(self):
        """No data returns an empty list."""
        client, _ = create_test_app_and_client()

        response = client.get("/api/stats/champions")

        assert response.status_code == 200
        assert response.json() == []


class TestChampionDetailEndpoint:
    """Test GET /api/stats/champions/{champion_name}."""

    def test_detail(self):
        """Detail combines totals, bans, roles and players."""
        client, engine = create_test_app_and_client()
        setup_test_data(engine)

        response = client.get("/api/stats/champions/Ahri")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Ahri"
        assert data["stats"]["games"] == 2
        assert data["stats"]["csm"] == 9.0
        assert data["played_against"]["total"] == 1
        assert data["player_stats"][0]["name"] == "Lumen"
        assert data["definition"]["lane_style"] == "SOLO"
        assert len(data["matches"]) == 3

    def test_unknown_champion_is_empty(self):
        """A champion with no history returns an empty breakdown."""
        client, _ = create_test_app_and_client()

        response = client.get("/api/stats/champions/Teemo")

        assert response.status_code == 200
        data = response.json()
        assert data["stats"]["games"] == 0
        assert data["definition"] is None
        assert data["matches"] == []


class TestGlobalStatsEndpoint:
    """Test GET /api/stats/global."""

    def test_overview(self):
        """Overview covers finished competitive matches."""
        client, engine = create_test_app_and_client()
        setup_test_data(engine)

        response = client.get("/api/stats/global")

        assert response.status_code == 200
        data = response.json()
        assert data["overview"]["total_matches"] == 2
        assert data["overview"]["winrate"] == 100
        assert data["sides"]["blue"]["played"] == 2
        assert data["sides"]["red"]["played"] == 0
        assert data["top_champions"][0]["name"] == "Ahri"


class TestHealth:
    """Test GET /health."""

    def test_health(self):
        client, _ = create_test_app_and_client()

        assert client.get("/health").json() == {"status": "ok"}
