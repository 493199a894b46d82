"""Tests for scouting API endpoints."""

import json
from datetime import datetime

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from riftdesk.db.repo import DataAccessError
from riftdesk.db.schema import (
    Base,
    EnemyBan,
    EnemyPlayer,
    Match,
    MatchParticipant,
    Team,
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
    """Rival with results stored as WIN, LOSS, LOSS, WIN."""
    with Session(engine) as db_session:
        db_session.add_all(
            [
                Team(team_id="t1", name="Crimson Wolves", notes="Plays for dragons"),
                Team(team_id="t2", name="Azure Owls"),
                Team(team_id="t3", name="Disbanded", is_visible=False),
                EnemyPlayer(enemy_player_id="e1", team_id="t1", name="Fang", role="BOT"),
                EnemyBan(enemy_ban_id="b1", team_id="t1", champion_name="Zed", count=2),
            ]
        )
        picks = [("MID", "Syndra"), ("BOT", "Kai'Sa"), ("TOP", "Renekton")]
        for i, result in enumerate(["WIN", "LOSS", "LOSS", "WIN"], start=1):
            db_session.add(
                Match(
                    match_id=f"m{i}",
                    date=datetime(2024, 5, i),
                    match_type="SCRIM",
                    result=result,
                    our_side="RED",
                    blue_bans_json=json.dumps(["Zed", "Azir"]),
                    red_bans_json=json.dumps(["Ahri"]),
                    enemy_team_id="t1",
                )
            )
            for position, champion in picks:
                db_session.add(
                    MatchParticipant(
                        participant_id=f"m{i}-{position}",
                        match_id=f"m{i}",
                        champion_name=champion,
                        position=position,
                        is_enemy=True,
                    )
                )
        db_session.commit()


class TestListTeams:
    """Test GET /api/scouting/teams."""

    def test_lists_visible_teams(self):
        """Hidden teams are excluded; rows are ordered by name."""
        client, engine = create_test_app_and_client()
        setup_test_data(engine)

        response = client.get("/api/scouting/teams")

        assert response.status_code == 200
        rows = response.json()
        assert [r["name"] for r in rows] == ["Azure Owls", "Crimson Wolves"]
        wolves = rows[1]
        assert wolves["total_matches"] == 4
        assert wolves["our_wins"] == 2
        assert wolves["winrate"] == 50
        assert rows[0]["last_match"] is None


class TestScoutingReport:
    """Test GET /api/scouting/teams/{team_id}."""

    def test_rival_winrate_is_inverted(self):
        """Stored WIN, LOSS, LOSS, WIN means the rival went 2-2."""
        client, engine = create_test_app_and_client()
        setup_test_data(engine)

        response = client.get("/api/scouting/teams/t1")

        assert response.status_code == 200
        stats = response.json()["stats"]
        assert stats["total_matches"] == 4
        assert stats["rival_wins"] == 2
        assert stats["winrate"] == 50

    def test_bans_and_picks(self):
        """Rival bans come from the blue side when we play red."""
        client, engine = create_test_app_and_client()
        setup_test_data(engine)

        stats = client.get("/api/scouting/teams/t1").json()["stats"]

        bans = {b["champion"]: b["count"] for b in stats["top_bans"]}
        assert bans == {"Zed": 6, "Azir": 4}
        assert {p["champion"] for p in stats["top_picks"]} == {"Syndra", "Kai'Sa", "Renekton"}
        adc = next(r for r in stats["top_picks_by_role"] if r["role"] == "ADC")
        assert adc["champions"] == [{"champion": "Kai'Sa", "count": 4}]

    def test_profile_and_roster(self):
        """Team notes and normalized roster roles are returned."""
        client, engine = create_test_app_and_client()
        setup_test_data(engine)

        data = client.get("/api/scouting/teams/t1").json()

        assert data["team"]["notes"] == "Plays for dragons"
        assert data["roster"][0]["role"] == "ADC"
        assert len(data["matches"]) == 4
        assert data["matches"][0]["enemy_picks"] == ["Kai'Sa", "Syndra", "Renekton"]

    def test_not_found(self):
        """Unknown team returns 404."""
        client, _ = create_test_app_and_client()

        response = client.get("/api/scouting/teams/missing")

        assert response.status_code == 404
        assert response.json()["detail"] == "Team not found"


class TestDataUnavailable:
    """Data-layer failures surface as 503."""

    def test_data_access_error_is_503(self, monkeypatch):
        """No partial results are returned when the store fails."""
        client, _ = create_test_app_and_client()

        def fail(session):
            raise DataAccessError("Could not load data (get_visible_teams)")

        monkeypatch.setattr("riftdesk.db.repo.get_visible_teams", fail)

        response = client.get("/api/scouting/teams")

        assert response.status_code == 503
        assert response.json() == {"detail": "Data unavailable"}
