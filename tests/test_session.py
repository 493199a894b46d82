"""Tests for session management."""

import pytest

from riftdesk.db.schema import Team
from riftdesk.db.session import get_db_session, init_db


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "riftdesk.db"
    init_db(path)
    return path


class TestGetDbSession:
    """Test the commit/rollback context manager."""

    def test_commits_on_success(self, db_path):
        """Rows added inside the block are persisted."""
        with get_db_session(db_path) as session:
            session.add(Team(team_id="t1", name="Crimson Wolves"))

        with get_db_session(db_path) as session:
            assert session.get(Team, "t1").name == "Crimson Wolves"

    def test_rolls_back_on_error(self, db_path):
        """An exception discards pending rows and propagates."""
        with pytest.raises(ValueError):
            with get_db_session(db_path) as session:
                session.add(Team(team_id="t1", name="Crimson Wolves"))
                session.flush()
                raise ValueError("abort")

        with get_db_session(db_path) as session:
            assert session.get(Team, "t1") is None
