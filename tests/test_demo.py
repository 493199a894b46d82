"""Tests for demo seeding."""

import importlib.util
import subprocess
import sys
from pathlib import Path

import pytest

from riftdesk.aggregation.champion_stats import get_champion_stats_list
from riftdesk.aggregation.draft_context import get_draft_context
from riftdesk.aggregation.scouting import get_scouting_report
from riftdesk.db import repo
from riftdesk.db.session import get_db_session

# Project root
PROJECT_ROOT = Path(__file__).parent.parent
SEED_SCRIPT = PROJECT_ROOT / "scripts" / "seed_demo.py"


def load_seed_module():
    spec = importlib.util.spec_from_file_location("seed_demo", SEED_SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def demo_db(tmp_path):
    """Seed a demo database in a temporary directory."""
    db_path = tmp_path / "demo.db"
    load_seed_module().seed_database(db_path)
    return db_path


class TestSeedDemoScript:
    """Test seed_demo.py script."""

    def test_script_exists(self):
        """seed_demo.py script exists."""
        assert SEED_SCRIPT.exists(), f"Script not found: {SEED_SCRIPT}"

    def test_script_runs_without_error(self):
        """seed_demo.py runs without error."""
        result = subprocess.run(
            [sys.executable, str(SEED_SCRIPT)],
            capture_output=True,
            text=True,
            timeout=60,
            cwd=str(PROJECT_ROOT),
        )
        assert result.returncode == 0, f"Script failed: {result.stderr}"
        assert (PROJECT_ROOT / "demo.db").exists(), "Demo database not created"

    def test_seeding_twice_is_noop(self, demo_db, capsys):
        """A second run leaves existing data alone."""
        load_seed_module().seed_database(demo_db)

        assert "already exists" in capsys.readouterr().out


class TestDemoData:
    """The seeded data drives every report."""

    def test_scouting_report(self, demo_db):
        """Rival went 2-2; Zed is their most banned champion."""
        with get_db_session(demo_db) as session:
            report = get_scouting_report(session, "rival-1")

        assert report.stats.total_matches == 4
        assert report.stats.winrate == 50
        assert report.stats.top_bans[0].champion == "Zed"
        assert report.stats.top_bans[0].count == 6
        adc = next(r for r in report.stats.top_picks_by_role if r.role == "ADC")
        assert adc.champions[0].champion == "Kai'Sa"

    def test_champion_stats(self, demo_db):
        """Our mid laner's Ahri line."""
        with get_db_session(demo_db) as session:
            lines = {line.name: line for line in get_champion_stats_list(session)}

        assert lines["Ahri"].games == 4
        assert lines["Ahri"].winrate == 50
        assert lines["Ahri"].kda == 3.0
        assert lines["Zed"].bans == 8

    def test_draft_context(self, demo_db):
        """The demo draft plan resolves the active tier list."""
        with get_db_session(demo_db) as session:
            draft = repo.get_draft_plan(session, "draft-1")
            context = get_draft_context(session, draft)

        assert context.tier_list.tier_list_id == "tl-main"
        assert context.our_stats["Azir"].played == 0
        assert context.our_stats["Ahri"].tier == "S"
        assert context.enemy_stats["Syndra"].winrate == 50
