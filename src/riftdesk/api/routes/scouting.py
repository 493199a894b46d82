"""Scouting API endpoints.

GET /api/scouting/teams - Visible teams with our record against them
GET /api/scouting/teams/{team_id} - Full scouting report
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from riftdesk.aggregation.scouting import get_scouting_report, list_scouting_teams
from riftdesk.api.app import get_db_session
from riftdesk.db.repo import DbSession
from riftdesk.models.types import ScoutingReport, ScoutingTeamSummary

router = APIRouter()


@router.get("/scouting/teams", response_model=list[ScoutingTeamSummary])
def list_teams(
    session: DbSession = Depends(get_db_session),
) -> list[ScoutingTeamSummary]:
    """List visible teams with our record against each."""
    return list_scouting_teams(session)


@router.get("/scouting/teams/{team_id}", response_model=ScoutingReport)
def get_team_report(
    team_id: str,
    session: DbSession = Depends(get_db_session),
) -> ScoutingReport:
    """Get the scouting report for a rival team.

    Args:
        team_id: Team to scout.
        session: Database session (injected).

    Returns:
        ScoutingReport with record, bans, picks, roster and tier lists.

    Raises:
        HTTPException: 404 if team not found.
    """
    report = get_scouting_report(session, team_id)

    if report is None:
        raise HTTPException(status_code=404, detail="Team not found")

    return report
