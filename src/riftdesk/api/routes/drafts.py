"""Draft planning API endpoint.

GET /api/drafts/{draft_plan_id}/context - Tier list and champion history for a draft
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from riftdesk.aggregation.draft_context import get_draft_context
from riftdesk.api.app import get_db_session
from riftdesk.db import repo
from riftdesk.db.repo import DbSession
from riftdesk.models.types import DraftContext

router = APIRouter()


@router.get("/drafts/{draft_plan_id}/context", response_model=DraftContext)
def draft_context(
    draft_plan_id: str,
    session: DbSession = Depends(get_db_session),
) -> DraftContext:
    """Get the merged draft context for a draft plan.

    Raises:
        HTTPException: 404 if draft plan not found.
    """
    draft = repo.get_draft_plan(session, draft_plan_id)

    if draft is None:
        raise HTTPException(status_code=404, detail="Draft plan not found")

    return get_draft_context(session, draft)
