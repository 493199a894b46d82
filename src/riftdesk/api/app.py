"""FastAPI application factory.

API layer:
- Validates inputs, reads the DB through repo/aggregation
- Returns JSON payloads for the UI
- Forbidden: writes to match history, HTML rendering
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Generator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from riftdesk.config import get_settings
from riftdesk.db.repo import DataAccessError, DbSession
from riftdesk.db.session import get_session, init_db

logger = logging.getLogger(__name__)


def get_db_session(request: Request) -> Generator[DbSession, None, None]:
    """Dependency to get database session for the app's configured database.

    Yields:
        Database session that is automatically closed after request.
    """
    session = get_session(request.app.state.db_path)
    try:
        yield session
    finally:
        session.close()


async def data_access_error_handler(request: Request, exc: DataAccessError) -> JSONResponse:
    """Report data-layer failures as 503 without partial results."""
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=503, content={"detail": "Data unavailable"})


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        db_path: Optional path to database file. The schema is created
            there (or at Settings.database_path) on startup.

    Returns:
        Configured FastAPI application.
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        init_db(db_path)
        yield

    app = FastAPI(
        title="riftdesk API",
        description="Match statistics, scouting and draft planning",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.db_path = db_path

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DataAccessError, data_access_error_handler)

    from riftdesk.api.routes import drafts, scouting, stats

    app.include_router(stats.router, prefix="/api")
    app.include_router(scouting.router, prefix="/api")
    app.include_router(drafts.router, prefix="/api")

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()
