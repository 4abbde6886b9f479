"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from quietscores import __version__
from quietscores.api.routes import games, scores, standings, teams
from quietscores.config import get_settings
from quietscores.core.exceptions import UnknownSportError
from quietscores.services import SportsDataService, create_default_service
from quietscores.utilities.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    app.state.service.close()


def create_app(service: SportsDataService | None = None) -> FastAPI:
    """Build the app around a service (the ESPN-backed default when None)."""
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="quietscores", version=__version__, lifespan=lifespan)
    app.state.service = service or create_default_service(settings)

    @app.exception_handler(UnknownSportError)
    async def unknown_sport(request: Request, exc: UnknownSportError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc)},
        )

    app.include_router(scores.router)
    app.include_router(games.router)
    app.include_router(standings.router)
    app.include_router(teams.router)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok", "cache": app.state.service.cache_stats()}

    logger.info("[API] quietscores %s ready", __version__)
    return app
