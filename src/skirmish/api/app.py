"""FastAPI application for the simulation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from skirmish import __version__
from skirmish.api import routes
from skirmish.api.runtime import ApiState, GameNotFound, build_state
from skirmish.config import get_settings
from skirmish.domain.errors import UnknownTerritory

logger = logging.getLogger(__name__)


async def _not_found(request: Request, exc: Exception) -> JSONResponse:
    detail = "game not found" if isinstance(exc, GameNotFound) else str(exc)
    logger.debug("%s %s -> 404: %s", request.method, request.url.path, detail)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": detail})


def create_app(*, state_factory: Callable[[], ApiState] = build_state) -> FastAPI:
    """Build the app; ``state_factory`` runs once per lifespan."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        api_state = state_factory()
        app.state.api_state = api_state
        configured = api_state.settings.advisor_configured
        logger.info("advisor %s", "configured" if configured else "not configured")
        try:
            yield
        finally:
            await api_state.shutdown()

    app = FastAPI(title="Skirmish API", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )
    app.add_exception_handler(GameNotFound, _not_found)
    app.add_exception_handler(UnknownTerritory, _not_found)
    app.include_router(routes.router)
    return app


app = create_app()
