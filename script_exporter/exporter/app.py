"""Exporter FastAPI application — auth middleware + script store."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from script_exporter import __version__
from script_exporter.config import settings
from script_exporter.errors import ConfigError
from script_exporter.exporter.endpoints import router
from script_exporter.scripts.store import ScriptStore

logger = logging.getLogger(__name__)


# ── Auth middleware ───────────────────────────────────────────────────────────


class TokenAuthMiddleware(BaseHTTPMiddleware):
    """Reject requests missing or having an invalid X-Exporter-Token header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # No token configured: open access
        token = settings.exporter_token
        if not token:
            return await call_next(request)

        provided = request.headers.get("X-Exporter-Token", "")
        if provided != token:
            return JSONResponse(
                status_code=401,
                content={"detail": "Invalid or missing X-Exporter-Token"},
            )

        return await call_next(request)


# ── App factory ──────────────────────────────────────────────────────────────


def create_app(store: ScriptStore | None = None) -> FastAPI:
    """Create the exporter application.

    When *store* is given it is served as-is; otherwise a store is built from
    the configured script sources and loaded on startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if store is not None:
            app.state.store = store
        else:
            live = ScriptStore(settings.script_config_paths)
            try:
                live.load()
            except ConfigError as e:
                logger.error("Failed to load script config %s: %s", settings.script_config, e)
                raise
            app.state.store = live
        yield

    app = FastAPI(
        title="Script Exporter",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(TokenAuthMiddleware)
    app.include_router(router)

    return app


exporter_app = create_app()
