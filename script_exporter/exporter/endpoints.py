"""Exporter endpoints — probe, health, config, reload."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from script_exporter import __version__
from script_exporter.config import settings
from script_exporter.engine.runner import run_scripts
from script_exporter.errors import ConfigError, FilterError
from script_exporter.exporter.exposition import CONTENT_TYPE, render_measurements
from script_exporter.scripts.filter import filter_scripts
from script_exporter.scripts.store import ScriptStore

logger = logging.getLogger(__name__)

router = APIRouter()

SCRAPE_TIMEOUT_HEADER = "X-Prometheus-Scrape-Timeout-Seconds"

_LANDING_PAGE = """<html>
<head><title>Script Exporter</title></head>
<body>
<h1>Script Exporter</h1>
<p><a href="/probe?pattern=.*">Run all scripts</a></p>
<p><a href="/config">Loaded configuration</a></p>
<p><a href="/health">Health</a></p>
</body>
</html>
"""


# ── Helpers ──────────────────────────────────────────────────────────────────


def _store(request: Request) -> ScriptStore:
    return request.app.state.store


def resolve_default_timeout(request: Request) -> float | None:
    """Deadline for scripts configured with ``timeout: 0``.

    The configured default wins; otherwise the Prometheus scrape timeout
    (minus a safety offset) is used when the scraper sends it.
    """
    if settings.script_default_timeout > 0:
        return settings.script_default_timeout

    header = request.headers.get(SCRAPE_TIMEOUT_HEADER)
    if not header:
        return None
    try:
        scrape_timeout = float(header)
    except ValueError:
        logger.warning("Ignoring malformed %s header: %r", SCRAPE_TIMEOUT_HEADER, header)
        return None

    timeout = scrape_timeout - settings.scrape_timeout_offset
    return timeout if timeout > 0 else None


# ── Endpoints ────────────────────────────────────────────────────────────────


@router.get("/", response_class=HTMLResponse)
def index() -> str:
    return _LANDING_PAGE


@router.get("/health")
def health_check(request: Request) -> dict[str, Any]:
    """Exporter health endpoint."""
    return {
        "ok": True,
        "name": "script-exporter",
        "version": __version__,
        "scripts": len(_store(request).scripts),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/probe")
def probe(
    request: Request,
    name: str = Query(""),
    pattern: str = Query(""),
) -> PlainTextResponse:
    """Run the selected scripts and return their metrics."""
    scripts = _store(request).scripts
    try:
        selected = filter_scripts(scripts, name=name, pattern=pattern)
    except FilterError as e:
        raise HTTPException(status_code=400, detail=str(e))

    default_timeout = resolve_default_timeout(request)
    logger.debug(
        "Probe name=%r pattern=%r: running %d scripts (default timeout %s)",
        name, pattern, len(selected), default_timeout,
    )
    measurements = run_scripts(
        selected,
        default_timeout=default_timeout,
        shell=settings.script_shell,
    )
    body = render_measurements(measurements, scripts_total=len(scripts))
    return PlainTextResponse(body, media_type=CONTENT_TYPE)


@router.get("/config")
def show_config(request: Request) -> PlainTextResponse:
    """Canonical merged configuration currently being served."""
    return PlainTextResponse(_store(request).canonical.decode("utf-8"), media_type="text/plain")


@router.post("/-/reload")
def reload_config(request: Request) -> dict[str, Any]:
    """Re-read all script sources. The old config stays live on failure."""
    store = _store(request)
    try:
        scripts = store.reload()
    except ConfigError as e:
        logger.error("Reload failed, keeping previous config: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    return {"ok": True, "scripts": len(scripts)}
