# backend/sitzprobe/main.py
from __future__ import annotations

"""
FastAPI application setup for the read-only report endpoint.

This module depends on:
- sitzprobe.config.Settings for the app name and HTTP binding
- sitzprobe.api.api_router for route registration

The aggregator (and, when available, the scheduler) are handed in by the
caller and stored on `app.state`; the app never creates report state itself.
"""

import threading

import uvicorn
from fastapi import FastAPI

from sitzprobe import __version__
from sitzprobe.api import api_router
from sitzprobe.config import Settings, get_settings
from sitzprobe.schemas import HealthRead
from sitzprobe.services.reports import ReportAggregator
from sitzprobe.services.scheduler import ProbeScheduler


def create_app(
    aggregator: ReportAggregator,
    *,
    settings: Settings | None = None,
    scheduler: ProbeScheduler | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
    )
    app.state.aggregator = aggregator
    app.state.scheduler = scheduler

    # ---- Routes ----

    app.include_router(api_router, prefix="/api")

    # ---- Healthcheck ----

    @app.get("/health", tags=["health"], response_model=HealthRead)
    def health() -> HealthRead:
        cycle = scheduler.cycle if scheduler is not None else 0
        return HealthRead(status="ok", cycle=cycle)

    return app


def serve_in_background(app: FastAPI, *, host: str, port: int) -> threading.Thread:
    """
    Run uvicorn on a daemon thread.

    Access logs are off and uvicorn's own logging config is skipped: inside
    lightningd, stdout carries the plugin protocol and must stay clean.
    """
    config = uvicorn.Config(app, host=host, port=port, log_config=None, access_log=False)
    server = uvicorn.Server(config)
    thread = threading.Thread(target=server.run, name="sitzprobe-http", daemon=True)
    thread.start()
    return thread
