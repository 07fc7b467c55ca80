"""
FastAPI application — local focus/economy API for the Climb dashboard.
Runs on http://127.0.0.1:8765 by default.

The coordinator and the text services live on app.state so that each call to
create_app() produces a fully independent instance with no shared module-level
globals. Tests pass a VirtualScheduler to drive time by hand.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..clock import AsyncioScheduler, Scheduler
from ..coordinator import Coordinator
from ..logging_setup import setup_logging
from ..services.genai import CoachService, GeminiClient, TaskPlanner

logger = logging.getLogger(__name__)


def create_app(
    scheduler: Optional[Scheduler] = None,
    text_client: Optional[GeminiClient] = None,
) -> FastAPI:

    # -----------------------------------------------------------------------
    # Lifespan — initialises and tears down all per-app state
    # -----------------------------------------------------------------------

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        coordinator = Coordinator(scheduler or AsyncioScheduler())
        client = text_client or GeminiClient()

        app.state.coordinator = coordinator
        app.state.services = {
            "planner": TaskPlanner(client),
            "coach": CoachService(client),
        }
        logger.info("Climb engine ready")

        yield

        if coordinator.session_active:
            # releases the countdown and distraction tickers
            coordinator.abort_session()

    app = FastAPI(
        title="Climb",
        description="Local-first focus session and progression API",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:3000", "null"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from .routers import attention, catalog, progress, session, settings, store, tasks

    app.include_router(catalog.router)
    app.include_router(session.router)
    app.include_router(attention.router)
    app.include_router(progress.router)
    app.include_router(store.router)
    app.include_router(tasks.router)
    app.include_router(settings.router)

    @app.get("/health")
    def health():
        return {"status": "ok", "version": "0.1.0"}

    return app


app = create_app()
