"""FastAPI status application factory."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI

from oracle_sentry.dashboard.routes import api


def create_dashboard_app(lifespan: Any = None) -> FastAPI:
    """Create and configure the FastAPI status application.

    Route handlers read the monitor from ``app.state.monitor``; the caller
    (main.py lifespan, or a test) is responsible for setting it.

    Args:
        lifespan: Optional async context manager for application lifespan events.

    Returns:
        Configured FastAPI application with JSON routes under /api.
    """
    app = FastAPI(
        title="Oracle Sentry Status",
        lifespan=lifespan,
    )
    app.state.monitor = None
    app.include_router(api.router, prefix="/api")
    return app
