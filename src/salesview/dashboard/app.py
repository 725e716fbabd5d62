"""FastAPI dashboard application factory exposing the sales browser as JSON."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI

from salesview.dashboard.routes import actions, api


def create_dashboard_app(lifespan: Any = None) -> FastAPI:
    """Create and configure the FastAPI dashboard application.

    Args:
        lifespan: Optional async context manager for application lifespan events.
                  Used by main.py to inject startup/shutdown logic.

    Returns:
        Configured FastAPI application. Route handlers read the browser from
        ``app.state.browser``.
    """
    app = FastAPI(
        title="Sales Dashboard",
        lifespan=lifespan,
    )

    # Wired by main.py lifespan (or directly by tests)
    app.state.browser = None

    app.include_router(api.router, prefix="/api")
    app.include_router(actions.router, prefix="/actions")

    return app
