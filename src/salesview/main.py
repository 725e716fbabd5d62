"""Entry point for the sales dashboard.

Wires all components together, optionally embeds the FastAPI dashboard API,
and starts the browser. When the dashboard is enabled (default), the browser
and the API share a single asyncio event loop via uvicorn's programmatic API
and FastAPI's lifespan context manager.

Component wiring order (in _build_components):
1. AppSettings (configuration)
2. Logging setup
3. SalesApiClient (credential source + sales data source)
4. ResultCache (session-scoped)
5. SalesBrowser (filters, sort, pagination, fetch orchestration)
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from salesview.browser import SalesBrowser
from salesview.config import AppSettings
from salesview.logging import get_logger, setup_logging
from salesview.query.cache import ResultCache
from salesview.source.http_client import SalesApiClient


def _build_components(settings: AppSettings) -> dict[str, Any]:
    """Build all components from settings.

    Note: Does NOT open the HTTP session -- that happens in the lifespan
    (dashboard mode) or run() (headless mode).
    """
    logger = get_logger("salesview.main")

    api_client = SalesApiClient(settings.sales_api)
    if not settings.sales_api.username:
        logger.warning(
            "no_api_credentials_configured",
            note="Authorization will likely be refused; loads stay deferred.",
        )

    cache = ResultCache()
    browser = SalesBrowser(
        source=api_client,
        credentials=api_client,
        page_limit=settings.sales_api.page_limit,
        cache=cache,
    )

    return {
        "api_client": api_client,
        "cache": cache,
        "browser": browser,
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage component lifecycle within the FastAPI application.

    On startup: stores the browser on app.state, opens the HTTP session,
    authorizes and loads the first page.
    On shutdown: closes the HTTP session.
    """
    logger = get_logger("salesview.main")
    components = app.state.components

    app.state.browser = components["browser"]

    await components["api_client"].connect()
    state = await components["browser"].start()
    logger.info("lifespan_started", records=len(state.records), error=state.error)

    yield

    await components["api_client"].close()
    logger.info("sales_dashboard_stopped")


async def run() -> None:
    """Run the sales dashboard.

    When the dashboard is enabled (DASHBOARD_ENABLED=true, the default),
    serves the JSON API with uvicorn. Otherwise loads the first page once and
    logs a summary of it.
    """
    settings = AppSettings()

    setup_logging(settings.log_level, settings.log_format)
    logger = get_logger("salesview.main")

    components = _build_components(settings)

    if settings.dashboard.enabled:
        from salesview.dashboard.app import create_dashboard_app

        app = create_dashboard_app(lifespan=lifespan)
        app.state.settings = settings
        app.state.components = components

        logger.info(
            "starting_with_dashboard",
            host=settings.dashboard.host,
            port=settings.dashboard.port,
        )

        config = uvicorn.Config(
            app,
            host=settings.dashboard.host,
            port=settings.dashboard.port,
            log_level="warning",  # Suppress uvicorn access logs
        )
        server = uvicorn.Server(config)
        await server.serve()
    else:
        try:
            await components["api_client"].connect()
            state = await components["browser"].start()
            logger.info(
                "first_page_loaded",
                records=len(state.records),
                dates=len(state.time_series),
                has_next=state.has_next,
                error=state.error,
            )
        finally:
            await components["api_client"].close()


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
