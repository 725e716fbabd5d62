"""JSON API endpoints exposing the browser's observable state."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from salesview.models import BrowserState, SaleRecord, TimeSeriesPoint

log = structlog.get_logger(__name__)

router = APIRouter()


def browser_unavailable(path: str) -> JSONResponse:
    """Response for requests arriving before the lifespan wired a browser."""
    log.warning("dashboard_browser_unavailable", path=path)
    return JSONResponse(content={"error": "Sales browser not available"}, status_code=503)


def _decimal_to_str(value: Decimal) -> str:
    return str(value)


def record_payload(record: SaleRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "date": record.occurred_at.isoformat() if record.occurred_at else None,
        "customer_email": record.customer_email,
        "phone_number": record.phone_number,
        "price": _decimal_to_str(record.price),
        "product_name": record.product_name,
    }


def point_payload(point: TimeSeriesPoint) -> dict[str, Any]:
    return {
        "date": point.date.isoformat(),
        "total_sales": _decimal_to_str(point.total_sales),
    }


def state_payload(state: BrowserState) -> dict[str, Any]:
    """Convert a BrowserState into a JSON-safe dict (Decimals as strings)."""
    return {
        "records": [record_payload(r) for r in state.records],
        "time_series": [point_payload(p) for p in state.time_series],
        "busy": state.busy,
        "error": state.error,
        "page": state.page,
        "has_next": state.has_next,
        "has_previous": state.has_previous,
        "filters": state.filters.as_params(),
        "sort": (
            {"field": state.sort.field.value, "direction": state.sort.direction.value}
            if state.sort is not None
            else None
        ),
    }


@router.get("/state")
async def get_state(request: Request) -> JSONResponse:
    """Full renderer state: page, chart series, busy/error, navigation availability."""
    browser = getattr(request.app.state, "browser", None)
    if browser is None:
        return browser_unavailable(request.url.path)
    return JSONResponse(content=state_payload(browser.snapshot()))


@router.get("/records")
async def get_records(request: Request) -> JSONResponse:
    """Records of the displayed page."""
    browser = getattr(request.app.state, "browser", None)
    if browser is None:
        return browser_unavailable(request.url.path)
    state = browser.snapshot()
    return JSONResponse(content=[record_payload(r) for r in state.records])


@router.get("/timeseries")
async def get_timeseries(request: Request) -> JSONResponse:
    """Per-date sales totals of the displayed page, ascending."""
    browser = getattr(request.app.state, "browser", None)
    if browser is None:
        return browser_unavailable(request.url.path)
    return JSONResponse(content=[point_payload(p) for p in browser.time_series()])
