"""POST endpoints for filter, sort and page navigation actions."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from salesview.dashboard.routes.api import browser_unavailable, state_payload
from salesview.models import FilterCriteria, SortField

log = structlog.get_logger(__name__)

router = APIRouter()


class FilterForm(BaseModel):
    """Boundary validation for user-entered filters. Omitted fields are unset."""

    start_date: date | None = None
    end_date: date | None = None
    min_price: Decimal | None = Field(default=None, ge=0)
    customer_email: str | None = None
    phone_number: str | None = None

    def to_criteria(self) -> FilterCriteria:
        return FilterCriteria(
            start_date=self.start_date,
            end_date=self.end_date,
            min_price=self.min_price,
            customer_email=self.customer_email,
            phone_number=self.phone_number,
        )


@router.post("/filters")
async def apply_filters(request: Request, form: FilterForm) -> JSONResponse:
    """Apply filters, reset pagination, and return the new state."""
    browser = getattr(request.app.state, "browser", None)
    if browser is None:
        return browser_unavailable(request.url.path)
    state = await browser.apply_filters(form.to_criteria())
    log.info("filters_applied_via_dashboard")
    return JSONResponse(content=state_payload(state))


@router.post("/sort/{field}")
async def toggle_sort(request: Request, field: SortField) -> JSONResponse:
    """Toggle sort on a column and return the new state."""
    browser = getattr(request.app.state, "browser", None)
    if browser is None:
        return browser_unavailable(request.url.path)
    state = await browser.toggle_sort(field)
    return JSONResponse(content=state_payload(state))


@router.post("/page/next")
async def next_page(request: Request) -> JSONResponse:
    browser = getattr(request.app.state, "browser", None)
    if browser is None:
        return browser_unavailable(request.url.path)
    state = await browser.go_next()
    return JSONResponse(content=state_payload(state))


@router.post("/page/previous")
async def previous_page(request: Request) -> JSONResponse:
    browser = getattr(request.app.state, "browser", None)
    if browser is None:
        return browser_unavailable(request.url.path)
    state = await browser.go_previous()
    return JSONResponse(content=state_payload(state))
