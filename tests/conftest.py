"""Shared test fixtures for the sales browser."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from salesview.config import AppSettings, DashboardSettings, SalesApiSettings
from salesview.models import CacheEntry, SaleRecord


def make_record(
    record_id: str,
    day: str,
    price: str = "0",
    email: str | None = None,
) -> SaleRecord:
    """Build a SaleRecord dated at noon on an ISO day string."""
    return SaleRecord(
        id=record_id,
        occurred_at=datetime.fromisoformat(f"{day}T12:00:00"),
        customer_email=email,
        price=Decimal(price),
    )


def make_entry(
    *records: SaleRecord,
    before: str | None = None,
    after: str | None = None,
) -> CacheEntry:
    return CacheEntry(records=tuple(records), before_token=before, after_token=after)


@pytest.fixture
def mock_settings() -> AppSettings:
    """Return AppSettings with test defaults (local API, dashboard disabled)."""
    return AppSettings(
        log_level="DEBUG",
        sales_api=SalesApiSettings(
            base_url="http://sales.test",
            username="tester",
            password="secret",  # type: ignore[arg-type]
            page_limit=2,
        ),
        dashboard=DashboardSettings(enabled=False),
    )


@pytest.fixture
def mock_source() -> AsyncMock:
    """Mock SalesDataSource returning an empty first page."""
    source = AsyncMock()
    source.fetch_page = AsyncMock(return_value=make_entry())
    return source


@pytest.fixture
def mock_credentials() -> AsyncMock:
    """Mock CredentialSource that issues a fixed token."""
    credentials = AsyncMock()
    credentials.acquire = AsyncMock(return_value="test-token")
    return credentials
