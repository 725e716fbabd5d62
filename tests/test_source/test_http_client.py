"""Tests for SalesApiClient.

All tests use a mocked aiohttp session to avoid real HTTP calls.
"""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from salesview.config import AppSettings
from salesview.exceptions import CredentialUnavailable, DecodingFailure, TransportFailure
from salesview.models import (
    FilterCriteria,
    NavigationDirective,
    SortDirection,
    SortField,
    SortSpec,
)
from salesview.source.client import PageQuery
from salesview.source.http_client import SalesApiClient


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _response(status: int = 200, body: object = None) -> MagicMock:
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=body)
    return response


@pytest.fixture
def mock_session() -> MagicMock:
    """Mock aiohttp session; request() yields whatever response is configured."""
    session = MagicMock(spec=aiohttp.ClientSession)
    session.closed = False
    session.request.return_value.__aenter__ = AsyncMock(return_value=_response(body={}))
    session.request.return_value.__aexit__ = AsyncMock(return_value=False)
    return session


@pytest.fixture
def client(mock_settings: AppSettings, mock_session: MagicMock) -> SalesApiClient:
    return SalesApiClient(mock_settings.sales_api, session=mock_session)


def _respond_with(session: MagicMock, response: MagicMock) -> None:
    session.request.return_value.__aenter__ = AsyncMock(return_value=response)


# ---------------------------------------------------------------------------
# PageQuery
# ---------------------------------------------------------------------------


class TestPageQueryParams:
    def test_first_page_only_limit(self) -> None:
        assert PageQuery(limit=50).as_params() == {"limit": "50"}

    def test_full_query(self) -> None:
        query = PageQuery(
            limit=50,
            filters=FilterCriteria(
                start_date="2024-01-01",
                end_date="2024-01-31",
                min_price="100",
                customer_email="a@b.com",
                phone_number="+1555",
            ),
            sort=SortSpec(SortField.PRICE, SortDirection.DESC),
            directive=NavigationDirective.following("X"),
        )
        assert query.as_params() == {
            "limit": "50",
            "start_date": "2024-01-01",
            "end_date": "2024-01-31",
            "min_price": "100",
            "customer_email": "a@b.com",
            "phone_number": "+1555",
            "after": "X",
            "sort_by": "price",
            "sort_order": "desc",
        }

    def test_before_directive(self) -> None:
        query = PageQuery(limit=10, directive=NavigationDirective.preceding("B"))
        assert query.as_params() == {"limit": "10", "before": "B"}


# ---------------------------------------------------------------------------
# Authorization
# ---------------------------------------------------------------------------


class TestAcquire:
    @pytest.mark.asyncio
    async def test_refused_login_is_transport_failure(
        self, client: SalesApiClient, mock_session: MagicMock
    ) -> None:
        _respond_with(mock_session, _response(status=401))
        with pytest.raises(TransportFailure, match="401"):
            await client.acquire()

    @pytest.mark.asyncio
    async def test_token_key(self, client: SalesApiClient, mock_session: MagicMock) -> None:
        _respond_with(mock_session, _response(body={"token": "abc"}))
        assert await client.acquire() == "abc"

        method, url = mock_session.request.call_args.args
        assert method == "POST"
        assert url == "http://sales.test/getAuthorize"
        assert mock_session.request.call_args.kwargs["json"] == {
            "username": "tester",
            "password": "secret",
        }

    @pytest.mark.asyncio
    async def test_authorization_key_alias(
        self, client: SalesApiClient, mock_session: MagicMock
    ) -> None:
        _respond_with(mock_session, _response(body={"authorization": "xyz"}))
        assert await client.acquire() == "xyz"

    @pytest.mark.asyncio
    async def test_missing_token_is_unavailable(
        self, client: SalesApiClient, mock_session: MagicMock
    ) -> None:
        _respond_with(mock_session, _response(body={}))
        with pytest.raises(CredentialUnavailable):
            await client.acquire()

    @pytest.mark.asyncio
    async def test_non_object_body_is_decoding_failure(
        self, client: SalesApiClient, mock_session: MagicMock
    ) -> None:
        _respond_with(mock_session, _response(body=["token"]))
        with pytest.raises(DecodingFailure):
            await client.acquire()


# ---------------------------------------------------------------------------
# Page fetch
# ---------------------------------------------------------------------------


class TestFetchPage:
    @pytest.mark.asyncio
    async def test_sends_bearer_and_params(
        self, client: SalesApiClient, mock_session: MagicMock
    ) -> None:
        _respond_with(
            mock_session,
            _response(body={"sales": [{"id": 1, "price": "10"}], "after": "X"}),
        )
        query = PageQuery(limit=2, filters=FilterCriteria(min_price=100))

        entry = await client.fetch_page("tok", query)

        method, url = mock_session.request.call_args.args
        kwargs = mock_session.request.call_args.kwargs
        assert method == "GET"
        assert url == "http://sales.test/sales"
        assert kwargs["headers"] == {"Authorization": "Bearer tok"}
        assert kwargs["params"] == {"limit": "2", "min_price": "100"}
        assert entry.after_token == "X"
        assert entry.records[0].id == "1"

    @pytest.mark.asyncio
    async def test_error_status_is_transport_failure(
        self, client: SalesApiClient, mock_session: MagicMock
    ) -> None:
        _respond_with(mock_session, _response(status=503))
        with pytest.raises(TransportFailure, match="503"):
            await client.fetch_page("tok", PageQuery(limit=2))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403])
    async def test_rejected_token_is_credential_unavailable(
        self, client: SalesApiClient, mock_session: MagicMock, status: int
    ) -> None:
        _respond_with(mock_session, _response(status=status))
        with pytest.raises(CredentialUnavailable):
            await client.fetch_page("expired", PageQuery(limit=2))

    @pytest.mark.asyncio
    async def test_connection_error_is_transport_failure(
        self, client: SalesApiClient, mock_session: MagicMock
    ) -> None:
        mock_session.request.return_value.__aenter__ = AsyncMock(
            side_effect=aiohttp.ClientConnectionError("refused")
        )
        with pytest.raises(TransportFailure):
            await client.fetch_page("tok", PageQuery(limit=2))

    @pytest.mark.asyncio
    async def test_timeout_is_transport_failure(
        self, client: SalesApiClient, mock_session: MagicMock
    ) -> None:
        mock_session.request.return_value.__aenter__ = AsyncMock(
            side_effect=asyncio.TimeoutError()
        )
        with pytest.raises(TransportFailure):
            await client.fetch_page("tok", PageQuery(limit=2))

    @pytest.mark.asyncio
    async def test_invalid_json_is_decoding_failure(
        self, client: SalesApiClient, mock_session: MagicMock
    ) -> None:
        response = _response()
        response.json = AsyncMock(side_effect=json.JSONDecodeError("bad", "<html>", 0))
        _respond_with(mock_session, response)
        with pytest.raises(DecodingFailure):
            await client.fetch_page("tok", PageQuery(limit=2))

    @pytest.mark.asyncio
    async def test_wrong_shape_is_decoding_failure(
        self, client: SalesApiClient, mock_session: MagicMock
    ) -> None:
        _respond_with(mock_session, _response(body={"sales": "nope"}))
        with pytest.raises(DecodingFailure):
            await client.fetch_page("tok", PageQuery(limit=2))


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_close_leaves_injected_session_open(
        self, client: SalesApiClient, mock_session: MagicMock
    ) -> None:
        await client.close()
        mock_session.close.assert_not_called()
