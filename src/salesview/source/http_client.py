"""Sales API client implementation via aiohttp.

Implements both the credential source (``POST /getAuthorize``) and the sales
data source (``GET /sales``) over one shared ClientSession, mapping aiohttp
failures onto the package's typed errors.
"""

import asyncio
from typing import Any

import aiohttp

from salesview.config import SalesApiSettings
from salesview.exceptions import CredentialUnavailable, DecodingFailure, TransportFailure
from salesview.logging import get_logger
from salesview.models import CacheEntry
from salesview.source.client import CredentialSource, PageQuery, SalesDataSource
from salesview.source.normalizer import parse_sales_page

logger = get_logger(__name__)

AUTHORIZE_PATH = "/getAuthorize"
SALES_PATH = "/sales"

# Statuses meaning the bearer token was refused, not that the API failed
REJECTED_CREDENTIAL_STATUSES = frozenset({401, 403})


class SalesApiClient(CredentialSource, SalesDataSource):
    """Concrete sales API client using aiohttp."""

    def __init__(
        self,
        settings: SalesApiSettings,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._settings = settings
        self._base_url = settings.base_url.rstrip("/")
        self._session = session
        self._owns_session = session is None

    async def connect(self) -> None:
        """Open the HTTP session if one was not injected."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.request_timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
            logger.info("sales_api_session_opened", base_url=self._base_url)

    async def close(self) -> None:
        """Close the HTTP session. Must be called to avoid unclosed-session warnings."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
            logger.info("sales_api_session_closed")
        self._session = None

    async def acquire(self) -> str:
        """Exchange configured credentials for a bearer token."""
        body = {
            "username": self._settings.username,
            "password": self._settings.password.get_secret_value(),
        }
        data = await self._request_json("POST", AUTHORIZE_PATH, json=body)
        if not isinstance(data, dict):
            raise DecodingFailure("Authorization response must be an object")

        token = data.get("token") or data.get("authorization")
        if not token:
            raise CredentialUnavailable("Authorization response carried no token")

        logger.info("credential_acquired")
        return str(token)

    async def fetch_page(self, credential: str, query: PageQuery) -> CacheEntry:
        """Fetch one page of sales and normalize it."""
        headers = {"Authorization": f"Bearer {credential}"}
        params = query.as_params()
        data = await self._request_json(
            "GET", SALES_PATH, authenticated=True, params=params, headers=headers
        )
        entry = parse_sales_page(data)
        logger.debug(
            "sales_page_received",
            records=len(entry.records),
            has_before=entry.before_token is not None,
            has_after=entry.after_token is not None,
        )
        return entry

    async def _request_json(
        self, method: str, path: str, authenticated: bool = False, **kwargs: Any
    ) -> Any:
        """Issue a request and decode its JSON body.

        Raises:
            CredentialUnavailable: An authenticated request was answered with
                401 or 403, i.e. the bearer token was rejected.
            TransportFailure: Connection error, timeout, or HTTP status >= 400.
            DecodingFailure: Body is not valid JSON.
        """
        if self._session is None or self._session.closed:
            await self.connect()

        url = f"{self._base_url}{path}"
        try:
            async with self._session.request(method, url, **kwargs) as response:
                if authenticated and response.status in REJECTED_CREDENTIAL_STATUSES:
                    logger.warning("sales_api_credential_rejected", path=path, status=response.status)
                    raise CredentialUnavailable(f"{method} {path} rejected the credential")
                if response.status >= 400:
                    logger.warning("sales_api_error_status", path=path, status=response.status)
                    raise TransportFailure(f"{method} {path} returned HTTP {response.status}")
                try:
                    return await response.json(content_type=None)
                except (aiohttp.ContentTypeError, ValueError) as e:
                    raise DecodingFailure(f"{method} {path} returned a non-JSON body") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("sales_api_request_failed", path=path, error=str(e))
            raise TransportFailure(f"{method} {path} failed: {e}") from e
