"""Fetch orchestrator -- cache-first page loading with latest-request-wins.

Each load:
  1. DEFER: no credential yet -> remember the request, replay it on arrival
  2. KEY: derive the query signature
  3. HIT: cached entry -> display immediately, no network
  4. MISS: fetch from the data source, write through the cache, display
  5. FAIL: record a typed error, keep displayed records and cache untouched

Every load is tagged with a monotonically increasing sequence number. Only
the latest issued load may change displayed state; a response that arrives
after a newer load started is discarded.
"""

from dataclasses import dataclass

import structlog

from salesview.exceptions import CredentialUnavailable, SalesViewError
from salesview.logging import get_logger
from salesview.models import (
    CacheEntry,
    FilterCriteria,
    NavigationDirective,
    SaleRecord,
    SortSpec,
)
from salesview.query.cache import ResultCache
from salesview.query.signature import build_signature
from salesview.source.client import PageQuery, SalesDataSource

logger = get_logger(__name__)


@dataclass
class ViewState:
    """Displayed page, busy flag and last error, as seen by the renderer."""

    records: tuple[SaleRecord, ...] = ()
    busy: bool = False
    error: SalesViewError | None = None


@dataclass(frozen=True)
class _PendingLoad:
    filters: FilterCriteria
    sort: SortSpec | None
    directive: NavigationDirective


class FetchOrchestrator:
    """Loads pages through the result cache and owns the displayed ViewState.

    Args:
        source: Remote sales data source.
        page_limit: Records requested per page.
        cache: Result cache; a fresh session cache is created if omitted.
    """

    def __init__(
        self,
        source: SalesDataSource,
        page_limit: int = 50,
        cache: ResultCache | None = None,
    ) -> None:
        self._source = source
        self._page_limit = page_limit
        self._cache = cache if cache is not None else ResultCache()
        self._credential: str | None = None
        self._deferred: _PendingLoad | None = None
        self._sequence = 0
        self.state = ViewState()

    @property
    def cache(self) -> ResultCache:
        return self._cache

    @property
    def has_credential(self) -> bool:
        return self._credential is not None

    @property
    def has_deferred(self) -> bool:
        return self._deferred is not None

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    async def provide_credential(self, credential: str) -> CacheEntry | None:
        """Store the bearer credential and replay the deferred load, if any."""
        self._credential = credential
        pending, self._deferred = self._deferred, None
        if pending is None:
            return None
        logger.info("replaying_deferred_load")
        return await self.load(pending.filters, pending.sort, pending.directive)

    async def load(
        self,
        filters: FilterCriteria,
        sort: SortSpec | None,
        directive: NavigationDirective,
    ) -> CacheEntry | None:
        """Load one page and display it.

        Returns:
            The displayed entry, or None when the load was deferred (no
            credential) or superseded by a newer load.

        Raises:
            TransportFailure, DecodingFailure: The latest load failed. The
                error is also recorded on ``state.error``.
        """
        pending = _PendingLoad(filters, sort, directive)
        if self._credential is None:
            self._deferred = pending
            logger.info("load_deferred", reason="credential_unavailable")
            return None

        self._sequence += 1
        sequence = self._sequence
        signature = build_signature(filters, sort, directive)

        with structlog.contextvars.bound_contextvars(load_sequence=sequence):
            cached = self._cache.get(signature)
            if cached is not None:
                logger.debug("cache_hit", records=len(cached.records))
                self._display(cached)
                return cached

            self.state.busy = True
            query = PageQuery(
                limit=self._page_limit,
                filters=filters,
                sort=sort,
                directive=directive,
            )
            try:
                entry = await self._source.fetch_page(self._credential, query)
            except CredentialUnavailable:
                # Credential was revoked server-side; wait for a new one.
                self._credential = None
                if not self._is_latest(sequence):
                    logger.warning("credential_rejected_stale_load_dropped")
                    return None
                self._deferred = pending
                self.state.busy = False
                logger.warning("credential_rejected_load_deferred")
                return None
            except SalesViewError as e:
                if not self._is_latest(sequence):
                    logger.info(
                        "stale_failure_discarded",
                        latest_sequence=self._sequence,
                        error=str(e),
                    )
                    return None
                self.state.busy = False
                self.state.error = e
                logger.warning(
                    "load_failed",
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise

            # A superseded result is still valid for its own signature.
            self._cache.put(signature, entry)

            if not self._is_latest(sequence):
                logger.info("stale_response_discarded", latest_sequence=self._sequence)
                return None

            self._display(entry)
            logger.info(
                "page_fetched",
                records=len(entry.records),
                has_next=entry.after_token is not None,
                cache_size=len(self._cache),
            )
            return entry

    def record_error(self, error: SalesViewError) -> None:
        """Surface a failure that happened outside a load (e.g. authorization)."""
        self.state.busy = False
        self.state.error = error

    def _is_latest(self, sequence: int) -> bool:
        return sequence == self._sequence

    def _display(self, entry: CacheEntry) -> None:
        self.state.records = entry.records
        self.state.busy = False
        self.state.error = None
