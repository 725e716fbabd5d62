"""Sales browser -- the owned state object behind the sales view.

Ties filters, sort, cursor pagination, the fetch orchestrator and the
time-series aggregator together and exposes the user operations a renderer
invokes. Filter and sort changes always reset pagination, since cursor
tokens are only valid within one filter/sort context.
"""

from salesview.analytics.timeseries import aggregate
from salesview.exceptions import CredentialUnavailable, SalesViewError
from salesview.logging import get_logger
from salesview.models import (
    BrowserState,
    FilterCriteria,
    NavigationDirective,
    SaleRecord,
    SortField,
    SortSpec,
    TimeSeriesPoint,
)
from salesview.navigation.pagination import CursorPaginator
from salesview.navigation.sort import SortController
from salesview.orchestrator import FetchOrchestrator
from salesview.query.cache import ResultCache
from salesview.source.client import CredentialSource, SalesDataSource

logger = get_logger(__name__)


class SalesBrowser:
    """Browse remote sales records with filters, sort and cursor pagination.

    Typed load failures never propagate out of the user operations: they are
    logged and exposed through ``snapshot().error``. Retrying is simply
    invoking the operation again, since failed fetches are never cached. A
    failed page move leaves the paginator on the page still displayed.

    Args:
        source: Remote sales data source.
        credentials: Issues the bearer credential.
        page_limit: Records requested per page.
        cache: Result cache shared for the session.
    """

    def __init__(
        self,
        source: SalesDataSource,
        credentials: CredentialSource,
        page_limit: int = 50,
        cache: ResultCache | None = None,
    ) -> None:
        self._credentials = credentials
        self._orchestrator = FetchOrchestrator(source, page_limit=page_limit, cache=cache)
        self._paginator = CursorPaginator()
        self._sort = SortController()
        self._filters = FilterCriteria()
        self._series_source: tuple[SaleRecord, ...] | None = None
        self._series: list[TimeSeriesPoint] = []

    @property
    def orchestrator(self) -> FetchOrchestrator:
        return self._orchestrator

    @property
    def paginator(self) -> CursorPaginator:
        return self._paginator

    @property
    def filters(self) -> FilterCriteria:
        return self._filters

    @property
    def sort(self) -> SortSpec | None:
        return self._sort.active

    # ──────────────────────────────────────────────
    # Lifecycle
    # ──────────────────────────────────────────────

    async def start(self) -> BrowserState:
        """Request the first page, then authorize.

        The first-page load is deferred until the credential arrives, so it
        is issued exactly once whichever way authorization goes.
        """
        await self._load(NavigationDirective.first_page())
        await self.authorize()
        return self.snapshot()

    async def authorize(self) -> None:
        """Acquire a credential and hand it to the orchestrator.

        A pending (unavailable) credential keeps loads deferred; any other
        failure becomes the visible error state.
        """
        try:
            credential = await self._credentials.acquire()
        except CredentialUnavailable as e:
            logger.info("credential_pending", reason=str(e))
            return
        except SalesViewError as e:
            logger.warning("authorization_failed", error=str(e))
            self._orchestrator.record_error(e)
            return

        try:
            entry = await self._orchestrator.provide_credential(credential)
        except SalesViewError as e:
            logger.info("deferred_load_failed", error_type=type(e).__name__)
            return
        if entry is not None:
            self._paginator.update_tokens(entry.before_token, entry.after_token)

    # ──────────────────────────────────────────────
    # User operations
    # ──────────────────────────────────────────────

    async def apply_filters(self, filters: FilterCriteria) -> BrowserState:
        """Replace the active filters and load their first page."""
        self._filters = filters
        self._paginator.reset()
        logger.info("filters_applied", filters=filters.as_params())
        await self._load(NavigationDirective.first_page())
        return self.snapshot()

    async def toggle_sort(self, field: SortField | str) -> BrowserState:
        """Toggle the sort column and load the first page in the new order."""
        spec = self._sort.toggle(field)
        self._paginator.reset()
        logger.info("sort_toggled", field=spec.field.value, direction=spec.direction.value)
        await self._load(NavigationDirective.first_page())
        return self.snapshot()

    async def go_next(self) -> BrowserState:
        """Load the next page. No-op when the server issued no after token."""
        checkpoint = self._paginator.checkpoint()
        directive = self._paginator.go_next(self._paginator.cursor.after)
        if directive is not None and not await self._load(directive):
            self._paginator.restore(checkpoint)
        return self.snapshot()

    async def go_previous(self) -> BrowserState:
        """Load the previous page. No-op on the first page."""
        checkpoint = self._paginator.checkpoint()
        directive = self._paginator.go_previous()
        if directive is not None and not await self._load(directive):
            self._paginator.restore(checkpoint)
        return self.snapshot()

    # ──────────────────────────────────────────────
    # Observable state
    # ──────────────────────────────────────────────

    def time_series(self) -> list[TimeSeriesPoint]:
        """Per-date totals of the displayed page, recomputed when the page changes."""
        records = self._orchestrator.state.records
        if records is not self._series_source:
            self._series = aggregate(records)
            self._series_source = records
        return self._series

    def snapshot(self) -> BrowserState:
        state = self._orchestrator.state
        return BrowserState(
            records=state.records,
            time_series=list(self.time_series()),
            busy=state.busy,
            error=str(state.error) if state.error is not None else None,
            page=self._paginator.page,
            has_next=self._paginator.has_next,
            has_previous=self._paginator.has_previous,
            filters=self._filters,
            sort=self._sort.active,
        )

    async def _load(self, directive: NavigationDirective) -> bool:
        """Load a page through the orchestrator. False when the load failed."""
        try:
            entry = await self._orchestrator.load(
                self._filters, self._sort.active, directive
            )
        except SalesViewError as e:
            logger.info("load_error_surfaced", error_type=type(e).__name__)
            return False
        if entry is not None:
            self._paginator.update_tokens(entry.before_token, entry.after_token)
        return True
