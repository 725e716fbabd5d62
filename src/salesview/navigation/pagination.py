"""Cursor-based pagination with a history stack for backward navigation.

The server only hands out before/after tokens for the page it just returned.
To step back without asking the server to re-derive earlier cursors, every
forward step pushes the cursor pair of the page being left onto a LIFO stack.

Invariant: len(history) == page - 1 and page >= 1 at all times.
"""

from dataclasses import dataclass

from salesview.logging import get_logger
from salesview.models import NavigationDirective, PageCursor

logger = get_logger(__name__)


@dataclass(frozen=True)
class PaginatorCheckpoint:
    """Saved paginator position, restored when a navigation load fails."""

    page: int
    cursor: PageCursor
    history: tuple[PageCursor, ...]


class CursorPaginator:
    """Owns the page index, the active cursor pair, and the history stack.

    States:
        AtFirstPage: history empty, page == 1.
        MidSequence: history non-empty, page > 1.

    Pagination state is only meaningful for one fixed filter/sort context;
    callers must ``reset()`` whenever filters or sort change.
    """

    def __init__(self) -> None:
        self._page = 1
        self._cursor = PageCursor()
        self._history: list[PageCursor] = []

    @property
    def page(self) -> int:
        return self._page

    @property
    def cursor(self) -> PageCursor:
        """Tokens of the page currently displayed."""
        return self._cursor

    @property
    def history(self) -> tuple[PageCursor, ...]:
        return tuple(self._history)

    @property
    def has_next(self) -> bool:
        """Forward navigation is possible only when the server issued an after token."""
        return bool(self._cursor.after)

    @property
    def has_previous(self) -> bool:
        return self._page > 1

    def update_tokens(self, before: str | None, after: str | None) -> None:
        """Record the tokens of the page that is now displayed."""
        self._cursor = PageCursor(before=before, after=after)

    def go_next(self, after_token: str | None) -> NavigationDirective | None:
        """Advance one page.

        Returns the directive to fetch, or None (no-op) when there is no
        after token, i.e. no next page.
        """
        if not after_token:
            logger.debug("go_next_ignored", page=self._page, reason="no_after_token")
            return None

        self._history.append(self._cursor)
        self._page += 1
        logger.debug("page_advanced", page=self._page, depth=len(self._history))
        return NavigationDirective.following(after_token)

    def go_previous(self) -> NavigationDirective | None:
        """Step back one page.

        Returns None (no-op) on the first page. When the stack is empty after
        popping, the first page is re-fetched; otherwise the popped entry's
        before token is used, falling back to the first page when it has none.
        """
        if self._page <= 1:
            logger.debug("go_previous_ignored", page=self._page)
            return None

        previous = self._history.pop()
        self._page -= 1
        logger.debug("page_retreated", page=self._page, depth=len(self._history))

        if not self._history:
            return NavigationDirective.first_page()
        return NavigationDirective.preceding(previous.before)

    def checkpoint(self) -> PaginatorCheckpoint:
        return PaginatorCheckpoint(self._page, self._cursor, tuple(self._history))

    def restore(self, checkpoint: PaginatorCheckpoint) -> None:
        """Return to a saved position, undoing a step whose page never displayed."""
        self._page = checkpoint.page
        self._cursor = checkpoint.cursor
        self._history = list(checkpoint.history)
        logger.debug("page_restored", page=self._page, depth=len(self._history))

    def reset(self) -> None:
        """Return to the first page and forget all history and tokens."""
        self._history.clear()
        self._page = 1
        self._cursor = PageCursor()
