"""Navigation layer -- cursor pagination and sort selection."""

from salesview.navigation.pagination import CursorPaginator
from salesview.navigation.sort import SortController

__all__ = ["CursorPaginator", "SortController"]
