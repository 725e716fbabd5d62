"""Abstract data source interfaces.

Defines the contract for reaching the remote sales collection. The core
depends only on these interfaces, keeping transport details isolated in the
concrete implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from salesview.models import CacheEntry, FilterCriteria, NavigationDirective, SortSpec


@dataclass(frozen=True)
class PageQuery:
    """Everything the server needs to produce one page."""

    limit: int
    filters: FilterCriteria = field(default_factory=FilterCriteria)
    sort: SortSpec | None = None
    directive: NavigationDirective = field(default_factory=NavigationDirective)

    def as_params(self) -> dict[str, str]:
        """Render wire query parameters. Unset values are omitted."""
        params = {"limit": str(self.limit), **self.filters.as_params()}
        if self.directive.before:
            params["before"] = self.directive.before
        if self.directive.after:
            params["after"] = self.directive.after
        if self.sort is not None:
            params["sort_by"] = self.sort.field.value
            params["sort_order"] = self.sort.direction.value
        return params


class CredentialSource(ABC):
    """Issues the bearer credential used for data source requests."""

    @abstractmethod
    async def acquire(self) -> str:
        """Return a bearer token.

        Raises:
            CredentialUnavailable: No token can be issued yet.
            TransportFailure: The credential endpoint could not be reached.
        """
        ...


class SalesDataSource(ABC):
    """Remote query endpoint for sales records."""

    @abstractmethod
    async def fetch_page(self, credential: str, query: PageQuery) -> CacheEntry:
        """Fetch one page of records with its cursor tokens.

        Pagination is NOT handled here -- callers decide which directive to send.

        Raises:
            TransportFailure: Network/connection error or error status.
            DecodingFailure: Response body does not match the expected shape.
        """
        ...
