"""Shared data models for the sales browser.

CRITICAL: All monetary values use Decimal. Never use float for prices or totals.
Cursor tokens are opaque server-issued strings: never parse or build them locally.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any


class SortField(str, Enum):
    """Columns the server accepts as a sort key."""

    DATE = "date"
    PRICE = "price"


class SortDirection(str, Enum):
    """Sort order."""

    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


def _canonical_text(value: Any) -> str | None:
    """Render an optional filter value as stripped text; blank means unset."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _canonical_amount(value: Any) -> str | None:
    """Render a numeric filter value so 100, "100" and Decimal("100.00") agree."""
    text = _canonical_text(value)
    if text is None:
        return None
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return text
    if not amount.is_finite():
        return text
    return format(amount.normalize(), "f")


@dataclass(frozen=True)
class FilterCriteria:
    """User-selected constraints. Every field is optional; None means no constraint.

    Values are validated at the boundary (dashboard form / caller), not here.
    """

    start_date: date | str | None = None
    end_date: date | str | None = None
    min_price: Decimal | int | float | str | None = None
    customer_email: str | None = None
    phone_number: str | None = None

    def as_params(self) -> dict[str, str]:
        """Return only the constraints that are set, in canonical string form."""
        values = {
            "start_date": _canonical_text(self.start_date),
            "end_date": _canonical_text(self.end_date),
            "min_price": _canonical_amount(self.min_price),
            "customer_email": _canonical_text(self.customer_email),
            "phone_number": _canonical_text(self.phone_number),
        }
        return {k: v for k, v in values.items() if v is not None}

    def is_empty(self) -> bool:
        return not self.as_params()


@dataclass(frozen=True)
class SortSpec:
    """Active sort column and direction."""

    field: SortField
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class PageCursor:
    """Before/after token pair describing one displayed page."""

    before: str | None = None
    after: str | None = None


@dataclass(frozen=True)
class NavigationDirective:
    """Which page to request: the first page, or the page before/after a token.

    At most one token is set. Use the factory methods, which collapse an absent
    token to the first-page directive.
    """

    before: str | None = None
    after: str | None = None

    def __post_init__(self) -> None:
        if self.before is not None and self.after is not None:
            raise ValueError("NavigationDirective takes a before or an after token, not both")

    @classmethod
    def first_page(cls) -> "NavigationDirective":
        return cls()

    @classmethod
    def preceding(cls, token: str | None) -> "NavigationDirective":
        return cls(before=token) if token else cls()

    @classmethod
    def following(cls, token: str | None) -> "NavigationDirective":
        return cls(after=token) if token else cls()

    @property
    def is_first_page(self) -> bool:
        return self.before is None and self.after is None


@dataclass(frozen=True)
class SaleRecord:
    """A single sale in canonical shape (aliases resolved at ingestion)."""

    id: str | None = None
    occurred_at: datetime | None = None
    customer_email: str | None = None
    phone_number: str | None = None
    price: Decimal = Decimal("0")
    product_name: str | None = None


@dataclass(frozen=True)
class CacheEntry:
    """Result of one page fetch. Immutable once stored."""

    records: tuple[SaleRecord, ...] = ()
    before_token: str | None = None
    after_token: str | None = None

    @property
    def cursor(self) -> PageCursor:
        return PageCursor(before=self.before_token, after=self.after_token)


@dataclass(frozen=True)
class TimeSeriesPoint:
    """Total sales for one calendar date of the displayed page."""

    date: date
    total_sales: Decimal


@dataclass
class BrowserState:
    """Everything a renderer needs to draw the sales view."""

    records: tuple[SaleRecord, ...]
    time_series: list[TimeSeriesPoint]
    busy: bool
    error: str | None
    page: int
    has_next: bool
    has_previous: bool
    filters: FilterCriteria = field(default_factory=FilterCriteria)
    sort: SortSpec | None = None
