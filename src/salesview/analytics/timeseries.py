"""Per-date sales totals for charting the displayed page.

CRITICAL: Totals are Decimal sums. Never use float.
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from salesview.models import SaleRecord, TimeSeriesPoint


def aggregate(records: Iterable[SaleRecord]) -> list[TimeSeriesPoint]:
    """Group records by calendar date and sum their prices.

    Time-of-day is discarded. Records without a date are skipped; a missing
    price counts as zero. Output is ordered by date ascending and is the same
    for the same input on every call.

    Args:
        records: The page of records currently displayed.

    Returns:
        One TimeSeriesPoint per distinct date. Empty list if input is empty.
    """
    totals: dict[date, Decimal] = defaultdict(Decimal)
    for record in records:
        if record.occurred_at is None:
            continue
        totals[record.occurred_at.date()] += record.price or Decimal("0")

    return [
        TimeSeriesPoint(date=day, total_sales=total)
        for day, total in sorted(totals.items())
    ]
