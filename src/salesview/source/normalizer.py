"""Ingestion boundary: map raw sales API payloads onto the canonical models.

The API is not consistent about field names (``sales`` vs ``data``,
``price`` vs ``amount``, ...). Every alias is resolved here, once, so the rest
of the package only ever sees SaleRecord and CacheEntry.
"""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from salesview.exceptions import DecodingFailure
from salesview.logging import get_logger
from salesview.models import CacheEntry, SaleRecord

logger = get_logger(__name__)

RECORD_KEYS = ("sales", "data")
BEFORE_KEYS = ("before", "beforeToken")
AFTER_KEYS = ("after", "afterToken")

DATE_KEYS = ("date", "created_at")
EMAIL_KEYS = ("customer_email", "email")
PHONE_KEYS = ("phone_number", "phone")
PRICE_KEYS = ("price", "amount")
PRODUCT_KEYS = ("product_name", "product")


def _first(raw: dict, keys: tuple[str, ...]) -> Any:
    """Return the first aliased value that is present and non-empty."""
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 string or epoch milliseconds. Unparsable -> None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _from_epoch_ms(value)

    text = str(value).strip()
    if text.isdigit():
        return _from_epoch_ms(int(text))
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _from_epoch_ms(value: int | float) -> datetime | None:
    # NaN, infinities and out-of-range epochs are unparsable, not fatal
    try:
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


def parse_amount(value: Any) -> Decimal:
    """Parse a monetary value. Missing or unparsable -> Decimal("0")."""
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return Decimal("0")
    return amount if amount.is_finite() else Decimal("0")


def normalize_record(raw: Any) -> SaleRecord:
    """Convert one raw record dict into a SaleRecord."""
    if not isinstance(raw, dict):
        raise DecodingFailure(f"Sale record must be an object, got {type(raw).__name__}")

    raw_date = _first(raw, DATE_KEYS)
    occurred_at = parse_timestamp(raw_date)
    if occurred_at is None and raw_date is not None:
        logger.debug("unparsable_record_date", record_id=raw.get("id"))

    return SaleRecord(
        id=_optional_str(raw.get("id")),
        occurred_at=occurred_at,
        customer_email=_optional_str(_first(raw, EMAIL_KEYS)),
        phone_number=_optional_str(_first(raw, PHONE_KEYS)),
        price=parse_amount(_first(raw, PRICE_KEYS)),
        product_name=_optional_str(_first(raw, PRODUCT_KEYS)),
    )


def parse_sales_page(payload: Any) -> CacheEntry:
    """Convert a full ``/sales`` response body into a CacheEntry.

    Raises:
        DecodingFailure: If the payload or its record list has the wrong shape.
    """
    if not isinstance(payload, dict):
        raise DecodingFailure(
            f"Sales response must be an object, got {type(payload).__name__}"
        )

    raw_records = _first(payload, RECORD_KEYS)
    if raw_records is None:
        raw_records = []
    if not isinstance(raw_records, list):
        raise DecodingFailure(
            f"Sales records must be a list, got {type(raw_records).__name__}"
        )

    return CacheEntry(
        records=tuple(normalize_record(r) for r in raw_records),
        before_token=_optional_str(_first(payload, BEFORE_KEYS)),
        after_token=_optional_str(_first(payload, AFTER_KEYS)),
    )
