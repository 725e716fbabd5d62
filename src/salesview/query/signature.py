"""Canonical query signatures for cache lookup.

A signature is a compact JSON document with sorted keys, so two logically
identical filter/sort/cursor states always serialize to the same string no
matter in which order their fields were set.
"""

import json
from typing import Any, NewType

from salesview.models import FilterCriteria, NavigationDirective, SortSpec

QuerySignature = NewType("QuerySignature", str)


def _dump(components: dict[str, Any]) -> QuerySignature:
    return QuerySignature(json.dumps(components, sort_keys=True, separators=(",", ":")))


def build_signature(
    filters: FilterCriteria,
    sort: SortSpec | None,
    directive: NavigationDirective,
) -> QuerySignature:
    """Derive the cache key for one page request.

    Only the navigation token in use is part of the key, not the pagination
    history: tokens are the server-authoritative identity of a page.

    Args:
        filters: Active filters. Unset and blank values are omitted.
        sort: Active sort, or None when no explicit sort is selected.
        directive: Which page is being requested.

    Returns:
        A deterministic string key.
    """
    components: dict[str, Any] = {
        "filters": filters.as_params(),
        "sort": (
            {"field": sort.field.value, "direction": sort.direction.value}
            if sort is not None
            else None
        ),
        "cursor": {"before": directive.before, "after": directive.after},
    }
    return _dump(components)


def parse_signature(signature: QuerySignature) -> dict[str, Any]:
    """Decode a signature back into its components.

    ``_dump(parse_signature(sig)) == sig`` for any signature produced by
    :func:`build_signature`.
    """
    return json.loads(signature)


def reserialize(signature: QuerySignature) -> QuerySignature:
    """Round-trip a signature through its decoded form."""
    return _dump(parse_signature(signature))
