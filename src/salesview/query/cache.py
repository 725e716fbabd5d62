"""Session-scoped in-memory cache of fetched pages, keyed by query signature.

No eviction: result pages are small and the cache lives only as long as the
browser session. Lookups are exact; there is no fuzzy or prefix matching.
"""

from salesview.logging import get_logger
from salesview.models import CacheEntry
from salesview.query.signature import QuerySignature

logger = get_logger(__name__)


class ResultCache:
    """Maps a QuerySignature to the CacheEntry fetched for it."""

    def __init__(self) -> None:
        self._entries: dict[QuerySignature, CacheEntry] = {}
        self.hits = 0
        self.misses = 0

    def get(self, signature: QuerySignature) -> CacheEntry | None:
        """Return the entry stored under exactly this signature, or None on miss."""
        entry = self._entries.get(signature)
        if entry is None:
            self.misses += 1
        else:
            self.hits += 1
        return entry

    def put(self, signature: QuerySignature, entry: CacheEntry) -> None:
        """Store an entry, replacing any previous entry for the signature in full."""
        replaced = signature in self._entries
        self._entries[signature] = entry
        logger.debug(
            "cache_put",
            records=len(entry.records),
            replaced=replaced,
            size=len(self._entries),
        )

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __contains__(self, signature: object) -> bool:
        return signature in self._entries

    def __len__(self) -> int:
        return len(self._entries)
