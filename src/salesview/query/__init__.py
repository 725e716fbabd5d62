"""Query layer -- canonical signatures and the session result cache."""

from salesview.query.cache import ResultCache
from salesview.query.signature import (
    QuerySignature,
    build_signature,
    parse_signature,
    reserialize,
)

__all__ = [
    "QuerySignature",
    "ResultCache",
    "build_signature",
    "parse_signature",
    "reserialize",
]
