"""Data source layer -- sales API integration via aiohttp."""

from salesview.source.client import CredentialSource, PageQuery, SalesDataSource
from salesview.source.http_client import SalesApiClient
from salesview.source.normalizer import normalize_record, parse_sales_page

__all__ = [
    "CredentialSource",
    "PageQuery",
    "SalesApiClient",
    "SalesDataSource",
    "normalize_record",
    "parse_sales_page",
]
