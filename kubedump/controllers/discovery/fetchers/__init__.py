"""Fetchers for the discovery controller."""

from kubedump.controllers.discovery.fetchers.catalog_fetcher import (
    Catalog,
    CatalogFetcher,
    CatalogUnavailableError,
)
from kubedump.controllers.discovery.fetchers.list_fetcher import (
    ListFetcher,
    ListResponseError,
)

__all__ = [
    "Catalog",
    "CatalogFetcher",
    "CatalogUnavailableError",
    "ListFetcher",
    "ListResponseError",
]
