"""Parsers for API discovery documents."""

from kubedump.controllers.discovery.parsers.catalog_parser import (
    CatalogParseError,
    CatalogParser,
)

__all__ = ["CatalogParseError", "CatalogParser"]
