"""Data models for kubedump."""

from kubedump.models.core import CatalogEntry, Page, ResourceIdentity
from kubedump.models.state import DiscoveryOptions

__all__ = ["CatalogEntry", "DiscoveryOptions", "Page", "ResourceIdentity"]
