"""Core data models."""

from kubedump.models.core.page import Page
from kubedump.models.core.resource_info import (
    CatalogEntry,
    ResourceIdentity,
    ServedGroup,
    parse_group_version,
)

__all__ = ["CatalogEntry", "Page", "ResourceIdentity", "ServedGroup", "parse_group_version"]
