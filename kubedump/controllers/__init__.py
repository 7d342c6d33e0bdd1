"""Controllers module for kubedump.

This module provides the controllers driving cluster discovery.
"""

from __future__ import annotations

# Base classes
from kubedump.controllers.base import BaseController

# Discovery domain
from kubedump.controllers.discovery import (
    DiscoveryController,
    DiscoveryResult,
    FetchStatus,
    discover_objects,
)

__all__ = [
    # Base
    "BaseController",
    # Discovery
    "DiscoveryController",
    "DiscoveryResult",
    "FetchStatus",
    "discover_objects",
]
