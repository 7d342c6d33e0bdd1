"""kubedump - dump every object of every resource type of a Kubernetes cluster."""

from kubedump.controllers.discovery import (
    DiscoveryController,
    DiscoveryResult,
    discover_objects,
)
from kubedump.dumpers import DirDumper, StreamDumper
from kubedump.models.state import DiscoveryOptions

__version__ = "0.1.0"

__all__ = [
    "DirDumper",
    "DiscoveryController",
    "DiscoveryOptions",
    "DiscoveryResult",
    "StreamDumper",
    "__version__",
    "discover_objects",
]
