"""Discovery domain: catalog, filtering, paginated enumeration."""

from kubedump.controllers.discovery.aggregator import FailureAggregator
from kubedump.controllers.discovery.controller import (
    DiscoveryController,
    DiscoveryResult,
    FetchStatus,
    discover_objects,
)
from kubedump.controllers.discovery.errors import (
    DeliveryFailure,
    DiscoveryError,
    DiscoveryUnavailableError,
    ListFailure,
    PartialDiscoveryError,
    ResourceFailure,
    UnsatisfiedRequirementError,
)
from kubedump.controllers.discovery.filters import (
    ExistenceValidator,
    FilterDecision,
    ResourceFilter,
)

__all__ = [
    "DeliveryFailure",
    "DiscoveryController",
    "DiscoveryError",
    "DiscoveryResult",
    "DiscoveryUnavailableError",
    "ExistenceValidator",
    "FailureAggregator",
    "FetchStatus",
    "FilterDecision",
    "ListFailure",
    "PartialDiscoveryError",
    "ResourceFailure",
    "ResourceFilter",
    "UnsatisfiedRequirementError",
    "discover_objects",
]
