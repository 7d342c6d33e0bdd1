"""Errors raised and recorded by the discovery engine."""

from __future__ import annotations

from kubedump.constants.enums import FailurePhase
from kubedump.models.core.resource_info import ResourceIdentity


class DiscoveryError(Exception):
    """Base exception for discovery errors."""


class DiscoveryUnavailableError(DiscoveryError):
    """Raised when the resource catalog cannot be built."""


class UnsatisfiedRequirementError(DiscoveryError):
    """Raised when must-exist resources are absent from the catalog."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = sorted(missing)
        super().__init__(f"missing resources: [{' '.join(self.missing)}]")


class ResourceFailure(DiscoveryError):
    """A failure tied to one resource type, recorded instead of raised."""

    phase: FailurePhase
    _verb = "process"

    def __init__(self, resource: ResourceIdentity, cause: BaseException) -> None:
        self.resource = resource
        self.cause = cause
        super().__init__(f"failed to {self._verb} {resource}: {cause}")


class ListFailure(ResourceFailure):
    """Fetching a page of a resource type failed."""

    phase = FailurePhase.LIST
    _verb = "list"


class DeliveryFailure(ResourceFailure):
    """The sink rejected a page of a resource type."""

    phase = FailurePhase.DELIVERY
    _verb = "dump"


class PartialDiscoveryError(DiscoveryError):
    """Composite error carrying every recorded resource failure."""

    def __init__(self, failures: list[ResourceFailure]) -> None:
        self.failures = list(failures)
        super().__init__("; ".join(str(failure) for failure in self.failures))


__all__ = [
    "DeliveryFailure",
    "DiscoveryError",
    "DiscoveryUnavailableError",
    "ListFailure",
    "PartialDiscoveryError",
    "ResourceFailure",
    "UnsatisfiedRequirementError",
]
