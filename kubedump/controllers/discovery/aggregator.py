"""Failure accumulator threaded through a discovery run."""

from __future__ import annotations

import logging

from kubedump.controllers.discovery.errors import (
    DeliveryFailure,
    ListFailure,
    PartialDiscoveryError,
    ResourceFailure,
)
from kubedump.models.core.resource_info import ResourceIdentity

logger = logging.getLogger(__name__)


class FailureAggregator:
    """Collects per-resource failures without stopping the run.

    Nothing is dropped: every recorded failure ends up in the combined
    error, in the order it was recorded.
    """

    def __init__(self) -> None:
        self._failures: list[ResourceFailure] = []

    def __len__(self) -> int:
        return len(self._failures)

    def __bool__(self) -> bool:
        return bool(self._failures)

    @property
    def failures(self) -> list[ResourceFailure]:
        return list(self._failures)

    def record(self, failure: ResourceFailure) -> ResourceFailure:
        logger.warning("%s", failure)
        self._failures.append(failure)
        return failure

    def record_list_failure(
        self, resource: ResourceIdentity, cause: BaseException
    ) -> ResourceFailure:
        failure = ListFailure(resource, cause)
        failure.__cause__ = cause
        return self.record(failure)

    def record_delivery_failure(
        self, resource: ResourceIdentity, cause: BaseException
    ) -> ResourceFailure:
        failure = DeliveryFailure(resource, cause)
        failure.__cause__ = cause
        return self.record(failure)

    def combine(self) -> PartialDiscoveryError | None:
        """Return the composite error, or None when nothing failed."""
        if not self._failures:
            return None
        return PartialDiscoveryError(self._failures)


__all__ = ["FailureAggregator"]
