"""Discovery controller: enumerates every object of every listable resource type.

The run is strictly sequential: catalog, must-exist validation, then one
resource type after another, page after page. Failures of single resource
types are accumulated and reported together once the catalog is exhausted.
"""

from __future__ import annotations

import asyncio
import io
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from kubedump.constants.defaults import KUBECTL_BINARY_DEFAULT
from kubedump.constants.enums import FetchState
from kubedump.constants.timeouts import CLUSTER_REQUEST_TIMEOUT
from kubedump.controllers.base import BaseController
from kubedump.controllers.discovery.aggregator import FailureAggregator
from kubedump.controllers.discovery.errors import (
    DiscoveryUnavailableError,
    PartialDiscoveryError,
)
from kubedump.controllers.discovery.fetchers import (
    Catalog,
    CatalogFetcher,
    CatalogUnavailableError,
    ListFetcher,
)
from kubedump.controllers.discovery.filters import ExistenceValidator, ResourceFilter
from kubedump.dumpers.base import PageSink
from kubedump.models.core.page import Page
from kubedump.models.core.resource_info import CatalogEntry, ResourceIdentity
from kubedump.models.state.discovery_options import DiscoveryOptions
from kubedump.utils.kubectl_runner import KubectlRunner, format_request_timeout

logger = logging.getLogger(__name__)

RunKubectlFunc = Callable[[tuple[str, ...]], Awaitable[str]]


@dataclass
class FetchStatus:
    """Status tracking for the enumeration of a single resource type."""

    source_name: str
    state: FetchState = FetchState.LOADING
    error_message: str | None = None
    pages: int = 0
    objects: int = 0
    last_updated: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "source_name": self.source_name,
            "state": self.state.value,
            "error_message": self.error_message,
            "pages": self.pages,
            "objects": self.objects,
            "last_updated": self.last_updated.isoformat()
            if self.last_updated
            else None,
        }


@dataclass
class DiscoveryResult:
    """Outcome of a run that recorded no failures."""

    catalog: Catalog
    statuses: dict[str, FetchStatus] = field(default_factory=dict)

    @property
    def pages(self) -> int:
        return sum(status.pages for status in self.statuses.values())

    @property
    def objects(self) -> int:
        return sum(status.objects for status in self.statuses.values())


class _Deadline:
    """Remaining time of the run, shared by every call."""

    def __init__(self, timeout_seconds: float | None) -> None:
        self._expires_at = (
            time.monotonic() + timeout_seconds if timeout_seconds is not None else None
        )

    def remaining(self) -> float | None:
        if self._expires_at is None:
            return None
        return self._expires_at - time.monotonic()

    def request_timeout(self) -> str:
        remaining = self.remaining()
        if remaining is None:
            return CLUSTER_REQUEST_TIMEOUT
        return format_request_timeout(remaining)


class DiscoveryController(BaseController):
    """Discovers all resource types and streams their objects to a sink.

    The sink can receive the same kind many times and must handle duplicate
    objects: some API servers do not implement list chunking correctly.
    """

    def __init__(
        self,
        sink: PageSink,
        options: DiscoveryOptions | None = None,
        *,
        run_kubectl_func: RunKubectlFunc | None = None,
        context: str | None = None,
        kubectl: str = KUBECTL_BINARY_DEFAULT,
    ) -> None:
        """Initialize the controller.

        Args:
            sink: Receives every fetched page.
            options: Discovery options; defaults apply when omitted.
            run_kubectl_func: Async kubectl runner; a KubectlRunner by default.
            context: Kubernetes context for the default runner.
            kubectl: kubectl binary for the default runner.
        """
        super().__init__()
        self.sink = sink
        self.options = options or DiscoveryOptions()
        self._run_kubectl = run_kubectl_func or KubectlRunner(context=context, kubectl=kubectl)
        self._deadline = _Deadline(self.options.timeout_seconds)

        self._catalog_fetcher = CatalogFetcher(self._run_kubectl_bounded)
        self._list_fetcher = ListFetcher(self._run_kubectl_bounded, self.options.page_size)
        self._filter = ResourceFilter(self.options)
        self._validator = ExistenceValidator(self.options.must_exist_resources)

        self._fetch_states: dict[str, FetchStatus] = {}
        self.failures = FailureAggregator()

    @property
    def fetch_states(self) -> dict[str, FetchStatus]:
        return dict(self._fetch_states)

    async def _run_kubectl_bounded(self, args: tuple[str, ...]) -> str:
        """Run kubectl within the remaining run deadline."""
        remaining = self._deadline.remaining()
        if remaining is not None and remaining <= 0:
            raise TimeoutError("discovery deadline exceeded")
        bounded = (*args, f"--request-timeout={self._deadline.request_timeout()}")
        if remaining is None:
            return await self._run_kubectl(bounded)
        try:
            return await asyncio.wait_for(self._run_kubectl(bounded), timeout=remaining)
        except asyncio.TimeoutError as exc:
            raise TimeoutError("discovery deadline exceeded") from exc

    async def check_connection(self) -> bool:
        """Check whether the API server answers discovery requests."""
        try:
            await self._catalog_fetcher.fetch_served_groups()
        except CatalogUnavailableError as exc:
            logger.warning("Cluster connection check failed: %s", exc)
            return False
        return True

    async def fetch_all(self) -> DiscoveryResult:
        return await self.discover_objects()

    async def fetch_catalog(self) -> Catalog:
        """Build the catalog and log it.

        Raises:
            DiscoveryUnavailableError: If the server cannot be queried.
        """
        try:
            catalog = await self._catalog_fetcher.fetch_catalog()
        except CatalogUnavailableError as exc:
            raise DiscoveryUnavailableError(
                f"failed to get server preferred resources: {exc}"
            ) from exc

        for group_version, error in catalog.failed_group_versions.items():
            self.options.write_log(f"failed to discover {group_version}: {error}")
        self._log_catalog(catalog)
        return catalog

    def _log_catalog(self, catalog: Catalog) -> None:
        if self.options.log_writer is None:
            return
        tree = Tree(Text("Discovered resources:"))
        for group_version, entries in catalog.group_versions.items():
            branch = tree.add(Text(group_version))
            for entry in entries:
                branch.add(Text(entry.identity.kind))

        buffer = io.StringIO()
        Console(file=buffer, width=120, color_system=None, highlight=False).print(tree)
        self.options.write_log(buffer.getvalue().rstrip("\n"))

    async def discover_objects(self) -> DiscoveryResult:
        """Enumerate every eligible resource type and deliver its pages.

        Raises:
            DiscoveryUnavailableError: If the catalog cannot be built.
            UnsatisfiedRequirementError: If must-exist resources are missing;
                nothing is listed in that case.
            PartialDiscoveryError: If any list or delivery failed, after all
                resource types were attempted.
        """
        self._deadline = _Deadline(self.options.timeout_seconds)
        self._fetch_states = {}
        self.failures = FailureAggregator()

        catalog = await self.fetch_catalog()
        entries = catalog.entries
        self._validator.validate(entries)

        for entry in entries:
            await self._discover_resource(entry)

        error = self.failures.combine()
        if error is not None:
            raise error
        return DiscoveryResult(catalog=catalog, statuses=self.fetch_states)

    async def _discover_resource(self, entry: CatalogEntry) -> None:
        resource = entry.identity
        status = FetchStatus(source_name=str(resource))
        self._fetch_states[str(resource)] = status

        decision = self._filter.evaluate(entry)
        if not decision.eligible:
            self.options.write_log(f"skipping {resource}: {decision.reason}")
            status.state = FetchState.SKIPPED
            status.error_message = decision.reason
            return

        try:
            async for page in self._list_fetcher.iter_pages(resource):
                status.pages += 1
                status.objects += len(page.items)
                status.last_updated = datetime.now(timezone.utc)
                self._deliver(resource, page, status)
        except Exception as exc:
            failure = self.failures.record_list_failure(resource, exc)
            status.state = FetchState.ERROR
            status.error_message = str(failure)
            return

        if status.state == FetchState.LOADING:
            status.state = FetchState.SUCCESS

    def _deliver(self, resource: ResourceIdentity, page: Page, status: FetchStatus) -> None:
        try:
            self.sink.deliver(page)
        except Exception as exc:
            failure = self.failures.record_delivery_failure(resource, exc)
            status.state = FetchState.ERROR
            status.error_message = str(failure)


async def discover_objects(
    sink: PageSink,
    options: DiscoveryOptions | None = None,
    *,
    run_kubectl_func: RunKubectlFunc | None = None,
    context: str | None = None,
    kubectl: str = KUBECTL_BINARY_DEFAULT,
) -> DiscoveryResult:
    """Discover all objects in the cluster and deliver them page by page."""
    controller = DiscoveryController(
        sink,
        options,
        run_kubectl_func=run_kubectl_func,
        context=context,
        kubectl=kubectl,
    )
    return await controller.discover_objects()


__all__ = [
    "DiscoveryController",
    "DiscoveryResult",
    "FetchStatus",
    "PartialDiscoveryError",
    "discover_objects",
]
