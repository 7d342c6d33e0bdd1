"""Catalog fetcher - fetches the preferred resources advertised by the API server."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from kubedump.controllers.discovery.parsers.catalog_parser import (
    CatalogParseError,
    CatalogParser,
)
from kubedump.models.core.resource_info import CatalogEntry, ServedGroup

logger = logging.getLogger(__name__)

CORE_API_PATH = "/api"
GROUPS_API_PATH = "/apis"


class CatalogUnavailableError(RuntimeError):
    """Raised when the root discovery documents cannot be fetched or parsed."""


@dataclass
class Catalog:
    """Resource types of one run, grouped by the group-version they are listed under."""

    group_versions: dict[str, list[CatalogEntry]] = field(default_factory=dict)
    failed_group_versions: dict[str, str] = field(default_factory=dict)

    @property
    def entries(self) -> list[CatalogEntry]:
        """All entries in group-version order, then resource order."""
        return [
            entry for entries in self.group_versions.values() for entry in entries
        ]


def group_version_path(group_version: str) -> str:
    if "/" in group_version:
        return f"{GROUPS_API_PATH}/{group_version}"
    return f"{CORE_API_PATH}/{group_version}"


class CatalogFetcher:
    """Fetches discovery documents from the API server."""

    def __init__(self, run_kubectl_func: Any, parser: CatalogParser | None = None) -> None:
        """Initialize with kubectl runner function.

        Args:
            run_kubectl_func: Async function to run kubectl commands
            parser: Parser for discovery documents
        """
        self._run_kubectl = run_kubectl_func
        self._parser = parser or CatalogParser()

    async def _get(self, path: str) -> dict[str, Any]:
        output = await self._run_kubectl(("get", "--raw", path))
        return self._parser.load_json(output, path)

    async def fetch_served_groups(self) -> list[ServedGroup]:
        """Served groups with all their versions, core group first.

        Raises:
            CatalogUnavailableError: If /api or /apis cannot be fetched or parsed.
        """
        try:
            core = self._parser.parse_core_versions(await self._get(CORE_API_PATH))
            groups = self._parser.parse_group_list(await self._get(GROUPS_API_PATH))
        except CatalogParseError as exc:
            raise CatalogUnavailableError(str(exc)) from exc
        except Exception as exc:
            raise CatalogUnavailableError(f"failed to reach API server: {exc}") from exc
        return core + groups

    async def fetch_resources(self, group_version: str) -> list[CatalogEntry]:
        """Resource types served under one group-version."""
        path = group_version_path(group_version)
        return self._parser.parse_resource_list(await self._get(path), group_version)

    async def fetch_catalog(self) -> Catalog:
        """Fetch the full catalog of preferred resources.

        Every served version of every group is read. A resource keeps the
        entry of its group's preferred version, or else of the first version
        serving it, so types only served by a non-preferred version are kept.

        A failing group-version leaves the catalog degraded rather than
        failing the run; only the root documents are mandatory.
        """
        catalog = Catalog()
        for group in await self.fetch_served_groups():
            served: dict[str, list[CatalogEntry]] = {}
            chosen: dict[str, str] = {}
            for group_version in group.group_versions:
                try:
                    entries = await self.fetch_resources(group_version)
                except Exception as exc:
                    logger.warning(
                        "Failed to discover resources of %s: %s", group_version, exc
                    )
                    catalog.failed_group_versions[group_version] = str(exc)
                    continue
                served[group_version] = entries
                for entry in entries:
                    resource = entry.identity.resource
                    if resource in chosen and group_version != group.preferred:
                        continue
                    chosen[resource] = group_version

            for group_version, entries in served.items():
                kept = [e for e in entries if chosen[e.identity.resource] == group_version]
                if kept:
                    catalog.group_versions[group_version] = kept
        return catalog
