"""Catalog parser - parses API discovery documents into catalog entries."""

from __future__ import annotations

import json
from typing import Any

from kubedump.models.core.resource_info import (
    CatalogEntry,
    ResourceIdentity,
    ServedGroup,
    parse_group_version,
)


class CatalogParseError(ValueError):
    """Raised when a discovery document is malformed."""


class CatalogParser:
    """Parses discovery responses (APIVersions, APIGroupList, APIResourceList)."""

    @staticmethod
    def load_json(output: str, path: str) -> dict[str, Any]:
        try:
            data = json.loads(output)
        except json.JSONDecodeError as exc:
            raise CatalogParseError(f"invalid JSON from {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise CatalogParseError(f"unexpected document from {path}: not an object")
        return data

    def parse_core_versions(self, data: dict[str, Any]) -> list[ServedGroup]:
        """The core group from an APIVersions document.

        Every listed version is served; the first one is preferred.
        """
        versions = data.get("versions")
        if not isinstance(versions, list):
            raise CatalogParseError("APIVersions document has no versions list")
        if not versions:
            return []
        group_versions = tuple(str(version) for version in versions)
        return [ServedGroup(group_versions=group_versions, preferred=group_versions[0])]

    def parse_group_list(self, data: dict[str, Any]) -> list[ServedGroup]:
        """Every named group with all its served versions, in server order."""
        groups = data.get("groups")
        if not isinstance(groups, list):
            raise CatalogParseError("APIGroupList document has no groups list")

        served: list[ServedGroup] = []
        for group in groups:
            if not isinstance(group, dict):
                raise CatalogParseError(f"malformed API group entry: {group!r}")
            group_versions: list[str] = []
            for version in group.get("versions") or []:
                group_version = version.get("groupVersion") if isinstance(version, dict) else None
                if group_version:
                    group_versions.append(group_version)
            if not group_versions:
                continue
            preferred = (group.get("preferredVersion") or {}).get("groupVersion")
            served.append(
                ServedGroup(
                    name=str(group.get("name") or ""),
                    group_versions=tuple(group_versions),
                    # Fall back to the first served version
                    preferred=preferred or group_versions[0],
                )
            )
        return served

    def parse_resource_list(
        self, data: dict[str, Any], group_version: str
    ) -> list[CatalogEntry]:
        """Parse an APIResourceList into catalog entries.

        Subresources (``pods/log``) are skipped, they are not listable types.
        """
        resources = data.get("resources")
        if resources is None:
            return []
        if not isinstance(resources, list):
            raise CatalogParseError(f"APIResourceList for {group_version} is malformed")

        group, version = parse_group_version(data.get("groupVersion") or group_version)
        entries: list[CatalogEntry] = []
        for resource in resources:
            if not isinstance(resource, dict) or not resource.get("name"):
                raise CatalogParseError(
                    f"malformed resource entry in {group_version}: {resource!r}"
                )
            name = resource["name"]
            if "/" in name:
                continue
            identity = ResourceIdentity(
                group=group,
                version=version,
                resource=name,
                kind=resource.get("kind") or "",
                namespaced=bool(resource.get("namespaced", False)),
            )
            entries.append(
                CatalogEntry(
                    identity=identity,
                    verbs=frozenset(resource.get("verbs") or ()),
                )
            )
        return entries
