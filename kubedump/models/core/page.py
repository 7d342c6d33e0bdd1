"""One page of a paginated list response."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from kubedump.models.core.resource_info import ResourceIdentity


@dataclass
class Page:
    """A single list response for one resource type.

    Items are generic objects. Duplicates across pages are possible when a
    server implements list chunking incorrectly, so consumers must tolerate
    them.
    """

    resource: ResourceIdentity
    items: list[dict[str, Any]] = field(default_factory=list)
    continue_token: str = ""
    api_version: str = ""
    kind: str = ""
    resource_version: str = ""

    @property
    def is_last(self) -> bool:
        return not self.continue_token

    @classmethod
    def from_list_response(
        cls, resource: ResourceIdentity, data: dict[str, Any]
    ) -> Page:
        """Build a page from a decoded list response.

        Items without kind/apiVersion inherit them from the list, the list
        kind being the item kind with a ``List`` suffix.
        """
        metadata = data.get("metadata") or {}
        api_version = data.get("apiVersion") or resource.group_version
        list_kind = data.get("kind") or ""
        item_kind = list_kind.removesuffix("List") if list_kind else ""
        item_kind = item_kind or resource.kind

        items: list[dict[str, Any]] = []
        for item in data.get("items") or []:
            if not isinstance(item, dict):
                raise ValueError(f"list item is not an object: {item!r}")
            if not item.get("kind"):
                item["kind"] = item_kind
            if not item.get("apiVersion"):
                item["apiVersion"] = api_version
            items.append(item)

        return cls(
            resource=resource,
            items=items,
            continue_token=metadata.get("continue") or "",
            api_version=api_version,
            kind=list_kind or f"{resource.kind}List",
            resource_version=metadata.get("resourceVersion") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize as a Kubernetes list document."""
        metadata: dict[str, Any] = {}
        if self.resource_version:
            metadata["resourceVersion"] = self.resource_version
        if self.continue_token:
            metadata["continue"] = self.continue_token
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": metadata,
            "items": self.items,
        }


__all__ = ["Page"]
