"""List fetcher - walks a resource collection page by page."""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import urlencode

from kubedump.constants.defaults import PAGE_SIZE_DEFAULT
from kubedump.models.core.page import Page
from kubedump.models.core.resource_info import ResourceIdentity

logger = logging.getLogger(__name__)


class ListResponseError(ValueError):
    """Raised when a list response cannot be decoded."""


class ListFetcher:
    """Fetches object pages of one resource type using server-side chunking."""

    def __init__(self, run_kubectl_func: Any, page_size: int = PAGE_SIZE_DEFAULT) -> None:
        """Initialize with kubectl runner function.

        Args:
            run_kubectl_func: Async function to run kubectl commands
            page_size: Maximum number of objects requested per page
        """
        self._run_kubectl = run_kubectl_func
        self.page_size = page_size

    def build_list_path(self, resource: ResourceIdentity, continue_token: str = "") -> str:
        """Raw API path listing one page of a collection across all namespaces."""
        query: dict[str, Any] = {"limit": self.page_size}
        if continue_token:
            query["continue"] = continue_token
        return f"{resource.api_path}?{urlencode(query)}"

    async def fetch_page(self, resource: ResourceIdentity, continue_token: str = "") -> Page:
        """Fetch a single page.

        Raises:
            ListResponseError: If the response is not a list document.
        """
        path = self.build_list_path(resource, continue_token)
        output = await self._run_kubectl(("get", "--raw", path))
        try:
            data = json.loads(output)
        except json.JSONDecodeError as exc:
            raise ListResponseError(f"invalid JSON listing {resource}: {exc}") from exc
        if not isinstance(data, dict) or not isinstance(data.get("items", []), list):
            raise ListResponseError(f"unexpected list response for {resource}")
        try:
            return Page.from_list_response(resource, data)
        except ValueError as exc:
            raise ListResponseError(str(exc)) from exc

    async def iter_pages(self, resource: ResourceIdentity) -> AsyncIterator[Page]:
        """Yield pages until the server returns an empty continue token.

        A failing page ends the iteration by raising; pages already yielded
        stay delivered.
        """
        continue_token = ""
        page_number = 0
        while True:
            page = await self.fetch_page(resource, continue_token)
            page_number += 1
            logger.debug(
                "Fetched page %s of %s with %s objects",
                page_number,
                resource,
                len(page.items),
            )
            yield page
            if page.is_last:
                return
            continue_token = page.continue_token
