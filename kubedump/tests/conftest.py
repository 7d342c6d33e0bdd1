"""Shared fixtures: an in-memory API server behind a fake kubectl runner."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock
from urllib.parse import parse_qs, urlsplit

import pytest

from kubedump.models.core.page import Page


class FakeCluster:
    """Answers ``kubectl get --raw`` calls for discovery and list paths.

    List items are returned without kind/apiVersion, as the API server does.
    Continue tokens are ``offset-<n>``.
    """

    def __init__(self) -> None:
        self.core_versions: list[str] = ["v1"]
        self.resource_lists: dict[str, list[dict[str, Any]]] = {}
        self.objects: dict[str, list[dict[str, Any]]] = {}
        self.kinds: dict[str, str] = {}
        self.failures: dict[str, Exception] = {}
        self.raw_overrides: dict[str, str] = {}
        self.preferred_versions: dict[str, str] = {}
        self.requested_paths: list[str] = []

    def add_resource(
        self,
        group_version: str,
        name: str,
        kind: str,
        verbs: tuple[str, ...] = ("create", "delete", "get", "list", "watch"),
        namespaced: bool = False,
        objects: list[dict[str, Any]] | None = None,
    ) -> None:
        self.resource_lists.setdefault(group_version, []).append(
            {
                "name": name,
                "singularName": "",
                "namespaced": namespaced,
                "kind": kind,
                "verbs": list(verbs),
            }
        )
        path = self.collection_path(group_version, name)
        self.objects[path] = list(objects or [])
        self.kinds[path] = kind

    @staticmethod
    def collection_path(group_version: str, name: str) -> str:
        if "/" in group_version:
            return f"/apis/{group_version}/{name}"
        return f"/api/{group_version}/{name}"

    def list_paths(self) -> list[str]:
        """Requested collection paths without query strings."""
        return [
            urlsplit(path).path for path in self.requested_paths if "?" in path
        ]

    async def handle(self, args: tuple[str, ...]) -> str:
        assert args[:2] == ("get", "--raw")
        path = args[2]
        self.requested_paths.append(path)
        url = urlsplit(path)

        if url.path in self.failures:
            raise self.failures[url.path]
        if url.path in self.raw_overrides:
            return self.raw_overrides[url.path]

        if url.path == "/api":
            return json.dumps({"kind": "APIVersions", "versions": self.core_versions})
        if url.path == "/apis":
            return json.dumps({"kind": "APIGroupList", "groups": self._groups()})
        for group_version, resources in self.resource_lists.items():
            prefix = "/apis/" if "/" in group_version else "/api/"
            if url.path == f"{prefix}{group_version}":
                return json.dumps(
                    {
                        "kind": "APIResourceList",
                        "groupVersion": group_version,
                        "resources": resources,
                    }
                )
        if url.path in self.objects:
            return self._list(url.path, parse_qs(url.query))
        raise RuntimeError(f"the server could not find the requested resource ({path})")

    def _groups(self) -> list[dict[str, Any]]:
        """One entry per group; versions in registration order, the first preferred."""
        versions_by_group: dict[str, list[dict[str, str]]] = {}
        for group_version in self.resource_lists:
            if "/" not in group_version:
                continue
            name, version = group_version.split("/", 1)
            versions_by_group.setdefault(name, []).append(
                {"groupVersion": group_version, "version": version}
            )

        groups = []
        for name, versions in versions_by_group.items():
            preferred = versions[0]
            if name in self.preferred_versions:
                preferred = next(
                    v for v in versions if v["version"] == self.preferred_versions[name]
                )
            groups.append({"name": name, "versions": versions, "preferredVersion": preferred})
        return groups

    def _list(self, path: str, query: dict[str, list[str]]) -> str:
        items = self.objects[path]
        limit = int(query["limit"][0])
        token = query.get("continue", [""])[0]
        offset = int(token.removeprefix("offset-")) if token else 0
        chunk = items[offset:offset + limit]
        next_offset = offset + limit
        metadata: dict[str, Any] = {"resourceVersion": "100"}
        if next_offset < len(items):
            metadata["continue"] = f"offset-{next_offset}"
        if path.startswith("/apis/"):
            api_version = path.removeprefix("/apis/").rsplit("/", 1)[0]
        else:
            api_version = path.removeprefix("/api/").rsplit("/", 1)[0]
        return json.dumps(
            {
                "kind": f"{self.kinds[path]}List",
                "apiVersion": api_version,
                "metadata": metadata,
                "items": [dict(item) for item in chunk],
            }
        )


class RecordingSink:
    """Sink keeping every delivered page."""

    def __init__(self, fail_for: set[str] | None = None) -> None:
        self.pages: list[Page] = []
        self.fail_for = fail_for or set()

    def deliver(self, page: Page) -> None:
        if page.resource.resource in self.fail_for:
            raise OSError(f"disk full while writing {page.resource.resource}")
        self.pages.append(page)

    @property
    def objects(self) -> list[dict[str, Any]]:
        return [item for page in self.pages for item in page.items]

    def keys(self) -> list[tuple[str, str, str, str]]:
        return [
            (
                obj["apiVersion"],
                obj["kind"],
                obj["metadata"]["name"],
                obj["metadata"].get("namespace", ""),
            )
            for obj in self.objects
        ]


def make_object(name: str, namespace: str | None = None) -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": name}
    if namespace:
        metadata["namespace"] = namespace
    return {"metadata": metadata}


@pytest.fixture
def fake_cluster() -> FakeCluster:
    return FakeCluster()


@pytest.fixture
def run_kubectl(fake_cluster: FakeCluster) -> AsyncMock:
    """Mock kubectl runner backed by the fake cluster."""
    return AsyncMock(side_effect=fake_cluster.handle)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def sink_factory() -> type[RecordingSink]:
    return RecordingSink


@pytest.fixture
def object_factory() -> Any:
    return make_object


@pytest.fixture
def rbac_cluster(fake_cluster: FakeCluster) -> FakeCluster:
    """Namespaces, cluster roles, roles and ten service accounts."""
    fake_cluster.add_resource(
        "v1", "namespaces", "Namespace", objects=[make_object("test-ns")]
    )
    fake_cluster.add_resource(
        "v1",
        "serviceaccounts",
        "ServiceAccount",
        namespaced=True,
        objects=[
            make_object(f"test-service-account-{i}", "test-ns") for i in range(1, 11)
        ],
    )
    fake_cluster.add_resource(
        "rbac.authorization.k8s.io/v1",
        "clusterroles",
        "ClusterRole",
        objects=[make_object("test-cluster-role")],
    )
    fake_cluster.add_resource(
        "rbac.authorization.k8s.io/v1",
        "roles",
        "Role",
        namespaced=True,
        objects=[make_object("test-role", "test-ns")],
    )
    return fake_cluster
