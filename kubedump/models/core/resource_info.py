"""Discovered resource type models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


def parse_group_version(group_version: str) -> tuple[str, str]:
    """Split an apiVersion string into (group, version).

    The core group has no prefix, so ``v1`` maps to ``("", "v1")``.
    """
    group, sep, version = group_version.partition("/")
    if not sep:
        return "", group
    return group, version


class ResourceIdentity(BaseModel):
    """A resource type advertised by the API server."""

    model_config = ConfigDict(frozen=True)

    group: str = ""
    version: str
    resource: str
    kind: str = ""
    namespaced: bool = False

    @property
    def group_version(self) -> str:
        """apiVersion form: ``v1`` for the core group, ``group/version`` otherwise."""
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"

    @property
    def gvr(self) -> tuple[str, str, str]:
        """Group, version and resource; two identities with equal gvr are the same type."""
        return self.group, self.version, self.resource

    @property
    def comparable_key(self) -> str:
        """Version-independent key used for must-exist and ignore matching."""
        if not self.group:
            return self.resource
        return f"{self.resource}.{self.group}"

    @property
    def api_path(self) -> str:
        """Collection path of this resource on the API server."""
        if not self.group:
            return f"/api/{self.version}/{self.resource}"
        return f"/apis/{self.group}/{self.version}/{self.resource}"

    def __str__(self) -> str:
        return f"{self.group_version}, Resource={self.resource}"


class CatalogEntry(BaseModel):
    """A resource type together with the verbs it supports."""

    model_config = ConfigDict(frozen=True)

    identity: ResourceIdentity
    verbs: frozenset[str] = Field(default_factory=frozenset)

    def supports(self, verb: str) -> bool:
        return verb in self.verbs


class ServedGroup(BaseModel):
    """An API group with every group-version it serves, in server order."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    group_versions: tuple[str, ...]
    preferred: str


__all__ = [
    "CatalogEntry",
    "ResourceIdentity",
    "ServedGroup",
    "parse_group_version",
]
