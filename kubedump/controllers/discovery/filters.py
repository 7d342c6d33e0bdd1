"""Eligibility filter and must-exist validation for discovered resources."""

from __future__ import annotations

from dataclasses import dataclass

from kubedump.controllers.discovery.errors import UnsatisfiedRequirementError
from kubedump.models.core.resource_info import CatalogEntry
from kubedump.models.state.discovery_options import DiscoveryOptions

LIST_VERB = "list"
NO_LIST_VERB_REASON = "no-list-verb"
IGNORED_BY_PATTERN_REASON = "ignored-by-pattern"


@dataclass(frozen=True)
class FilterDecision:
    """Outcome of filtering one resource type."""

    eligible: bool
    reason: str = ""
    pattern: str = ""


ELIGIBLE = FilterDecision(eligible=True)


class ResourceFilter:
    """Decides whether a resource type gets enumerated."""

    def __init__(self, options: DiscoveryOptions) -> None:
        self._options = options

    def evaluate(self, entry: CatalogEntry) -> FilterDecision:
        if not entry.supports(LIST_VERB):
            return FilterDecision(eligible=False, reason=NO_LIST_VERB_REASON)

        key = entry.identity.comparable_key
        for pattern, compiled in self._options.ignore_patterns:
            if compiled.match(key):
                return FilterDecision(
                    eligible=False,
                    reason=f"{IGNORED_BY_PATTERN_REASON}:{pattern}",
                    pattern=pattern,
                )
        return ELIGIBLE


class ExistenceValidator:
    """Checks must-exist resource keys against the whole catalog."""

    def __init__(self, must_exist: list[str] | set[str]) -> None:
        self._must_exist = set(must_exist)

    def missing(self, entries: list[CatalogEntry]) -> list[str]:
        have = {entry.identity.comparable_key for entry in entries}
        return sorted(self._must_exist - have)

    def validate(self, entries: list[CatalogEntry]) -> None:
        """Raise UnsatisfiedRequirementError naming every missing key."""
        missing = self.missing(entries)
        if missing:
            raise UnsatisfiedRequirementError(missing)
