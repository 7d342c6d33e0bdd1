"""Discovery options model and config file loading."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from kubedump.constants.defaults import PAGE_SIZE_DEFAULT


def anchor_pattern(pattern: str) -> str:
    """Anchor a pattern so it only matches a whole comparable key."""
    return f"^(?:{pattern})$"


class DiscoveryOptions(BaseModel):
    """Options for a discovery run with validation."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    page_size: int = Field(default=PAGE_SIZE_DEFAULT, gt=0)

    # Resources that must exist in the cluster, as `resource.group` or bare
    # `resource` for the core group. Sanity check that discovery works.
    must_exist_resources: list[str] = Field(default_factory=list)

    # Regular expressions matched against the whole comparable key
    ignore_resources: list[str] = Field(default_factory=list)

    # Diagnostic output; None discards it
    log_writer: Any = None

    # Deadline for the whole run; None disables it
    timeout_seconds: float | None = Field(default=None, gt=0)

    _ignore_patterns: list[re.Pattern[str]] = PrivateAttr(default_factory=list)

    @field_validator("ignore_resources")
    @classmethod
    def _validate_ignore_resources(cls, value: list[str]) -> list[str]:
        for pattern in value:
            try:
                re.compile(anchor_pattern(pattern))
            except re.error as exc:
                raise ValueError(f"failed to compile regexp {pattern!r}: {exc}") from exc
        return value

    @field_validator("must_exist_resources")
    @classmethod
    def _validate_must_exist_resources(cls, value: list[str]) -> list[str]:
        cleaned = [item.strip() for item in value]
        if any(not item for item in cleaned):
            raise ValueError("must-exist resource names cannot be empty")
        return cleaned

    def model_post_init(self, __context: Any) -> None:
        self._ignore_patterns = [
            re.compile(anchor_pattern(pattern)) for pattern in self.ignore_resources
        ]

    @property
    def ignore_patterns(self) -> list[tuple[str, re.Pattern[str]]]:
        """Configured patterns paired with their compiled, anchored form."""
        return list(zip(self.ignore_resources, self._ignore_patterns, strict=True))

    def write_log(self, message: str) -> None:
        """Write one diagnostic line; no-op when no writer is set."""
        if self.log_writer is None:
            return
        print(message, file=self.log_writer)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when a config file fails to load."""


_CONFIG_KEYS = {
    "page_size": "page_size",
    "chunk_size": "page_size",
    "must_exist": "must_exist_resources",
    "must_exist_resources": "must_exist_resources",
    "ignore": "ignore_resources",
    "ignore_resources": "ignore_resources",
    "timeout_seconds": "timeout_seconds",
    "context": "context",
    "kubectl": "kubectl",
}


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Load a YAML config file into option keyword arguments.

    Keys that are not options of the run (``context``, ``kubectl``) are
    returned as well so the caller can pass them to the transport.

    Raises:
        ConfigLoadError: If the file cannot be read, parsed or has unknown keys.
    """
    config_path = Path(path)
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigLoadError(f"failed to read config file {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"failed to parse config file {config_path}: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"config file {config_path} must contain a mapping")

    result: dict[str, Any] = {}
    for key, value in raw.items():
        target = _CONFIG_KEYS.get(str(key).replace("-", "_"))
        if target is None:
            raise ConfigLoadError(f"unknown key {key!r} in config file {config_path}")
        result[target] = value
    return result


__all__ = [
    "ConfigError",
    "ConfigLoadError",
    "DiscoveryOptions",
    "anchor_pattern",
    "load_config_file",
]
