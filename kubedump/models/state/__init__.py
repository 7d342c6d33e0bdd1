"""Run state and option models."""

from kubedump.models.state.discovery_options import (
    ConfigError,
    ConfigLoadError,
    DiscoveryOptions,
    load_config_file,
)

__all__ = ["ConfigError", "ConfigLoadError", "DiscoveryOptions", "load_config_file"]
