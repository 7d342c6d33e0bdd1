"""Utility modules for kubedump."""

from kubedump.utils.kubectl_runner import (
    KubectlError,
    KubectlRunner,
    format_request_timeout,
)

__all__ = ["KubectlError", "KubectlRunner", "format_request_timeout"]
