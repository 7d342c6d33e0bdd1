"""Timeout constants for kubectl calls.

All timeout values for API requests and subprocess execution.
"""

from typing import Final

# ============================================================================
# API/Cluster timeouts (string format for kubectl)
# ============================================================================

CLUSTER_REQUEST_TIMEOUT: Final = "30s"

# Process-level command timeouts (must be greater than request timeout)
KUBECTL_COMMAND_TIMEOUT: Final = 45

# Grace added on top of --request-timeout before the process is killed
KUBECTL_PROCESS_GRACE_SECONDS: Final = 10

__all__ = [
    "CLUSTER_REQUEST_TIMEOUT",
    "KUBECTL_COMMAND_TIMEOUT",
    "KUBECTL_PROCESS_GRACE_SECONDS",
]
