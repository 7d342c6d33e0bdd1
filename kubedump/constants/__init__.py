"""Constants module for kubedump.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- timeouts.py: Timeout values
- defaults.py: Default values for options and output layout
"""

from kubedump.constants.defaults import (
    KUBECTL_BINARY_DEFAULT,
    NAMESPACE_ALL_FILE,
    OBJECTS_FILE_PREFIX,
    PAGE_SIZE_DEFAULT,
    SPLIT_DIR_NAME,
)
from kubedump.constants.enums import FailurePhase, FetchState
from kubedump.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
    KUBECTL_PROCESS_GRACE_SECONDS,
)

__all__ = [
    # Timeouts
    "CLUSTER_REQUEST_TIMEOUT",
    "KUBECTL_BINARY_DEFAULT",
    "KUBECTL_COMMAND_TIMEOUT",
    "KUBECTL_PROCESS_GRACE_SECONDS",
    # Output layout
    "NAMESPACE_ALL_FILE",
    "OBJECTS_FILE_PREFIX",
    # Defaults
    "PAGE_SIZE_DEFAULT",
    "SPLIT_DIR_NAME",
    # Enums
    "FailurePhase",
    "FetchState",
]
