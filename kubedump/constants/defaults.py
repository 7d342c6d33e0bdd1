"""Default values for discovery options.

All default values used by the DiscoveryOptions model and the command line.
"""

from typing import Final

# ============================================================================
# Enumeration defaults
# ============================================================================

PAGE_SIZE_DEFAULT: Final = 500
KUBECTL_BINARY_DEFAULT: Final = "kubectl"

# ============================================================================
# Directory dumper layout
# ============================================================================

OBJECTS_FILE_PREFIX: Final = "objects-"
SPLIT_DIR_NAME: Final = "split"
NAMESPACE_ALL_FILE: Final = "__all__.json"

__all__ = [
    "KUBECTL_BINARY_DEFAULT",
    "NAMESPACE_ALL_FILE",
    "OBJECTS_FILE_PREFIX",
    "PAGE_SIZE_DEFAULT",
    "SPLIT_DIR_NAME",
]
