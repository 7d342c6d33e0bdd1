"""All enum definitions for kubedump."""

from enum import Enum

# =============================================================================
# Fetch State Enums
# =============================================================================


class FetchState(Enum):
    """Per-resource enumeration state values."""

    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"
    SKIPPED = "skipped"


class FailurePhase(Enum):
    """Phase of the enumeration a recorded failure originated from."""

    LIST = "list"
    DELIVERY = "delivery"


__all__ = [
    "FailurePhase",
    "FetchState",
]
