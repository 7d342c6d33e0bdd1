"""Base controller for kubedump.

Controllers own the cluster transport and expose async entry points so the
command line (or any other caller) can drive them from an event loop.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)


class BaseController(ABC):
    """Base controller class.

    Subclasses should implement the abstract methods to provide
    specific data fetching functionality.
    """

    @abstractmethod
    async def check_connection(self) -> bool:
        """Check if the data source is available.

        Returns:
            True if connection is available, False otherwise
        """
        ...

    @abstractmethod
    async def fetch_all(self) -> Any:
        """Fetch all data from the source."""
        ...
