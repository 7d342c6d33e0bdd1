"""Base controller classes."""

from kubedump.controllers.base.base_controller import BaseController

__all__ = ["BaseController"]
