"""Sink contract for delivered pages."""

from __future__ import annotations

from types import TracebackType
from typing import Protocol, runtime_checkable

from kubedump.models.core.page import Page


class DumpError(Exception):
    """Raised when a dumper fails to write or close.

    Carries every underlying error so a single bad object does not hide the
    others.
    """

    def __init__(self, message: str, errors: list[Exception] | None = None) -> None:
        self.errors = list(errors or [])
        if self.errors:
            message = f"{message}: " + "; ".join(str(err) for err in self.errors)
        super().__init__(message)


@runtime_checkable
class PageSink(Protocol):
    """Receives pages from the discovery controller.

    ``deliver`` may be called many times per resource type and must tolerate
    duplicate objects across calls.
    """

    def deliver(self, page: Page) -> None: ...


class BaseDumper:
    """Context manager base for dumpers owning resources."""

    def deliver(self, page: Page) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Release held resources."""

    def __enter__(self) -> BaseDumper:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["BaseDumper", "DumpError", "PageSink"]
