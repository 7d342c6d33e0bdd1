"""kubectl subprocess runner used as the transport to the API server."""

from __future__ import annotations

import asyncio
import logging
import math
import subprocess

from kubedump.constants.defaults import KUBECTL_BINARY_DEFAULT
from kubedump.constants.timeouts import (
    KUBECTL_COMMAND_TIMEOUT,
    KUBECTL_PROCESS_GRACE_SECONDS,
)

logger = logging.getLogger(__name__)


class KubectlError(RuntimeError):
    """Raised when a kubectl invocation fails or times out."""


def format_request_timeout(seconds: float) -> str:
    """Render seconds as a kubectl --request-timeout value."""
    return f"{max(1, math.ceil(seconds))}s"


class KubectlRunner:
    """Runs kubectl commands in a worker thread.

    Instances are callables taking the argument tuple and returning stdout,
    which is the shape the fetchers expect from their run function.
    """

    def __init__(
        self,
        context: str | None = None,
        kubectl: str = KUBECTL_BINARY_DEFAULT,
    ) -> None:
        """Initialize the runner.

        Args:
            context: Optional Kubernetes context name.
            kubectl: kubectl binary name or path.
        """
        self.context = context
        self.kubectl = kubectl

    @staticmethod
    def _request_timeout_seconds(args: tuple[str, ...]) -> int | None:
        """Parse kubectl --request-timeout value (seconds) from args."""
        prefix = "--request-timeout="
        for part in args:
            if not part.startswith(prefix):
                continue
            value = part[len(prefix):].strip().lower()
            if value.endswith("s"):
                value = value[:-1]
            try:
                seconds = float(value)
            except ValueError:
                return None
            if seconds > 0:
                return max(1, math.ceil(seconds))
        return None

    def _timeout_for_args(self, args: tuple[str, ...]) -> int:
        """Process timeout: request timeout plus grace, bounded by the default."""
        request_timeout = self._request_timeout_seconds(args)
        if request_timeout is None:
            return KUBECTL_COMMAND_TIMEOUT
        return max(KUBECTL_COMMAND_TIMEOUT, request_timeout + KUBECTL_PROCESS_GRACE_SECONDS)

    def build_command(self, args: tuple[str, ...]) -> list[str]:
        cmd = [self.kubectl]
        if self.context:
            cmd.extend(["--context", self.context])
        cmd.extend(args)
        return cmd

    def run_sync(self, args: tuple[str, ...], timeout: int | None = None) -> str:
        """Run a kubectl command synchronously (thread-safe wrapper target)."""
        cmd = self.build_command(args)
        effective_timeout = timeout if timeout is not None else self._timeout_for_args(args)
        logger.debug("Running %s (timeout %ss)", " ".join(cmd), effective_timeout)
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=effective_timeout
            )
        except subprocess.TimeoutExpired as exc:
            raise KubectlError(
                f"kubectl timed out after {effective_timeout}s: {' '.join(args)}"
            ) from exc
        except FileNotFoundError as exc:
            raise KubectlError(f"kubectl binary not found: {self.kubectl}") from exc
        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise KubectlError(stderr or "kubectl command failed")
        return result.stdout

    async def __call__(self, args: tuple[str, ...]) -> str:
        return await asyncio.to_thread(self.run_sync, args)


__all__ = [
    "KubectlError",
    "KubectlRunner",
    "format_request_timeout",
]
