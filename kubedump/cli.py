"""Command line entry point: dump every object of a cluster."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from typing import Any, TextIO

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from kubedump.constants.defaults import KUBECTL_BINARY_DEFAULT, PAGE_SIZE_DEFAULT
from kubedump.controllers.discovery import (
    DiscoveryController,
    DiscoveryError,
)
from kubedump.dumpers import BaseDumper, DirDumper, DumpError, StreamDumper
from kubedump.models.state.discovery_options import (
    ConfigError,
    DiscoveryOptions,
    load_config_file,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def configure_logging(verbose: bool = False, stream: TextIO | None = None) -> None:
    """Route log records to stderr through rich."""
    console = Console(file=stream or sys.stderr)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubedump",
        description="Dump all objects of all listable resource types in a cluster",
    )
    parser.add_argument("--dir", default="", help="Directory to dump objects into")
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=None,
        help=f"Chunk size for listing objects (default {PAGE_SIZE_DEFAULT})",
    )
    parser.add_argument(
        "--must-exist",
        action="append",
        default=[],
        metavar="RESOURCE",
        help="Resource that must exist in the cluster. Can be used multiple times.",
    )
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="REGEX",
        help="Resource to ignore during discovery. Regexp, anchored by default. "
        "Can be used multiple times.",
    )
    parser.add_argument("--context", default=None, help="Kubernetes context to use")
    parser.add_argument(
        "--kubectl", default=None, help=f"kubectl binary (default {KUBECTL_BINARY_DEFAULT})"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Deadline for the whole run",
    )
    parser.add_argument("--config", default=None, help="YAML file with default options")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def resolve_settings(args: argparse.Namespace) -> tuple[DiscoveryOptions, dict[str, Any]]:
    """Merge config file values with flags; flags extend lists and override scalars.

    Raises:
        ConfigError: If the config file or resulting options are invalid.
    """
    settings: dict[str, Any] = load_config_file(args.config) if args.config else {}

    file_context = settings.pop("context", None)
    file_kubectl = settings.pop("kubectl", None)
    transport = {
        "context": args.context or file_context,
        "kubectl": args.kubectl or file_kubectl or KUBECTL_BINARY_DEFAULT,
    }

    settings["must_exist_resources"] = list(settings.get("must_exist_resources") or []) + list(
        args.must_exist
    )
    settings["ignore_resources"] = list(settings.get("ignore_resources") or []) + list(
        args.ignore
    )
    if args.chunk_size is not None:
        settings["page_size"] = args.chunk_size
    if args.timeout is not None:
        settings["timeout_seconds"] = args.timeout
    settings["log_writer"] = sys.stderr

    try:
        options = DiscoveryOptions(**settings)
    except ValidationError as exc:
        raise ConfigError(f"invalid options: {exc}") from exc
    return options, transport


def _create_dumper(directory: str) -> BaseDumper:
    if directory:
        return DirDumper(directory)
    return StreamDumper(sys.stdout)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        options, transport = resolve_settings(args)
    except ConfigError as exc:
        print(f"invalid configuration: {exc}", file=sys.stderr)
        return EXIT_USAGE

    try:
        dumper = _create_dumper(args.dir)
    except DumpError as exc:
        print(f"failed to create directory dumper: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    exit_code = EXIT_OK
    try:
        with dumper:
            controller = DiscoveryController(dumper, options, **transport)
            result = asyncio.run(controller.discover_objects())
            logger.info(
                "Dumped %s objects in %s pages", result.objects, result.pages
            )
    except (DiscoveryError, DumpError) as exc:
        print(f"failed to dump some or all objects: {exc}", file=sys.stderr)
        exit_code = EXIT_FAILURE
    except KeyboardInterrupt:
        print("interrupted", file=sys.stderr)
        exit_code = EXIT_FAILURE
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
