"""Dumper splitting objects into per-kind and per-namespace files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, TextIO

from kubedump.constants.defaults import (
    NAMESPACE_ALL_FILE,
    OBJECTS_FILE_PREFIX,
    SPLIT_DIR_NAME,
)
from kubedump.dumpers.base import BaseDumper, DumpError
from kubedump.models.core.page import Page
from kubedump.models.core.resource_info import parse_group_version

logger = logging.getLogger(__name__)


def group_kind(obj: dict[str, Any]) -> str:
    """``Kind`` for the core group, ``Kind.group`` otherwise."""
    group, _ = parse_group_version(str(obj.get("apiVersion") or ""))
    kind = str(obj.get("kind") or "")
    if not group:
        return kind
    return f"{kind}.{group}"


def object_namespace(obj: dict[str, Any]) -> str:
    metadata = obj.get("metadata") or {}
    return str(metadata.get("namespace") or "")


class DirDumper(BaseDumper):
    """Writes objects to a directory tree, one JSON object per line.

    Layout:
    - ``objects-<Kind>[.<Group>].json``: all objects of a kind
    - ``split/<namespace>/__all__.json``: all objects of a namespace
    - ``split/<namespace>/<Kind>[.<Group>].json``: objects of a kind in a namespace

    Files are opened on first write and kept open until ``close``. Objects
    are appended as delivered; duplicates are written again. Not safe for
    concurrent use.
    """

    def __init__(self, directory: str | Path) -> None:
        """Create the dumper, creating the directory if needed.

        Raises:
            DumpError: If the directory cannot be created.
        """
        self.directory = Path(directory)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DumpError(f"failed to create directory {str(self.directory)!r}: {exc}") from exc
        self._open_files: dict[Path, TextIO] = {}

    def close(self) -> None:
        """Close all open files; the dumper cannot be used afterwards.

        Raises:
            DumpError: Aggregating every file that failed to close.
        """
        errors: list[Exception] = []
        files, self._open_files = self._open_files, {}
        for path, handle in files.items():
            try:
                handle.close()
            except OSError as exc:
                logger.warning("Failed to close %s: %s", path, exc)
                errors.append(exc)
        if errors:
            raise DumpError("failed to close files", errors)

    def deliver(self, page: Page) -> None:
        """Write every object of the page.

        All objects are attempted; failures are raised together afterwards.
        """
        errors: list[Exception] = []
        for obj in page.items:
            try:
                line = json.dumps(obj) + "\n"
            except (TypeError, ValueError) as exc:
                errors.append(DumpError(f"failed to encode object: {exc}"))
                continue

            gk = group_kind(obj)
            targets = [self.directory / f"{OBJECTS_FILE_PREFIX}{gk}.json"]
            namespace = object_namespace(obj)
            if namespace:
                namespace_dir = self.directory / SPLIT_DIR_NAME / namespace
                targets.append(namespace_dir / NAMESPACE_ALL_FILE)
                targets.append(namespace_dir / f"{gk}.json")

            for path in targets:
                try:
                    self._write(path, line)
                except DumpError as exc:
                    errors.append(exc)

        if errors:
            raise DumpError(f"failed to dump {len(errors)} write(s)", errors)

    def _write(self, path: Path, line: str) -> None:
        handle = self._file(path)
        try:
            handle.write(line)
        except OSError as exc:
            raise DumpError(f"failed to write to file {str(path)!r}: {exc}") from exc

    def _file(self, path: Path) -> TextIO:
        handle = self._open_files.get(path)
        if handle is not None:
            return handle
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handle = path.open("w", encoding="utf-8")
        except OSError as exc:
            raise DumpError(f"failed to create file {str(path)!r}: {exc}") from exc
        self._open_files[path] = handle
        return handle
