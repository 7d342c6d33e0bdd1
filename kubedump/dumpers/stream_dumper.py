"""Dumper writing every page as one JSON document to a text stream."""

from __future__ import annotations

import json
from typing import TextIO

from kubedump.dumpers.base import BaseDumper
from kubedump.models.core.page import Page


class StreamDumper(BaseDumper):
    """Writes each page as a self-contained list document, one per line."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def deliver(self, page: Page) -> None:
        self._stream.write(json.dumps(page.to_dict()))
        self._stream.write("\n")
        self._stream.flush()
