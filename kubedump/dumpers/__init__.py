"""Page sinks: stream and directory-tree dumpers."""

from kubedump.dumpers.base import BaseDumper, DumpError, PageSink
from kubedump.dumpers.dir_dumper import DirDumper
from kubedump.dumpers.stream_dumper import StreamDumper

__all__ = ["BaseDumper", "DirDumper", "DumpError", "PageSink", "StreamDumper"]
