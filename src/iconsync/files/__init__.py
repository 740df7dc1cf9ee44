"""Filesystem access for iconsync."""

from iconsync.files.discover import discover_files
from iconsync.files.reader import ContentReader
from iconsync.files.reader import FileContentReader

__all__ = [
    "ContentReader",
    "FileContentReader",
    "discover_files",
]
