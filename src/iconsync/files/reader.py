"""Reading icon content for sniffing and duplicate detection."""

import hashlib
from pathlib import Path
from typing import Protocol

HASH_CHUNK_BYTES = 1024 * 1024


class ContentReader(Protocol):
    """Access to file bytes by path relative to the scan root."""

    def read_prefix(self, relative_path: str, limit: int) -> bytes:
        """Return at most limit leading bytes."""
        ...

    def hash(self, relative_path: str) -> str:
        """Return a hex digest of the full content."""
        ...


class FileContentReader:
    """ContentReader over a directory on disk."""

    def __init__(self, root: Path):
        self.root = root

    def _path(self, relative_path: str) -> Path:
        return self.root.joinpath(*relative_path.split("/"))

    def read_prefix(self, relative_path: str, limit: int) -> bytes:
        with self._path(relative_path).open("rb") as f:
            return f.read(limit)

    def hash(self, relative_path: str) -> str:
        h = hashlib.sha1()
        with self._path(relative_path).open("rb") as f:
            for chunk in iter(lambda: f.read(HASH_CHUNK_BYTES), b""):
                h.update(chunk)
        return h.hexdigest()
