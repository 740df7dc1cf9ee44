"""Data models for iconsync."""

import posixpath
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class ScannedFile:
    """A candidate file found under the scan root."""

    relative_path: str  # Forward-slash separated, relative to the scan root
    extension: str  # Lowercased suffix including the dot ("" if none)
    is_symlink: bool = False
    size: int = 0  # Bytes, from lstat (never follows links)

    @property
    def name(self) -> str:
        """Final path segment."""
        return posixpath.basename(self.relative_path)

    @property
    def stem(self) -> str:
        """File name without its extension."""
        if not self.extension:
            return self.name
        return self.name[: -len(self.extension)]


@dataclass(frozen=True)
class Valid:
    """Path is safe to publish as a literal URL."""


@dataclass(frozen=True)
class Invalid:
    """Path breaks a path-safety rule."""

    reason: str


ValidationOutcome = Valid | Invalid


@dataclass(frozen=True)
class PathViolation:
    """A rejected path together with the first rule it broke."""

    path: str
    reason: str


class ImageKind(str, Enum):
    """Binary format of an icon file.

    AVIF is only ever an expected kind: sniffing reports AVIF content as
    ISOBMFF and leaves the brand check to the caller.
    """

    PNG = "png"
    JPEG = "jpeg"
    GIF = "gif"
    WEBP = "webp"
    SVG = "svg"
    AVIF = "avif"
    ISOBMFF = "isobmff"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SniffResult:
    """Format detected from the leading bytes of a file."""

    kind: ImageKind
    brands: tuple[str, ...] = ()  # ISOBMFF brands, first-seen order, no repeats


@dataclass(frozen=True)
class ParsedStem:
    """Display name and optional ordering index taken from a file stem."""

    base_name: str
    index: int | None = None


@dataclass(frozen=True)
class CatalogEntry:
    """An accepted icon file."""

    display_name: str
    index: int | None
    relative_path: str
    url: str
    content_hash: str


@dataclass(frozen=True)
class IndexConflict:
    """Several files claiming the same display name and index."""

    display_name: str
    index: int
    paths: tuple[str, ...]

    @property
    def key(self) -> str:
        return f"{self.display_name}#{self.index}"


@dataclass(frozen=True)
class CatalogWarning:
    """Base class for problems that never block the manifest."""


@dataclass(frozen=True)
class UnparseableNameWarning(CatalogWarning):
    """File skipped because its name normalized to nothing."""

    path: str


@dataclass(frozen=True)
class DuplicateContentWarning(CatalogWarning):
    """Files with byte-identical content."""

    content_hash: str
    paths: tuple[str, ...]


@dataclass(frozen=True)
class IndexlessGroupWarning(CatalogWarning):
    """Group with several files that carry no index (ordered by path only)."""

    display_name: str
    count: int


@dataclass(frozen=True)
class ManifestIcon:
    """One icon as written to the manifest."""

    name: str
    url: str

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {"name": self.name, "url": self.url}


@dataclass
class BuildPlan:
    """Plan for what a build operation would write."""

    root: Path  # Scan root (absolute)
    output: Path  # Manifest destination
    entries: list[CatalogEntry]  # Accepted entries, already in final order
    warnings: list[CatalogWarning] = field(default_factory=list)

    @property
    def icons(self) -> list[ManifestIcon]:
        return [ManifestIcon(name=e.display_name, url=e.url) for e in self.entries]
