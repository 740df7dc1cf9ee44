"""Custom exceptions for iconsync."""

from collections.abc import Sequence

from iconsync.models import ImageKind
from iconsync.models import IndexConflict
from iconsync.models import PathViolation


def _summarize(items: Sequence[str]) -> str:
    summary = ", ".join(items[:3])
    if len(items) > 3:
        summary += f", ... ({len(items)} total)"
    return summary


class IconSyncError(Exception):
    """Base exception for iconsync."""


class PathRejectedError(IconSyncError):
    """One or more paths cannot be published as literal URLs."""

    def __init__(self, violations: Sequence[PathViolation]):
        self.violations = violations
        paths = _summarize([v.path for v in violations])
        super().__init__(f"Unsafe paths for literal URLs: {paths}")


class ContentMismatchError(IconSyncError):
    """File content does not match the format its extension claims."""

    def __init__(
        self,
        path: str,
        expected: ImageKind,
        detected: ImageKind,
        brands: Sequence[str] = (),
    ):
        self.path = path
        self.expected = expected
        self.detected = detected
        self.brands = tuple(brands)
        message = (
            f"Extension does not match content: {path} "
            f"(expected {expected.value}, detected {detected.value}"
        )
        if self.brands:
            message += f", brands: {','.join(self.brands)}"
        super().__init__(message + ")")


class SymlinkRejectedError(IconSyncError):
    """Icon tree contains a symbolic link."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Symbolic links are not allowed: {path}")


class EmptyFileError(IconSyncError):
    """Icon file has zero bytes."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Empty file (0 bytes): {path}")


class IndexConflictError(IconSyncError):
    """Two or more files share the same display name and index."""

    def __init__(self, conflicts: Sequence[IndexConflict]):
        self.conflicts = conflicts
        keys = _summarize([c.key for c in conflicts])
        super().__init__(f"Name/index conflicts: {keys}")


class EmptyResultError(IconSyncError):
    """No icon survived the pipeline."""


class ConfigError(IconSyncError):
    """Configuration file is invalid or malformed."""


class ManifestValidationError(IconSyncError):
    """Manifest failed its self-check before writing."""
