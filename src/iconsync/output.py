"""Output formatting for iconsync operations."""

from collections import Counter
from collections.abc import Callable
from collections.abc import Sequence
from pathlib import Path

import typer

from iconsync.exceptions import ContentMismatchError
from iconsync.exceptions import IndexConflictError
from iconsync.exceptions import PathRejectedError
from iconsync.models import BuildPlan
from iconsync.models import CatalogEntry
from iconsync.models import CatalogWarning
from iconsync.models import DuplicateContentWarning
from iconsync.models import IndexlessGroupWarning
from iconsync.models import UnparseableNameWarning
from iconsync.ordering import natural_key

# Longest list printed before the rest is summarized
PRINT_LIMIT = 20

TOP_GROUPS = 8


def group_counts(entries: Sequence[CatalogEntry]) -> list[tuple[str, int]]:
    """Entries per display name, largest first (ties in natural order)."""
    counts = Counter(e.display_name for e in entries)
    return sorted(counts.items(), key=lambda item: (-item[1], natural_key(item[0])))


def print_build_plan(plan: BuildPlan, dry_run: bool = False) -> None:
    """Print build summary to stdout.

    Args:
        plan: BuildPlan to print
        dry_run: If True, use "Would" language instead of past tense
    """
    typer.secho(f"Scanned {_display_path(plan.root)}", fg=typer.colors.BRIGHT_BLACK)

    groups = group_counts(plan.entries)
    num_icons = len(plan.entries)
    top = "  ".join(f"{name}({count})" for name, count in groups[:TOP_GROUPS])
    typer.secho(f"  Groups: {len(groups)}", fg=typer.colors.BRIGHT_BLACK)
    typer.secho(f"  Top groups: {top or '(none)'}", fg=typer.colors.BRIGHT_BLACK)

    action = "Would write" if dry_run else "Wrote"
    typer.secho(
        f"✓ {action} {_display_path(plan.output)} "
        f"({num_icons} icon{'s' if num_icons != 1 else ''})",
        fg=typer.colors.GREEN,
        bold=True,
    )


def print_warnings(warnings: Sequence[CatalogWarning]) -> None:
    """Print soft warnings to stderr."""
    skipped = [w for w in warnings if isinstance(w, UnparseableNameWarning)]
    duplicates = [w for w in warnings if isinstance(w, DuplicateContentWarning)]
    indexless = [w for w in warnings if isinstance(w, IndexlessGroupWarning)]

    for warning in skipped:
        _warn(f"⚠ Skipped, name is empty after normalization: {warning.path}")

    if duplicates:
        _warn("⚠ Identical content under several names (consider removing copies):")
        _print_limited(
            duplicates,
            lambda d: typer.secho(f"  - {_join_limited(d.paths)}", err=True),
        )

    for warning in indexless:
        _warn(
            f"⚠ Group '{warning.display_name}' has {warning.count} files "
            "without an index (ordered by path)"
        )


def print_path_rejected(error: PathRejectedError) -> None:
    """Print every unsafe path to stderr."""
    typer.secho(
        "✗ Unsafe file names (raw URLs are not encoded):",
        fg=typer.colors.RED,
        bold=True,
        err=True,
    )
    _print_limited(
        error.violations,
        lambda v: typer.secho(f"  - {v.path} ({v.reason})", err=True),
    )
    typer.secho(
        "\nRename and try again. Safe characters: letters, digits, _ - ( )",
        err=True,
    )


def print_content_mismatch(error: ContentMismatchError) -> None:
    """Print an extension/content mismatch to stderr."""
    typer.secho(
        f"✗ Extension does not match content: {error.path}",
        fg=typer.colors.RED,
        bold=True,
        err=True,
    )
    detected = error.detected.value
    if error.brands:
        detected += f" (brands: {','.join(error.brands)})"
    typer.secho(
        f"   Expected {error.expected.value}, detected {detected}", err=True
    )
    typer.secho(
        "\nConvert the file or fix its extension, then try again", err=True
    )


def print_conflict_error(error: IndexConflictError) -> None:
    """Print name/index conflicts to stderr."""
    typer.secho(
        "✗ Several files share a name and index:",
        fg=typer.colors.RED,
        bold=True,
        err=True,
    )
    _print_limited(
        error.conflicts,
        lambda c: typer.secho(f"  - {c.key}: {' , '.join(c.paths)}", err=True),
    )
    typer.secho("\nDelete or rename the extra files", err=True)


def _warn(message: str) -> None:
    typer.secho(message, fg=typer.colors.YELLOW, err=True)


def _print_limited(items: Sequence, printer: Callable) -> None:
    """Print up to PRINT_LIMIT items, then a count of the rest."""
    for item in items[:PRINT_LIMIT]:
        printer(item)
    if len(items) > PRINT_LIMIT:
        typer.secho(f"  ... and {len(items) - PRINT_LIMIT} more", err=True)


def _join_limited(paths: Sequence[str]) -> str:
    joined = " , ".join(paths[:PRINT_LIMIT])
    if len(paths) > PRINT_LIMIT:
        joined += f" ... and {len(paths) - PRINT_LIMIT} more"
    return joined


def _display_path(path: Path) -> str:
    """Format path for display, relative to the working directory if possible.

    Args:
        path: Path to format

    Returns:
        String representation, relative when path is under the cwd
    """
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        # Not under cwd, return as-is
        return str(path)
