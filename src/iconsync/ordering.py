"""Deterministic ordering of catalog entries.

Collation is explicit rather than locale-driven so the same set of files
orders identically on every machine.
"""

import re
import unicodedata
from collections.abc import Iterable

from iconsync.models import CatalogEntry

DIGIT_RUN_RE = re.compile(r"([0-9]+)")


def _fold(text: str) -> str:
    """Base-letter form: no case, no accents."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def natural_key(text: str) -> tuple:
    """Sort key comparing digit runs by value and text case-insensitively.

    re.split with a capturing group alternates text and digit runs, so even
    positions always hold str and odd positions always hold int, and keys of
    different strings stay comparable. "9" < "10" < "11", "Logo" == "logo".
    """
    parts = DIGIT_RUN_RE.split(text)
    return tuple(
        int(part) if i % 2 else _fold(part) for i, part in enumerate(parts)
    )


def entry_sort_key(entry: CatalogEntry, default_group: str) -> tuple:
    """Sort key for a catalog entry.

    Order: the default numeric group first, then display name, then index
    (entries without an index first), then relative path.
    """
    return (
        entry.display_name != default_group,
        natural_key(entry.display_name),
        -1 if entry.index is None else entry.index,
        natural_key(entry.relative_path),
        entry.relative_path,
    )


def order_entries(
    entries: Iterable[CatalogEntry], default_group: str
) -> list[CatalogEntry]:
    """Return entries in final manifest order, whatever order they came in."""
    return sorted(entries, key=lambda e: entry_sort_key(e, default_group))
