"""Display names and ordering indexes from file names."""

import posixpath
import re
import unicodedata

from iconsync.models import ParsedStem

# Zero-width and invisible characters that make equal-looking names differ
ZERO_WIDTH_RE = re.compile(r"[\u200b-\u200f\ufeff\u2060\u180e]")

# Fullwidth digits (０-９) to ASCII
FULLWIDTH_DIGITS = str.maketrans({chr(0xFF10 + i): str(i) for i in range(10)})

# Grammar for stems, tried in order. Digits are ASCII only: fullwidth
# digits have already been folded and other scripts' digits are text.
NUMERIC_STEM_RE = re.compile(r"[0-9]+")
PAREN_INDEX_RE = re.compile(r"(.*?)[（(]\s*([0-9]+)\s*[)）]\s*")
SEPARATOR_INDEX_RE = re.compile(r"(.*?)[\s_-]+([0-9]+)\s*")
TRAILING_INDEX_RE = re.compile(r"(.*?)([0-9]+)\s*")


def normalize_text(text: str) -> str:
    """NFKC-normalize, fold fullwidth digits and strip zero-width characters."""
    normalized = unicodedata.normalize("NFKC", text or "")
    normalized = normalized.translate(FULLWIDTH_DIGITS)
    return ZERO_WIDTH_RE.sub("", normalized)


def parse_stem(stem: str, fallback_name: str) -> ParsedStem:
    """Split a normalized stem into a display name and an optional index.

    Args:
        stem: File name without extension, already passed through
            normalize_text()
        fallback_name: Name used for purely numeric stems

    Returns:
        ParsedStem. The base name may be empty (e.g. "(3)"); callers
        decide what to do with that.

    Examples:
        "icon(3)" -> ("icon", 3), "icon_03" -> ("icon", 3),
        "icon3" -> ("icon", 3), "42" -> (fallback_name, 42),
        "icon" -> ("icon", None)
    """
    stem = stem.strip()

    if NUMERIC_STEM_RE.fullmatch(stem):
        return ParsedStem(base_name=fallback_name, index=int(stem))

    for pattern in (PAREN_INDEX_RE, SEPARATOR_INDEX_RE):
        match = pattern.fullmatch(stem)
        if match:
            return ParsedStem(base_name=match[1].strip(), index=int(match[2]))

    match = TRAILING_INDEX_RE.fullmatch(stem)
    if match and match[1].strip():
        return ParsedStem(base_name=match[1].strip(), index=int(match[2]))

    return ParsedStem(base_name=stem, index=None)


def fallback_name(relative_path: str, default_group: str) -> str:
    """Group name for numeric stems: the parent directory, else default_group."""
    parent = posixpath.dirname(relative_path)
    if not parent:
        return default_group
    return normalize_text(posixpath.basename(parent)).strip() or default_group
