"""Path safety checks for publishing relative paths as literal URLs.

Manifest URLs are the relative path verbatim, without percent-encoding, so
that non-ASCII names stay readable. Instead of escaping, every character or
segment that would break such a URL (or a common filesystem) is refused.
"""

import re
from collections.abc import Iterable

from iconsync.models import Invalid
from iconsync.models import PathViolation
from iconsync.models import Valid
from iconsync.models import ValidationOutcome
from iconsync.names import normalize_text

CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")
# Characters that end, split or reinterpret an unescaped URL
BAD_URL_CHARS_RE = re.compile(r"[\s\ufeff#?%&+\\]")
# Characters Windows refuses in file names
WINDOWS_FORBIDDEN_RE = re.compile(r'[<>:"|*]')

WINDOWS_RESERVED_NAMES = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)


def validate_path(relative_path: str) -> ValidationOutcome:
    """Check a forward-slash relative path against the path-safety rules.

    Rules are checked in order and the first failing one is reported.

    Args:
        relative_path: Path relative to the scan root

    Returns:
        Valid(), or Invalid(reason) naming the broken rule
    """
    if not relative_path:
        return Invalid("path is empty")
    if CONTROL_CHARS_RE.search(relative_path):
        return Invalid("contains control characters")
    if BAD_URL_CHARS_RE.search(relative_path):
        return Invalid("contains whitespace or one of # ? % & + \\")
    if WINDOWS_FORBIDDEN_RE.search(relative_path):
        return Invalid('contains one of < > : " | *')
    if "//" in relative_path:
        return Invalid("contains a doubled separator //")

    segments = relative_path.split("/")
    if any(not s for s in segments):
        return Invalid("contains an empty path segment")
    if any(s in (".", "..") for s in segments):
        return Invalid("contains a . or .. segment")
    if any(s.endswith((" ", ".")) for s in segments):
        return Invalid("a segment ends with a space or a period")

    # "CON.png" and "con.tar.png" are reserved just like "CON"
    for segment in segments:
        base = normalize_text(segment.split(".")[0]).strip().upper()
        if base in WINDOWS_RESERVED_NAMES:
            return Invalid(f"reserved device name: {segment}")

    return Valid()


def validate_paths(relative_paths: Iterable[str]) -> list[PathViolation]:
    """Validate every path and collect all violations (never stops early)."""
    violations = []
    for path in relative_paths:
        outcome = validate_path(path)
        if isinstance(outcome, Invalid):
            violations.append(PathViolation(path=path, reason=outcome.reason))
    return violations
