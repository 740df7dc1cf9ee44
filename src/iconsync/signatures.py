"""Content signature sniffing.

Classifies a file from its leading bytes, independent of its name, so a
renamed file cannot be published under a false content type.
"""

import re

from iconsync.exceptions import ContentMismatchError
from iconsync.models import ImageKind
from iconsync.models import ScannedFile
from iconsync.models import SniffResult

# Only this much of a file is ever read for sniffing
SIGNATURE_READ_BYTES = 64 * 1024

# Anything shorter cannot be classified
MIN_SNIFF_BYTES = 12

# Brand scan limit when the ftyp box declares an implausible size
FTYP_FALLBACK_SCAN_BYTES = 256

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
JPEG_MAGIC = b"\xff\xd8\xff"
GIF_MAGICS = (b"GIF87a", b"GIF89a")
SVG_TAG_RE = re.compile(r"<svg[\s>]", re.IGNORECASE)

AVIF_BRANDS = frozenset({"avif", "avis"})  # still image, image sequence

EXPECTED_KINDS = {
    ".png": ImageKind.PNG,
    ".jpg": ImageKind.JPEG,
    ".jpeg": ImageKind.JPEG,
    ".gif": ImageKind.GIF,
    ".webp": ImageKind.WEBP,
    ".svg": ImageKind.SVG,
    ".avif": ImageKind.AVIF,
}


def parse_ftyp_brands(prefix: bytes) -> tuple[str, ...]:
    """Collect the major and compatible brands of a leading ftyp box.

    The box length is the declared 32-bit size when it lies within
    [16, len(prefix)]; otherwise at most the first 256 bytes are scanned.

    Args:
        prefix: Leading bytes of the file

    Returns:
        Brands in first-seen order without repeats, or () if there is no
        ftyp box
    """
    if len(prefix) < 16 or prefix[4:8] != b"ftyp":
        return ()

    size = int.from_bytes(prefix[0:4], "big")
    if 16 <= size <= len(prefix):
        box_len = size
    else:
        box_len = min(len(prefix), FTYP_FALLBACK_SCAN_BYTES)

    brands = [prefix[8:12]]
    for offset in range(16, box_len - 3, 4):
        brands.append(prefix[offset : offset + 4])

    decoded = (b.decode("ascii", errors="replace") for b in brands)
    return tuple(dict.fromkeys(decoded))


def sniff(prefix: bytes) -> SniffResult:
    """Classify the format of a file from its leading bytes.

    Checks run in a fixed priority order: PNG, JPEG, GIF, WebP, ISOBMFF,
    then an SVG tag in the bytes decoded as UTF-8.

    Args:
        prefix: Leading bytes of the file (at most SIGNATURE_READ_BYTES
            are meaningful)

    Returns:
        SniffResult; ImageKind.UNKNOWN when nothing matches
    """
    if len(prefix) < MIN_SNIFF_BYTES:
        return SniffResult(kind=ImageKind.UNKNOWN)

    if prefix[:8] == PNG_MAGIC:
        return SniffResult(kind=ImageKind.PNG)
    if prefix[:3] == JPEG_MAGIC:
        return SniffResult(kind=ImageKind.JPEG)
    if prefix[:6] in GIF_MAGICS:
        return SniffResult(kind=ImageKind.GIF)
    if prefix[0:4] == b"RIFF" and prefix[8:12] == b"WEBP":
        return SniffResult(kind=ImageKind.WEBP)
    if prefix[4:8] == b"ftyp":
        return SniffResult(kind=ImageKind.ISOBMFF, brands=parse_ftyp_brands(prefix))

    text = prefix.decode("utf-8", errors="replace")
    if SVG_TAG_RE.search(text):
        return SniffResult(kind=ImageKind.SVG)

    return SniffResult(kind=ImageKind.UNKNOWN)


def expected_kind(extension: str) -> ImageKind:
    """Format implied by a lowercased extension such as ".png"."""
    return EXPECTED_KINDS.get(extension, ImageKind.UNKNOWN)


def matches_extension(extension: str, result: SniffResult) -> bool:
    """Check whether sniffed content is acceptable for an extension.

    AVIF cannot be told apart from other ISOBMFF files by magic bytes, so
    ".avif" additionally requires an avif or avis brand.
    """
    expected = expected_kind(extension)
    if expected == ImageKind.AVIF:
        return result.kind == ImageKind.ISOBMFF and not AVIF_BRANDS.isdisjoint(
            result.brands
        )
    return result.kind == expected


def check_signature(file: ScannedFile, result: SniffResult) -> None:
    """Raise if sniffed content disagrees with the file's extension.

    Raises:
        ContentMismatchError: With the expected and detected kinds
    """
    if not matches_extension(file.extension, result):
        raise ContentMismatchError(
            path=file.relative_path,
            expected=expected_kind(file.extension),
            detected=result.kind,
            brands=result.brands,
        )
