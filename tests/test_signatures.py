"""Tests for content signature sniffing."""

import pytest

from iconsync.exceptions import ContentMismatchError
from iconsync.models import ImageKind
from iconsync.models import ScannedFile
from iconsync.models import SniffResult
from iconsync.signatures import check_signature
from iconsync.signatures import expected_kind
from iconsync.signatures import matches_extension
from iconsync.signatures import parse_ftyp_brands
from iconsync.signatures import sniff
from samples import AVIF
from samples import GIF
from samples import HEIC
from samples import JPEG
from samples import PNG
from samples import SAMPLES
from samples import SVG
from samples import WEBP


class TestSniff:
    """Tests for sniff()."""

    @pytest.mark.parametrize(
        "content,kind",
        [
            (PNG, ImageKind.PNG),
            (JPEG, ImageKind.JPEG),
            (GIF, ImageKind.GIF),
            (b"GIF87a" + b"\x00" * 10, ImageKind.GIF),
            (WEBP, ImageKind.WEBP),
            (SVG, ImageKind.SVG),
            (AVIF, ImageKind.ISOBMFF),
            (HEIC, ImageKind.ISOBMFF),
        ],
    )
    def test_detects_known_formats(self, content, kind):
        """Test that each supported signature is recognized."""
        assert sniff(content).kind == kind

    def test_short_input_is_unknown(self):
        """Test that fewer than 12 bytes cannot be classified."""
        assert sniff(PNG[:11]).kind == ImageKind.UNKNOWN
        assert sniff(b"").kind == ImageKind.UNKNOWN

    def test_plain_text_is_unknown(self):
        """Test that arbitrary bytes are unknown."""
        assert sniff(b"hello, world! not an image").kind == ImageKind.UNKNOWN

    def test_svg_detection_is_case_insensitive_after_prolog(self):
        """Test that <SVG> is found after an XML prolog."""
        content = b'<?xml version="1.0"?>\n<!-- icon -->\n<SVG\nviewBox="0 0 1 1"/>'
        assert sniff(content).kind == ImageKind.SVG

    def test_svg_tag_needs_whitespace_or_close(self):
        """Test that <svgfoo is not an svg tag."""
        assert sniff(b"<svgfoo></svgfoo>    ").kind == ImageKind.UNKNOWN

    def test_svg_with_invalid_utf8_still_detected(self):
        """Test that undecodable bytes do not hide the svg tag."""
        assert sniff(b"\xff\xfe\x00<svg>" + b"\x00" * 8).kind == ImageKind.SVG

    def test_png_takes_priority_over_embedded_svg(self):
        """Test that binary magic wins over text found later."""
        assert sniff(PNG + b"<svg>").kind == ImageKind.PNG

    def test_riff_without_webp_is_unknown(self):
        """Test that RIFF containers other than WebP are unknown."""
        assert sniff(b"RIFF\x00\x00\x00\x00WAVEfmt ").kind == ImageKind.UNKNOWN

    def test_isobmff_carries_brands(self):
        """Test that ISOBMFF results include the brand set."""
        result = sniff(AVIF)
        assert result.brands == ("avif", "mif1", "miaf", "MA1B")

    def test_is_deterministic(self):
        """Test that the same bytes always give the same result."""
        assert sniff(HEIC) == sniff(HEIC)


class TestParseFtypBrands:
    """Tests for parse_ftyp_brands()."""

    def test_reads_major_and_compatible_brands(self):
        """Test brands are read up to the declared box size."""
        assert parse_ftyp_brands(HEIC) == ("heic", "mif1")

    def test_stops_at_declared_box_length(self):
        """Test that bytes after the ftyp box are not read as brands."""
        content = HEIC + b"meta" + b"avif"
        assert parse_ftyp_brands(content) == ("heic", "mif1")

    def test_implausible_size_scans_whole_short_prefix(self):
        """Test that a size larger than the prefix falls back to scanning it."""
        content = (9999).to_bytes(4, "big") + b"ftypmif1\x00\x00\x00\x00avis"
        assert parse_ftyp_brands(content) == ("mif1", "avis")

    def test_implausible_size_caps_scan_at_256_bytes(self):
        """Test that the fallback scan never reaches past 256 bytes."""
        content = (
            (0).to_bytes(4, "big")
            + b"ftypmif1\x00\x00\x00\x00"
            + b"mif1" * 60  # up to offset 256
            + b"avif"
        )
        assert parse_ftyp_brands(content) == ("mif1",)

    def test_size_below_sixteen_uses_fallback(self):
        """Test that a declared size under 16 is treated as implausible."""
        content = (8).to_bytes(4, "big") + b"ftypmif1\x00\x00\x00\x00avif"
        assert parse_ftyp_brands(content) == ("mif1", "avif")

    def test_partial_trailing_brand_is_ignored(self):
        """Test that fewer than 4 trailing bytes are not a brand."""
        content = (22).to_bytes(4, "big") + b"ftypmif1\x00\x00\x00\x00avifab"
        assert parse_ftyp_brands(content) == ("mif1", "avif")

    def test_no_ftyp_box(self):
        """Test that non-ISOBMFF data has no brands."""
        assert parse_ftyp_brands(PNG) == ()
        assert parse_ftyp_brands(b"\x00\x00\x00\x10ftyp") == ()


class TestExpectedKind:
    """Tests for expected_kind()."""

    @pytest.mark.parametrize(
        "extension,kind",
        [
            (".png", ImageKind.PNG),
            (".jpg", ImageKind.JPEG),
            (".jpeg", ImageKind.JPEG),
            (".gif", ImageKind.GIF),
            (".webp", ImageKind.WEBP),
            (".svg", ImageKind.SVG),
            (".avif", ImageKind.AVIF),
            (".bmp", ImageKind.UNKNOWN),
            ("", ImageKind.UNKNOWN),
        ],
    )
    def test_maps_extensions(self, extension, kind):
        """Test the extension to expected kind mapping."""
        assert expected_kind(extension) == kind


class TestMatchesExtension:
    """Tests for matches_extension() and check_signature()."""

    @pytest.mark.parametrize("extension", sorted(SAMPLES))
    def test_accepts_matching_content(self, extension):
        """Test that each fixture is accepted under its own extension."""
        assert matches_extension(extension, sniff(SAMPLES[extension]))

    @pytest.mark.parametrize(
        "content_extension,extension",
        [
            (content_extension, extension)
            for content_extension in sorted(SAMPLES)
            for extension in sorted(SAMPLES)
            if expected_kind(content_extension) != expected_kind(extension)
        ],
    )
    def test_rejects_content_under_other_extensions(
        self, content_extension, extension
    ):
        """Test that every format is refused under every other extension."""
        assert not matches_extension(extension, sniff(SAMPLES[content_extension]))

    def test_avif_requires_avif_or_avis_brand(self):
        """Test that HEIC (ISOBMFF without avif brands) is not AVIF."""
        assert not matches_extension(".avif", sniff(HEIC))

    def test_avif_sequence_brand_accepted(self):
        """Test that the avis brand alone is enough."""
        content = (24).to_bytes(4, "big") + b"ftypmsf1\x00\x00\x00\x00avismsf1"
        assert matches_extension(".avif", sniff(content))

    def test_check_signature_reports_expected_and_detected(self):
        """Test that a .jpg holding PNG bytes is a content mismatch."""
        file = ScannedFile(relative_path="icons/logo.jpg", extension=".jpg", size=20)

        with pytest.raises(ContentMismatchError) as excinfo:
            check_signature(file, sniff(PNG))

        assert excinfo.value.path == "icons/logo.jpg"
        assert excinfo.value.expected == ImageKind.JPEG
        assert excinfo.value.detected == ImageKind.PNG
        assert "expected jpeg, detected png" in str(excinfo.value)

    def test_check_signature_includes_brands(self):
        """Test that ISOBMFF brands are included in the mismatch message."""
        file = ScannedFile(relative_path="a.avif", extension=".avif", size=24)

        with pytest.raises(ContentMismatchError, match="brands: heic,mif1"):
            check_signature(file, sniff(HEIC))

    def test_check_signature_passes_silently(self):
        """Test that matching content raises nothing."""
        file = ScannedFile(relative_path="a.svg", extension=".svg", size=10)
        check_signature(file, SniffResult(kind=ImageKind.SVG))
