"""Tests for iconsync exceptions."""

from iconsync.exceptions import ContentMismatchError
from iconsync.exceptions import IndexConflictError
from iconsync.exceptions import PathRejectedError
from iconsync.models import ImageKind
from iconsync.models import IndexConflict
from iconsync.models import PathViolation


class TestPathRejectedError:
    """Tests for PathRejectedError."""

    def test_formats_message_with_few_violations(self):
        """Test that error message lists all paths when 3 or fewer."""
        violations = [
            PathViolation(path="a b.png", reason="contains whitespace"),
            PathViolation(path="CON.png", reason="reserved device name: CON"),
        ]

        error = PathRejectedError(violations)

        assert "a b.png" in str(error)
        assert "CON.png" in str(error)
        assert "..." not in str(error)
        assert error.violations == violations

    def test_formats_message_with_many_violations(self):
        """Test that error message truncates and shows count when > 3 paths."""
        violations = [
            PathViolation(path=f"bad {i}.png", reason="contains whitespace")
            for i in range(5)
        ]

        error = PathRejectedError(violations)

        # Should show first 3 and a total count
        assert "bad 2.png" in str(error)
        assert "bad 3.png" not in str(error)
        assert "(5 total)" in str(error)


class TestIndexConflictError:
    """Tests for IndexConflictError."""

    def test_formats_message_with_keys(self):
        """Test that conflicts are named by name#index."""
        conflicts = [
            IndexConflict(display_name="logo", index=1, paths=("a.png", "b.png")),
        ]

        error = IndexConflictError(conflicts)

        assert "logo#1" in str(error)


class TestContentMismatchError:
    """Tests for ContentMismatchError."""

    def test_message(self):
        """Test that the message names path, expected and detected formats."""
        error = ContentMismatchError("a.jpg", ImageKind.JPEG, ImageKind.PNG)

        assert str(error) == (
            "Extension does not match content: a.jpg (expected jpeg, detected png)"
        )

    def test_message_with_brands(self):
        """Test that ISO-BMFF brands are included when known."""
        error = ContentMismatchError(
            "a.avif", ImageKind.AVIF, ImageKind.ISOBMFF, brands=["heic", "mif1"]
        )

        assert str(error).endswith("detected isobmff, brands: heic,mif1)")
        assert error.brands == ("heic", "mif1")
