"""Icon file discovery."""

from collections.abc import Collection
from pathlib import Path

from iconsync.models import ScannedFile
from iconsync.ordering import natural_key


def _raise(error: OSError) -> None:
    raise error


def discover_files(root: Path, extensions: Collection[str]) -> list[ScannedFile]:
    """Discover candidate icon files under root.

    Hidden files and directories (leading ".") are skipped. Symlinks are
    never followed; every symlink is returned regardless of its suffix so
    that it can be rejected later.

    Args:
        root: Directory to scan
        extensions: Lowercased suffixes to include, e.g. {".png", ".svg"}

    Returns:
        Files with forward-slash paths relative to root, in natural order

    Raises:
        OSError: If any directory under root cannot be listed
    """
    files = []
    # Unlistable directories raise instead of being skipped
    for dirpath, dirnames, filenames in root.walk(on_error=_raise):
        # Symlinks to directories show up in dirnames on some Python versions
        linked_dirs = [d for d in dirnames if (dirpath / d).is_symlink()]
        dirnames[:] = [
            d for d in dirnames if not d.startswith(".") and d not in linked_dirs
        ]
        for filename in [*filenames, *linked_dirs]:
            if filename.startswith("."):
                continue

            full_path = dirpath / filename
            is_symlink = full_path.is_symlink()
            extension = full_path.suffix.lower()
            if not is_symlink and (
                extension not in extensions or not full_path.is_file()
            ):
                continue

            files.append(
                ScannedFile(
                    relative_path=full_path.relative_to(root).as_posix(),
                    extension=extension,
                    is_symlink=is_symlink,
                    size=full_path.lstat().st_size,
                )
            )

    return sorted(files, key=lambda f: (natural_key(f.relative_path), f.relative_path))
