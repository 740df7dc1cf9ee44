"""The set of accepted icons and the checks that span it.

Checks come in two kinds:

- per-file checks (symlink, empty file, content signature) stop the run at
  the first offending file;
- whole-set checks (path safety, name/index conflicts) always look at every
  file and report all offenders together.
"""

from collections import defaultdict
from collections.abc import Iterable

from iconsync.config import Config
from iconsync.exceptions import EmptyFileError
from iconsync.exceptions import EmptyResultError
from iconsync.exceptions import IndexConflictError
from iconsync.exceptions import PathRejectedError
from iconsync.exceptions import SymlinkRejectedError
from iconsync.files.reader import ContentReader
from iconsync.models import CatalogEntry
from iconsync.models import CatalogWarning
from iconsync.models import DuplicateContentWarning
from iconsync.models import IndexConflict
from iconsync.models import IndexlessGroupWarning
from iconsync.models import ScannedFile
from iconsync.models import UnparseableNameWarning
from iconsync.names import fallback_name
from iconsync.names import normalize_text
from iconsync.names import parse_stem
from iconsync.ordering import natural_key
from iconsync.ordering import order_entries
from iconsync.signatures import SIGNATURE_READ_BYTES
from iconsync.signatures import check_signature
from iconsync.signatures import sniff
from iconsync.validation import validate_paths


class Catalog:
    """Accepted icon entries for one build.

    Example:
        >>> catalog = Catalog(Config(), FileContentReader(root))
        >>> entries = catalog.collect(discover_files(root, extensions))
    """

    def __init__(self, config: Config, reader: ContentReader):
        self.config = config
        self.reader = reader
        self.entries: list[CatalogEntry] = []
        self.warnings: list[CatalogWarning] = []

    def add(self, file: ScannedFile) -> CatalogEntry | None:
        """Run the per-file checks and record the file.

        Returns:
            The new entry, or None if the file was skipped because its name
            normalized to nothing (a warning is recorded instead)

        Raises:
            SymlinkRejectedError: If the file is a symbolic link
            EmptyFileError: If the file has zero bytes
            ContentMismatchError: If content disagrees with the extension
        """
        if file.is_symlink:
            raise SymlinkRejectedError(file.relative_path)
        if file.size == 0:
            raise EmptyFileError(file.relative_path)

        parsed = parse_stem(
            normalize_text(file.stem),
            fallback_name(file.relative_path, self.config.default_group),
        )
        display_name = normalize_text(parsed.base_name).strip()
        if not display_name:
            self.warnings.append(UnparseableNameWarning(path=file.relative_path))
            return None

        prefix = self.reader.read_prefix(file.relative_path, SIGNATURE_READ_BYTES)
        check_signature(file, sniff(prefix))

        entry = CatalogEntry(
            display_name=display_name,
            index=parsed.index,
            relative_path=file.relative_path,
            url=self.config.url_for(file.relative_path),
            content_hash=self.reader.hash(file.relative_path),
        )
        self.entries.append(entry)
        return entry

    def find_conflicts(self) -> list[IndexConflict]:
        """Entries sharing a display name and a (present) index."""
        groups: dict[tuple[str, int], list[str]] = defaultdict(list)
        for entry in self.entries:
            if entry.index is not None:
                groups[(entry.display_name, entry.index)].append(entry.relative_path)

        return [
            IndexConflict(display_name=name, index=index, paths=tuple(paths))
            for (name, index), paths in groups.items()
            if len(paths) > 1
        ]

    def find_duplicates(self) -> list[DuplicateContentWarning]:
        """Entries whose full content is byte-identical."""
        groups: dict[str, list[str]] = defaultdict(list)
        for entry in self.entries:
            groups[entry.content_hash].append(entry.relative_path)

        return [
            DuplicateContentWarning(content_hash=content_hash, paths=tuple(paths))
            for content_hash, paths in groups.items()
            if len(paths) > 1
        ]

    def find_indexless_groups(self) -> list[IndexlessGroupWarning]:
        """Groups holding more than one entry without an index."""
        counts: dict[str, int] = defaultdict(int)
        for entry in self.entries:
            if entry.index is None:
                counts[entry.display_name] += 1

        return [
            IndexlessGroupWarning(display_name=name, count=count)
            for name, count in counts.items()
            if count >= 2
        ]

    def collect(self, files: Iterable[ScannedFile]) -> list[CatalogEntry]:
        """Validate and catalog a whole scan, returning entries in final order.

        Entries and warnings from any earlier call are discarded first.

        Raises:
            PathRejectedError: With every unsafe path, before any file is read
            SymlinkRejectedError: See add()
            EmptyFileError: See add()
            ContentMismatchError: See add()
            IndexConflictError: With every conflicting name/index group
            EmptyResultError: If no entry survives
        """
        self.entries = []
        self.warnings = []

        files = sorted(
            files, key=lambda f: (natural_key(f.relative_path), f.relative_path)
        )

        violations = validate_paths(f.relative_path for f in files)
        if violations:
            raise PathRejectedError(violations)

        for file in files:
            self.add(file)

        conflicts = self.find_conflicts()
        if conflicts:
            raise IndexConflictError(conflicts)

        if not self.entries:
            raise EmptyResultError("No valid icons (check file names and extensions)")

        self.warnings.extend(self.find_duplicates())
        self.warnings.extend(self.find_indexless_groups())

        return order_entries(self.entries, self.config.default_group)
