"""Build operations: plan a manifest, then write it."""

from pathlib import Path

from iconsync.catalog import Catalog
from iconsync.config import Config
from iconsync.exceptions import EmptyResultError
from iconsync.files.discover import discover_files
from iconsync.files.reader import ContentReader
from iconsync.files.reader import FileContentReader
from iconsync.manifest import Manifest
from iconsync.models import BuildPlan


def compute_build_plan(
    root: Path,
    config: Config,
    reader: ContentReader | None = None,
) -> BuildPlan:
    """Scan an icon tree and compute the manifest it would produce.

    Nothing is written. Every fatal problem raises before a plan exists, so
    a returned plan is always safe to execute.

    Args:
        root: Directory holding the icon tree (resolved to absolute; it is
            also the base of every relative path in the manifest)
        config: Build settings
        reader: Content access; defaults to reading files under root

    Returns:
        BuildPlan with ordered entries and soft warnings

    Raises:
        FileNotFoundError: If root does not exist
        NotADirectoryError: If root is not a directory
        EmptyResultError: If no candidate files exist or none survive
        IconSyncError: Any other fatal catalog error (see Catalog.collect)
    """
    root = root.resolve()
    if not root.exists():
        raise FileNotFoundError(f"Icon directory does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Icon path is not a directory: {root}")

    files = discover_files(root, config.allowed_extensions)
    if not files:
        raise EmptyResultError(f"No icon files found under {root}")

    catalog = Catalog(config, reader or FileContentReader(root))
    entries = catalog.collect(files)

    plan = BuildPlan(
        root=root,
        output=config.output,
        entries=entries,
        warnings=catalog.warnings,
    )
    Manifest.from_icons(plan.icons, config).validate(config)
    return plan


def execute_build_plan(plan: BuildPlan, config: Config) -> Manifest:
    """Write the manifest for a plan.

    Args:
        plan: BuildPlan from compute_build_plan()
        config: Settings supplying the manifest header

    Returns:
        The manifest that was written to plan.output

    Raises:
        ManifestValidationError: If the manifest fails its self-check
    """
    manifest = Manifest.from_icons(plan.icons, config)
    manifest.validate(config)
    manifest.save(plan.output)
    return manifest
