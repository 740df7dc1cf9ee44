"""Command-line interface for iconsync."""

from pathlib import Path
from typing import Annotated

import typer

from iconsync import __version__
from iconsync.config import Config
from iconsync.exceptions import ConfigError
from iconsync.exceptions import ContentMismatchError
from iconsync.exceptions import EmptyFileError
from iconsync.exceptions import EmptyResultError
from iconsync.exceptions import IconSyncError
from iconsync.exceptions import IndexConflictError
from iconsync.exceptions import ManifestValidationError
from iconsync.exceptions import PathRejectedError
from iconsync.exceptions import SymlinkRejectedError
from iconsync.operations import compute_build_plan
from iconsync.operations import execute_build_plan
from iconsync.output import print_build_plan
from iconsync.output import print_conflict_error
from iconsync.output import print_content_mismatch
from iconsync.output import print_path_rejected
from iconsync.output import print_warnings

app = typer.Typer(help="Deterministic icon manifest builder")


def _fail(message: str) -> None:
    typer.secho(f"✗ {message}", fg=typer.colors.RED, bold=True, err=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"iconsync {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version"
        ),
    ] = None,
) -> None:
    """Deterministic icon manifest builder."""
    pass


@app.command()
def build(
    root: Annotated[
        Path | None,
        typer.Argument(help="Icon directory to scan (default: configured icon_dir)"),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file (TOML)"),
    ] = None,
    owner: Annotated[str | None, typer.Option(help="Repository owner")] = None,
    repo: Annotated[str | None, typer.Option(help="Repository name")] = None,
    branch: Annotated[str | None, typer.Option(help="Branch in raw URLs")] = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Manifest file to write")
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", "-n", help="Show what would be written")
    ] = False,
) -> None:
    """Scan icons and write the manifest."""
    try:
        config = Config.load(config_path).with_overrides(
            owner=owner, repo=repo, branch=branch, output=output
        )
        if root is None:
            root = Path(config.icon_dir)

        plan = compute_build_plan(root, config)
        print_warnings(plan.warnings)

        if not dry_run:
            execute_build_plan(plan, config)
        print_build_plan(plan, dry_run=dry_run)
    except ConfigError as e:
        _fail(f"Config error: {e}")
        raise typer.Exit(1) from None
    except (FileNotFoundError, NotADirectoryError) as e:
        _fail(str(e))
        raise typer.Exit(1) from None
    except PathRejectedError as e:
        print_path_rejected(e)
        raise typer.Exit(1) from None
    except ContentMismatchError as e:
        print_content_mismatch(e)
        raise typer.Exit(1) from None
    except IndexConflictError as e:
        print_conflict_error(e)
        raise typer.Exit(1) from None
    except SymlinkRejectedError as e:
        _fail(str(e))
        typer.secho("   Replace the link with the real file", err=True)
        raise typer.Exit(1) from None
    except (EmptyFileError, EmptyResultError) as e:
        _fail(str(e))
        raise typer.Exit(1) from None
    except ManifestValidationError as e:
        _fail(f"Manifest self-check failed: {e}")
        raise typer.Exit(1) from None
    except PermissionError as e:
        _fail(f"Permission denied: {e}")
        raise typer.Exit(1) from None
    except OSError as e:
        _fail(f"Filesystem error: {e}")
        raise typer.Exit(1) from None
    except IconSyncError as e:
        _fail(f"Error: {e}")
        raise typer.Exit(1) from None


def main() -> None:
    """Main entry point for the iconsync CLI."""
    app()


if __name__ == "__main__":
    main()
