"""Configuration for manifest builds."""

import dataclasses
import posixpath
import re
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Self

from platformdirs import user_config_path

from iconsync.exceptions import ConfigError
from iconsync.models import Invalid
from iconsync.validation import validate_path

DEFAULT_ALLOWED_EXTENSIONS = frozenset(
    {".png", ".jpg", ".jpeg", ".webp", ".svg", ".gif", ".avif"}
)

RAW_URL_BASE = "https://raw.githubusercontent.com"

# Characters GitHub allows in user, organization and repository names
GITHUB_NAME_RE = re.compile(r"[A-Za-z0-9._-]+")


@dataclass(frozen=True)
class Config:
    """Settings for one manifest build."""

    owner: str = "h05n"
    repo: str = "tubiao"
    branch: str = "main"
    icon_dir: str = "图标库"  # Scan root, also the URL path prefix
    output: Path = Path("图标库.json")
    library_name: str = "图标库"
    description: str = ""
    default_group: str = "默认"  # Group for numeric files at the scan root
    allowed_extensions: frozenset[str] = DEFAULT_ALLOWED_EXTENSIONS

    def __post_init__(self) -> None:
        """Check every value that ends up in published URLs.

        Raises:
            ConfigError: If owner or repo is not a GitHub name, or branch or
                a non-empty icon_dir would break a literal URL
        """
        for key in ("owner", "repo"):
            value = getattr(self, key)
            if not GITHUB_NAME_RE.fullmatch(value) or value in (".", ".."):
                raise ConfigError(f"'{key}' is not a valid GitHub name: {value!r}")

        for key in ("branch", "icon_dir"):
            value = getattr(self, key)
            if key == "icon_dir" and not value:
                continue
            outcome = validate_path(value)
            if isinstance(outcome, Invalid):
                raise ConfigError(
                    f"'{key}' cannot be used in raw URLs: {value!r} ({outcome.reason})"
                )

    @classmethod
    def default_path(cls) -> Path:
        """Get default config location using platformdirs."""
        return user_config_path("iconsync") / "config.toml"

    def url_for(self, relative_path: str) -> str:
        """Published raw URL for a path relative to icon_dir (not encoded)."""
        path = posixpath.join(self.icon_dir, relative_path)
        return f"{RAW_URL_BASE}/{self.owner}/{self.repo}/{self.branch}/{path}"

    def with_overrides(self, **overrides) -> Self:
        """Copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create from dict loaded from TOML."""
        fields = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - fields)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        values = {}
        for key, value in data.items():
            if key == "allowed_extensions":
                if not isinstance(value, list) or not all(
                    isinstance(v, str) for v in value
                ):
                    raise ConfigError("'allowed_extensions' must be a list of strings")
                values[key] = frozenset(
                    v.lower() if v.startswith(".") else f".{v.lower()}" for v in value
                )
            elif not isinstance(value, str):
                raise ConfigError(f"'{key}' must be a string")
            elif key == "output":
                values[key] = Path(value)
            else:
                values[key] = value

        if "default_group" in values and not values["default_group"].strip():
            raise ConfigError("'default_group' must not be empty")

        return cls(**values)

    @classmethod
    def load(cls, path: Path | None = None) -> Self:
        """Load config from a TOML file. Uses defaults if it doesn't exist.

        Args:
            path: Path to config file. If None, uses default location.
        """
        if path is None:
            path = cls.default_path()

        if not path.exists():
            return cls()

        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e
        return cls.from_dict(data)
