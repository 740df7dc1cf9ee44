"""Manifest document: serialization, self-check and atomic save."""

import json
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Self

from iconsync.config import Config
from iconsync.exceptions import ManifestValidationError
from iconsync.models import ManifestIcon


@dataclass
class Manifest:
    """Published icon library."""

    name: str
    description: str
    icons: list[ManifestIcon] = field(default_factory=list)

    @classmethod
    def from_icons(cls, icons: list[ManifestIcon], config: Config) -> Self:
        return cls(
            name=config.library_name, description=config.description, icons=icons
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "name": self.name,
            "description": self.description,
            "icons": [icon.to_dict() for icon in self.icons],
        }

    def validate(self, config: Config) -> None:
        """Check the manifest before it is written.

        Raises:
            ManifestValidationError: If the header differs from config, there
                are no icons, an icon has an empty name or url, or a url
                repeats
        """
        if self.name != config.library_name:
            raise ManifestValidationError(
                f"Manifest name {self.name!r} does not match {config.library_name!r}"
            )
        if self.description != config.description:
            raise ManifestValidationError("Manifest description does not match config")
        if not self.icons:
            raise ManifestValidationError("Manifest has no icons")

        seen = set()
        for i, icon in enumerate(self.icons):
            if not isinstance(icon.name, str) or not icon.name.strip():
                raise ManifestValidationError(f"icons[{i}] has an empty name")
            if not isinstance(icon.url, str) or not icon.url.strip():
                raise ManifestValidationError(f"icons[{i}] has an empty url")
            if icon.url in seen:
                raise ManifestValidationError(f"Duplicate url in manifest: {icon.url}")
            seen.add(icon.url)

    def dumps(self) -> str:
        """JSON text as written to disk (UTF-8, not ASCII-escaped)."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2) + "\n"

    def save(self, path: Path) -> None:
        """Save manifest to a JSON file atomically.

        Args:
            path: Destination file
        """
        # Create parent directories if needed
        path.parent.mkdir(parents=True, exist_ok=True)

        # Write atomically (write to temp file, then rename)
        temp_path = path.with_name(path.name + ".tmp")
        temp_path.write_text(self.dumps(), encoding="utf-8")
        temp_path.replace(path)
