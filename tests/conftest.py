"""Shared fixtures."""

import pytest

from samples import SAMPLES


@pytest.fixture
def make_icon(tmp_path):
    """Write an icon under tmp_path/icons with content matching its extension.

    Content is made unique per path unless explicitly given.
    """
    root = tmp_path / "icons"
    root.mkdir(exist_ok=True)

    def _make(relative_path: str, content: bytes | None = None):
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if content is None:
            content = SAMPLES[path.suffix.lower()] + relative_path.encode("utf-8")
        path.write_bytes(content)
        return path

    _make.root = root
    return _make
