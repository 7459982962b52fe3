"""Shared test fixtures for xpikit tests."""

from __future__ import annotations

import io
import json
import logging
import zipfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

UUID_ID = "{11111111-1111-1111-1111-111111111111}"


@pytest.fixture
def sample_manifest() -> dict[str, Any]:
    """Manifest with an explicit gecko id."""
    return {
        "manifest_version": 2,
        "browser_specific_settings": {"gecko": {"id": UUID_ID}},
        "name": "Test",
        "version": "1.0",
    }


@pytest.fixture
def make_extension(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing an extension source directory.

    ``manifest`` may be a dict (dumped as JSON), raw text, or None to omit
    ``manifest.json``. ``files`` maps relative paths to str or bytes content.
    """

    def factory(
        manifest: dict[str, Any] | str | None,
        files: dict[str, str | bytes] | None = None,
        *,
        name: str = "ext",
    ) -> Path:
        root = tmp_path / name
        root.mkdir(parents=True)
        if manifest is not None:
            text = manifest if isinstance(manifest, str) else json.dumps(manifest)
            (root / "manifest.json").write_text(text, encoding="utf-8")
        for rel, content in (files or {}).items():
            p = root / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                p.write_bytes(content)
            else:
                p.write_text(content, encoding="utf-8")
        return root

    return factory


@pytest.fixture
def make_xpi(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing a ZIP archive from name -> content entries."""

    def factory(entries: dict[str, str | bytes], *, name: str = "addon.xpi") -> Path:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w") as zf:
            for entry_name, content in entries.items():
                zf.writestr(entry_name, content)
        path = tmp_path / name
        path.write_bytes(buf.getvalue())
        return path

    return factory



@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Drop handlers the CLI installs so later tests start from a clean logger."""
    yield
    logger = logging.getLogger("xpikit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
