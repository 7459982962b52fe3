"""Manifest parsing and extension identifier resolution."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from os import PathLike
from pathlib import Path
from typing import Any

from xpikit.core.errors import ManifestParseError, NotFoundError, PackIOError, XpiError
from xpikit.core.identifier import is_valid_identifier
from xpikit.core.result import Err, Ok, Result
from xpikit.core.types import AddonInfo

logger = logging.getLogger(__name__)

MANIFEST_NAME = "manifest.json"


def decode_manifest(data: bytes) -> str:
    """Decode manifest bytes as UTF-8, dropping a leading BOM.

    Raises
    ------
    ManifestParseError
        If the bytes are not valid UTF-8.
    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ManifestParseError(f"{MANIFEST_NAME} is not valid UTF-8: {e}") from e


def load_manifest(text: str) -> dict[str, Any]:
    """Parse manifest text into a JSON object.

    Raises
    ------
    ManifestParseError
        If the text is not JSON or the top-level value is not an object.
    """
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Failed to parse {MANIFEST_NAME}: {e}") from e
    except RecursionError as e:
        raise ManifestParseError(f"Failed to parse {MANIFEST_NAME}: nesting too deep") from e
    if not isinstance(doc, dict):
        raise ManifestParseError(f"{MANIFEST_NAME} must hold a JSON object, got {type(doc).__name__}")
    return doc


def addon_info_from_document(doc: Mapping[str, Any]) -> AddonInfo:
    """Extract the raw identity triple from a parsed manifest.

    The id comes from ``browser_specific_settings.gecko.id``, falling back
    to the legacy ``applications.gecko.id`` when the first is absent or
    empty. Missing or non-string fields become empty strings. Nothing is
    validated here; see `derive_identifier`.
    """
    addon_id = _gecko_id(doc, "browser_specific_settings") or _gecko_id(doc, "applications")
    return AddonInfo(id=addon_id, name=_string(doc.get("name")), version=_string(doc.get("version")))


def resolve_identity(manifest_document: str) -> Result[AddonInfo]:
    """Resolve the identity triple from manifest text.

    Parameters
    ----------
    manifest_document
        Raw ``manifest.json`` text.

    Returns
    -------
    Result[AddonInfo]
        The unvalidated triple, or a ``parse_error`` failure.
    """
    try:
        doc = load_manifest(manifest_document)
    except ManifestParseError as e:
        return Err(e)
    return Ok(addon_info_from_document(doc))


def derive_identifier(info: AddonInfo) -> str | None:
    """Return the validated extension identifier for `info`, or None.

    An explicit id always wins and is never replaced by the name-derived
    fallback, even when it is invalid. Without an explicit id, the legacy
    identifier ``"@" + name`` is used when it validates.
    """
    if info.id:
        return info.id if is_valid_identifier(info.id) else None
    if info.name:
        candidate = f"@{info.name}"
        return candidate if is_valid_identifier(candidate) else None
    return None


def parse_manifest_file(path: str | PathLike[str]) -> Result[AddonInfo]:
    """Resolve the identity triple from a ``manifest.json`` file path."""
    path = Path(path)
    try:
        if not path.exists():
            raise NotFoundError(f"path {path} does not exist", path=path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise PackIOError(f"Failed to read {path}: {e}", path=path) from e
        doc = load_manifest(decode_manifest(data))
    except XpiError as e:
        if e.path is None:
            e.path = path
        logger.warning("Cannot read manifest %s: %s", path, e)
        return Err(e)
    return Ok(addon_info_from_document(doc))


def _gecko_id(doc: Mapping[str, Any], section: str) -> str:
    settings = doc.get(section)
    if not isinstance(settings, Mapping):
        return ""
    gecko = settings.get("gecko")
    if not isinstance(gecko, Mapping):
        return ""
    return _string(gecko.get("id"))


def _string(value: Any) -> str:
    return value if isinstance(value, str) else ""
