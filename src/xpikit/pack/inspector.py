"""Package inspection for source directories and ``.xpi`` archives."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from xpikit.core.errors import MissingManifestError, NotFoundError, PackIOError, XpiError
from xpikit.core.result import Err, Ok, Result
from xpikit.core.types import AddonInfo, ExtInfo, PackageShape
from xpikit.pack.archive import ArchiveReader
from xpikit.pack.fs import FileSystem
from xpikit.pack.manifest import MANIFEST_NAME, decode_manifest, resolve_identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryLocation:
    """An unpacked extension source directory."""

    path: Path
    shape = PackageShape.DIR


@dataclass(frozen=True)
class ArchiveLocation:
    """A compressed extension archive."""

    path: Path
    shape = PackageShape.XPI


PackageLocation = DirectoryLocation | ArchiveLocation


def locate(path: str | PathLike[str], *, fs: FileSystem | None = None) -> PackageLocation:
    """Classify `path` as a directory or an archive.

    Raises
    ------
    NotFoundError
        If `path` does not exist.
    """
    fs = fs or FileSystem()
    path = Path(path)
    if not fs.exists(path):
        raise NotFoundError(f"path {path} does not exist", path=path)
    if fs.is_dir(path):
        return DirectoryLocation(path)
    return ArchiveLocation(path)


def inspect(location: str | PathLike[str], *, fs: FileSystem | None = None) -> Result[ExtInfo]:
    """Read the manifest identity of a directory or archive package.

    Parameters
    ----------
    location
        Path to an extension source directory or ``.xpi`` file.
    fs
        File-system implementation (defaults to the local disk).

    Returns
    -------
    Result[ExtInfo]
        The raw identity tagged ``dir`` or ``xpi``, or a failure of kind
        ``not_found``, ``missing_manifest``, ``parse_error`` or ``io_error``.
    """
    fs = fs or FileSystem()
    path = Path(location)
    try:
        loc = locate(path, fs=fs)
    except XpiError as e:
        logger.warning("Cannot inspect %s: %s", path, e)
        return Err(e)

    resolved = _resolve(loc, fs=fs)
    if isinstance(resolved, Err):
        return resolved
    info = resolved.value
    logger.debug("Resolved %s package %s: id=%r name=%r version=%r", loc.shape.value, path, info.id, info.name, info.version)
    return Ok(ExtInfo(type=loc.shape, addon=info))


def read_xpi_info(path: str | PathLike[str], *, fs: FileSystem | None = None) -> Result[AddonInfo]:
    """Read the identity triple from an ``.xpi`` archive path.

    Unlike `inspect`, the path is always treated as an archive.
    """
    fs = fs or FileSystem()
    path = Path(path)
    if not fs.exists(path):
        error = NotFoundError(f"path {path} does not exist", path=path)
        logger.warning("Cannot inspect %s: %s", path, error)
        return Err(error)
    return _resolve(ArchiveLocation(path), fs=fs)


def _resolve(loc: PackageLocation, *, fs: FileSystem) -> Result[AddonInfo]:
    try:
        text = read_manifest_text(loc, fs=fs)
    except XpiError as e:
        resolved: Result[AddonInfo] = Err(e)
    else:
        resolved = resolve_identity(text)

    if isinstance(resolved, Err):
        if resolved.error.path is None:
            resolved.error.path = loc.path
        logger.warning("Cannot inspect %s: %s", loc.path, resolved.error)
    return resolved


def read_manifest_text(loc: PackageLocation, *, fs: FileSystem) -> str:
    """Return the ``manifest.json`` text stored at `loc`.

    Raises
    ------
    MissingManifestError
        If the package has no ``manifest.json`` at its root.
    ManifestParseError
        If the manifest bytes are not UTF-8.
    PackIOError
        If the package cannot be read.
    """
    if isinstance(loc, DirectoryLocation):
        return decode_manifest(_read_directory_manifest(loc.path, fs))
    return decode_manifest(_read_archive_manifest(loc.path, fs))


def _read_directory_manifest(root: Path, fs: FileSystem) -> bytes:
    manifest_path = root / MANIFEST_NAME
    if not fs.exists(manifest_path):
        raise MissingManifestError(f"directory does not contain {MANIFEST_NAME}", path=root)
    try:
        return fs.read_file(manifest_path)
    except OSError as e:
        raise PackIOError(f"Failed to read {manifest_path}: {e}", path=manifest_path) from e


def _read_archive_manifest(archive_path: Path, fs: FileSystem) -> bytes:
    try:
        data = fs.read_file(archive_path)
    except OSError as e:
        raise PackIOError(f"Failed to read {archive_path}: {e}", path=archive_path) from e

    with ArchiveReader(data) as reader:
        entry = reader.find(MANIFEST_NAME)
        if entry is None:
            raise MissingManifestError(f"archive does not contain {MANIFEST_NAME}", path=archive_path)
        return entry.get_data()
