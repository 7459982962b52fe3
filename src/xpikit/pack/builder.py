"""Assemble an extension source directory into an ``.xpi`` package."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from os import PathLike
from pathlib import Path

from xpikit.core.errors import InvalidIdentifierError, NotFoundError, PackIOError, XpiError
from xpikit.core.result import Err, Ok, Result
from xpikit.pack.archive import ArchiveWriter
from xpikit.pack.fs import FileSystem
from xpikit.pack.ignore import IgnoreMatcher, build_ignore_matcher
from xpikit.pack.inspector import inspect
from xpikit.pack.manifest import derive_identifier

logger = logging.getLogger(__name__)

PACKAGE_SUFFIX = ".xpi"


def package_file_name(identifier: str) -> str:
    """Return the output file name for a validated identifier."""
    return f"{identifier}{PACKAGE_SUFFIX}"


def build_package(
    source_dir: str | PathLike[str],
    output_dir: str | PathLike[str] | None = None,
    *,
    ignore: Sequence[str] = (),
    compress_level: int = 9,
    fs: FileSystem | None = None,
) -> Result[Path]:
    """Package `source_dir` into ``<identifier>.xpi``.

    Every regular file under `source_dir` is added to an in-memory archive
    at its relative path. Existing ``.xpi`` files directly inside the output
    directory are skipped, so building into the source tree does not nest
    the previous package. The identity is then read from the source
    directory's ``manifest.json`` and validated; only if that succeeds is
    the archive written, replacing any existing file of the same name.

    Parameters
    ----------
    source_dir
        Unpacked extension directory.
    output_dir
        Directory for the package (defaults to the current directory).
    ignore
        Glob patterns for files to leave out of the archive.
    compress_level
        DEFLATE level, 0 through 9.
    fs
        File-system implementation (defaults to the local disk).

    Returns
    -------
    Result[Path]
        Path of the written package, or a failure. On failure nothing is
        written.

    Raises
    ------
    ValueError
        If an ignore pattern is malformed.
    """
    fs = fs or FileSystem()
    source = Path(source_dir)
    out_dir = Path(output_dir) if output_dir is not None else Path.cwd()
    matcher = build_ignore_matcher(list(ignore))

    try:
        payload = _assemble(source, out_dir, ignore=matcher, compress_level=compress_level, fs=fs)
    except XpiError as e:
        if e.path is None:
            e.path = source
        logger.warning("Cannot package %s: %s", source, e)
        return Err(e)

    inspected = inspect(source, fs=fs)
    if isinstance(inspected, Err):
        return inspected

    identifier = derive_identifier(inspected.value.addon)
    if identifier is None:
        info = inspected.value.addon
        error = InvalidIdentifierError(_invalid_identifier_message(info.id, info.name), path=source)
        logger.warning("Cannot package %s: %s", source, error)
        return Err(error)

    out_path = out_dir / package_file_name(identifier)
    try:
        fs.write_file(out_path, payload)
    except OSError as e:
        error = PackIOError(f"Failed to write {out_path}: {e}", path=out_path)
        logger.warning("Cannot package %s: %s", source, error)
        return Err(error)

    logger.info("Wrote %s (%d bytes)", out_path, len(payload))
    return Ok(out_path)


def _assemble(source: Path, out_dir: Path, *, ignore: IgnoreMatcher, compress_level: int, fs: FileSystem) -> bytes:
    if not fs.exists(source):
        raise NotFoundError(f"path {source} does not exist", path=source)
    if not fs.is_dir(source):
        raise PackIOError(f"{source} is not a directory", path=source)
    out_dir = out_dir.resolve()

    with ArchiveWriter(compress_level=compress_level) as writer:
        try:
            for entry in fs.walk(source, ignore=ignore):
                # Earlier packages in the output directory are never repackaged.
                if entry.path.suffix == PACKAGE_SUFFIX and entry.path.parent.resolve() == out_dir:
                    logger.debug("Skipping previous package %s", entry.relative_posix)
                    continue
                writer.add_entry(entry.relative_posix, fs.read_file(entry.path))
                logger.debug("Added %s", entry.relative_posix)
        except OSError as e:
            raise PackIOError(f"Failed to collect files from {source}: {e}", path=source) from e
        payload = writer.finalize()
        logger.debug("Assembled %d entries from %s", writer.entry_count, source)
    return payload


def _invalid_identifier_message(addon_id: str, name: str) -> str:
    if addon_id:
        return f"manifest id {addon_id!r} is not a valid extension identifier"
    if name:
        return f"no manifest id, and name {name!r} does not form a valid identifier"
    return "manifest has neither an id nor a name to derive an identifier from"
