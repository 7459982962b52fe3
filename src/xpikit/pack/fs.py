"""File-system access used by inspection and packaging.

Everything that touches the disk goes through `FileSystem` so callers can
substitute a subclass (tests use this to inject write failures).
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from xpikit.pack.ignore import IgnoreMatcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalkEntry:
    """A file found while walking a source directory.

    Attributes
    ----------
    path
        Absolute path to the file.
    relative_posix
        Path relative to the walk root in POSIX format.
    is_file
        True for regular files (symlinks to files included).
    """

    path: Path
    relative_posix: str
    is_file: bool


class FileSystem:
    """Local file-system operations."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def read_file(self, path: Path) -> bytes:
        return path.read_bytes()

    def write_file(self, path: Path, data: bytes) -> None:
        """Write `data` to `path`, replacing any existing file.

        The bytes go to a temporary sibling first and are renamed into
        place, so `path` is either untouched or complete.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def walk(self, root: Path, *, ignore: IgnoreMatcher | None = None) -> Iterator[WalkEntry]:
        """Yield the regular files under `root`, depth-first.

        Entries within a directory are visited in name order, so repeated
        walks over unchanged input yield the same sequence. Symlinked
        directories are not descended. Paths matched by `ignore` are
        skipped, and ignored directories are not descended.

        Raises
        ------
        OSError
            If a directory cannot be listed.
        """
        yield from self._walk_dir(root, "", ignore)

    def _walk_dir(self, abs_dir: Path, rel_dir_posix: str, ignore: IgnoreMatcher | None) -> Iterator[WalkEntry]:
        for entry in sorted(abs_dir.iterdir(), key=lambda p: p.name):
            rel_posix = f"{rel_dir_posix}/{entry.name}" if rel_dir_posix else entry.name
            is_dir = entry.is_dir()

            if ignore and ignore.is_ignored(rel_posix, is_dir=is_dir):
                logger.debug("Ignoring %s", rel_posix)
                continue

            if is_dir:
                if entry.is_symlink():
                    logger.debug("Not following symlinked directory %s", rel_posix)
                    continue
                yield from self._walk_dir(entry, rel_posix, ignore)
                continue

            # Sockets, fifos, and dangling links are not packaged.
            if not entry.is_file():
                continue

            yield WalkEntry(path=entry, relative_posix=rel_posix, is_file=True)
