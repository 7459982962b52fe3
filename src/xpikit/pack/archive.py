"""In-memory ZIP archive reading and writing.

Archives written here are reproducible: every entry gets the same fixed
timestamp and permissions, so packaging unchanged input twice yields
byte-identical payloads.
"""

from __future__ import annotations

import io
import zipfile
import zlib
from collections.abc import Callable
from dataclasses import dataclass
from types import TracebackType

from xpikit.core.errors import PackIOError

# Earliest timestamp the ZIP format can represent.
FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)
FILE_MODE = 0o100644


@dataclass(frozen=True)
class ArchiveEntry:
    """A file entry inside an archive.

    Attributes
    ----------
    name
        Entry name (POSIX relative path).
    size
        Uncompressed size in bytes.
    get_data
        Callable returning the uncompressed bytes; valid until the reader closes.
    """

    name: str
    size: int
    get_data: Callable[[], bytes]


class ArchiveReader:
    """Read-only view over an archive held in memory.

    Use as a context manager; the underlying handle is released on exit
    whether or not the body raised.

    Raises
    ------
    PackIOError
        If `data` is not a readable ZIP archive.
    """

    def __init__(self, data: bytes) -> None:
        try:
            self._zip: zipfile.ZipFile | None = zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise PackIOError(f"Not a valid archive: {e}") from e

    @property
    def closed(self) -> bool:
        return self._zip is None

    def entries(self) -> list[ArchiveEntry]:
        """List file entries in archive order (directory entries are skipped)."""
        zf = self._require_open()
        return [
            ArchiveEntry(name=info.filename, size=info.file_size, get_data=_reader_for(zf, info))
            for info in zf.infolist()
            if not info.is_dir()
        ]

    def find(self, name: str) -> ArchiveEntry | None:
        """Return the entry named exactly `name`, or None."""
        return next((e for e in self.entries() if e.name == name), None)

    def close(self) -> None:
        if self._zip is not None:
            self._zip.close()
            self._zip = None

    def _require_open(self) -> zipfile.ZipFile:
        if self._zip is None:
            raise PackIOError("Archive reader is closed")
        return self._zip

    def __enter__(self) -> ArchiveReader:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def _reader_for(zf: zipfile.ZipFile, info: zipfile.ZipInfo) -> Callable[[], bytes]:
    def read() -> bytes:
        try:
            return zf.read(info)
        except (zipfile.BadZipFile, zlib.error, EOFError, OSError, ValueError, RuntimeError, NotImplementedError) as e:
            # RuntimeError: encrypted entry. NotImplementedError: unsupported compression.
            raise PackIOError(f"Failed to read archive entry {info.filename}: {e}") from e

    return read


class ArchiveWriter:
    """Accumulates entries into a DEFLATE-compressed archive in memory.

    Parameters
    ----------
    compress_level
        zlib compression level, 0 (store speed) through 9 (smallest).
    """

    def __init__(self, *, compress_level: int = 9) -> None:
        self._buffer = io.BytesIO()
        self._zip: zipfile.ZipFile | None = zipfile.ZipFile(
            self._buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=compress_level
        )
        self._compress_level = compress_level
        self._names: set[str] = set()

    @property
    def entry_count(self) -> int:
        return len(self._names)

    def add_entry(self, name: str, data: bytes) -> None:
        """Add a file entry.

        Raises
        ------
        PackIOError
            If the writer is finalized, `name` was already added, or `name`
            cannot be encoded as UTF-8.
        """
        if self._zip is None:
            raise PackIOError("Archive writer is already finalized")
        if name in self._names:
            raise PackIOError(f"Duplicate archive entry: {name}")
        try:
            name.encode("utf-8")
        except UnicodeEncodeError as e:
            raise PackIOError(f"Archive entry name is not valid UTF-8: {name!r}") from e
        info = zipfile.ZipInfo(name, date_time=FIXED_DATE_TIME)
        info.compress_type = zipfile.ZIP_DEFLATED
        info.external_attr = FILE_MODE << 16
        self._zip.writestr(info, data, compresslevel=self._compress_level)
        self._names.add(name)

    def finalize(self) -> bytes:
        """Close the archive and return its bytes."""
        if self._zip is not None:
            self._zip.close()
            self._zip = None
        return self._buffer.getvalue()

    def close(self) -> None:
        if self._zip is not None:
            self._zip.close()
            self._zip = None

    def __enter__(self) -> ArchiveWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
