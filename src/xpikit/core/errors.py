"""Error taxonomy for inspection and packaging."""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    """Category of an inspection or packaging failure.

    Attributes
    ----------
    NOT_FOUND
        The input path does not exist.
    PARSE_ERROR
        The manifest text is not a valid JSON object.
    MISSING_MANIFEST
        The package contains no ``manifest.json``.
    INVALID_IDENTIFIER
        No identifier could be derived or validated.
    IO_ERROR
        An underlying read, write, or archive operation failed.
    """

    NOT_FOUND = "not_found"
    PARSE_ERROR = "parse_error"
    MISSING_MANIFEST = "missing_manifest"
    INVALID_IDENTIFIER = "invalid_identifier"
    IO_ERROR = "io_error"


class XpiError(Exception):
    """Base class for failures reported through `Err`."""

    kind: ErrorKind = ErrorKind.IO_ERROR

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        return self.message


class NotFoundError(XpiError):
    kind = ErrorKind.NOT_FOUND


class ManifestParseError(XpiError):
    kind = ErrorKind.PARSE_ERROR


class MissingManifestError(XpiError):
    kind = ErrorKind.MISSING_MANIFEST


class InvalidIdentifierError(XpiError):
    kind = ErrorKind.INVALID_IDENTIFIER


class PackIOError(XpiError):
    kind = ErrorKind.IO_ERROR
