"""Success-or-failure outcome returned by every public operation.

Inspection and packaging never raise for expected failures; they return
`Ok` carrying the value or `Err` carrying an `XpiError`. Check which one
you got (``isinstance`` or ``match``) before reading the payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from xpikit.core.errors import ErrorKind, XpiError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful outcome."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err:
    """A failed outcome carrying the error that caused it."""

    error: XpiError

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


Result = Ok[T] | Err
