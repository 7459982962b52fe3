"""Extension identifier grammar."""

from __future__ import annotations

import re
from typing import Any

_UUID_RE = re.compile(r"\{[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}\}", re.IGNORECASE)
_EMAIL_RE = re.compile(r"[a-z0-9._-]*@[a-z0-9._-]+", re.IGNORECASE)


def is_valid_identifier(candidate: Any) -> bool:
    """Return True if `candidate` is a legal extension identifier.

    Two shapes are accepted, case-insensitively: a braced UUID such as
    ``{12345678-abcd-1234-abcd-1234567890ab}`` and an email-like token such
    as ``name@example.com`` or ``@name`` (the local part may be empty).
    Anything else, including the empty string and non-string values,
    is rejected.
    """
    if not isinstance(candidate, str) or not candidate:
        return False
    return _UUID_RE.fullmatch(candidate) is not None or _EMAIL_RE.fullmatch(candidate) is not None
