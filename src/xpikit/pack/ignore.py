"""Ignore patterns for `build_package`.

Patterns follow a small gitignore-like grammar:

- ``name`` (no slash) matches a file or directory with that basename anywhere
- ``a/b`` or ``/name`` is matched against the path from the source root
- ``dir/`` matches directories only (and everything under them)
- ``*`` and ``?`` stay within one path segment; ``**`` spans any number

Negation (``!pattern``) is not supported.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class IgnoreRule:
    """Compiled ignore pattern.

    Attributes
    ----------
    pattern
        The pattern as written.
    regex
        Compiled form, matched against a basename or a root-relative path.
    basename_only
        True if the pattern has no slash and applies at any depth.
    directory_only
        True if the pattern was '/'-suffixed.
    """

    pattern: str
    regex: re.Pattern[str]
    basename_only: bool
    directory_only: bool

    def matches(self, rel_posix: str, *, is_dir: bool) -> bool:
        """Return True if this rule covers `rel_posix` or one of its parent directories."""
        parts = rel_posix.strip("/").split("/")
        for depth in range(1, len(parts) + 1):
            if self.directory_only and depth == len(parts) and not is_dir:
                continue
            target = parts[depth - 1] if self.basename_only else "/".join(parts[:depth])
            if self.regex.fullmatch(target):
                return True
        return False


@dataclass(frozen=True)
class IgnoreMatcher:
    """Decides whether a relative path is left out of a package."""

    rules: tuple[IgnoreRule, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.rules)

    def match(self, rel_posix: str, *, is_dir: bool) -> IgnoreRule | None:
        """Return the first rule covering `rel_posix`, or None."""
        if not rel_posix.strip("/"):
            return None
        return next((rule for rule in self.rules if rule.matches(rel_posix, is_dir=is_dir)), None)

    def is_ignored(self, rel_posix: str, *, is_dir: bool) -> bool:
        return self.match(rel_posix, is_dir=is_dir) is not None


def compile_rule(raw: str) -> IgnoreRule | None:
    """Compile one pattern, returning None for blanks and ``#`` comments.

    Raises
    ------
    ValueError
        If the pattern uses negation.
    """
    line = raw.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("!"):
        raise ValueError(f"Negated ignore patterns are not supported: {raw!r}")

    directory_only = line.endswith("/")
    body = line.strip("/")
    if not body:
        return None
    # A slash anywhere but the end anchors the pattern at the root, as in gitignore.
    basename_only = "/" not in line.rstrip("/")
    return IgnoreRule(
        pattern=line,
        regex=re.compile(_translate(body)),
        basename_only=basename_only,
        directory_only=directory_only,
    )


def build_ignore_matcher(patterns: list[str]) -> IgnoreMatcher:
    """Compile `patterns` into an IgnoreMatcher, keeping their order.

    Raises
    ------
    ValueError
        If a pattern is invalid.
    """
    rules = (compile_rule(p) for p in patterns)
    return IgnoreMatcher(tuple(r for r in rules if r is not None))


def _translate(pattern: str) -> str:
    segments = pattern.split("/")
    out: list[str] = []
    for i, segment in enumerate(segments):
        last = i == len(segments) - 1
        if segment == "**":
            out.append(".*" if last else "(?:[^/]+/)*")
            continue
        out.append(_translate_segment(segment))
        if not last:
            out.append("/")
    return "".join(out)


def _translate_segment(segment: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(segment):
        c = segment[i]
        if c == "*":
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[" and segment.find("]", i + 2) != -1:
            end = segment.find("]", i + 2)
            body = segment[i + 1 : end].replace("\\", "\\\\")
            if body.startswith("!"):
                body = "^" + body[1:]
            out.append(f"[{body}]")
            i = end
        else:
            out.append(re.escape(c))
        i += 1
    return "".join(out)
