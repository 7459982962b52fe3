"""Unit tests for ignore pattern matching."""

from __future__ import annotations

import pytest

from xpikit.pack.ignore import build_ignore_matcher, compile_rule

pytestmark = pytest.mark.unit


class TestCompileRule:
    """Tests for compile_rule."""

    def test_skips_blank_and_comment(self) -> None:
        """Test that blank lines and comments compile to None."""
        assert compile_rule("") is None
        assert compile_rule("   ") is None
        assert compile_rule("# comment") is None
        assert compile_rule("/") is None

    def test_flags(self) -> None:
        """Test basename and directory-only flags."""
        rule = compile_rule("/build/")
        assert rule is not None
        assert rule.pattern == "/build/"
        assert rule.directory_only
        assert not rule.basename_only

        plain = compile_rule("*.map")
        assert plain is not None
        assert plain.basename_only
        assert not plain.directory_only

    def test_negation_rejected(self) -> None:
        """Test that negated patterns raise ValueError."""
        with pytest.raises(ValueError, match="Negated"):
            compile_rule("!keep")


class TestIgnoreMatcher:
    """Tests for IgnoreMatcher."""

    def test_empty_matcher_is_falsy(self) -> None:
        """Test that a matcher without rules ignores nothing."""
        matcher = build_ignore_matcher([])
        assert not matcher
        assert not matcher.is_ignored("anything", is_dir=False)

    def test_basename_pattern_anywhere(self) -> None:
        """Test that slash-free patterns match basenames at any depth."""
        matcher = build_ignore_matcher(["*.map"])
        assert matcher.is_ignored("app.js.map", is_dir=False)
        assert matcher.is_ignored("lib/deep/app.js.map", is_dir=False)
        assert not matcher.is_ignored("app.js", is_dir=False)

    def test_star_stays_in_segment(self) -> None:
        """Test that a single star does not cross a slash."""
        matcher = build_ignore_matcher(["lib/*.js"])
        assert matcher.is_ignored("lib/a.js", is_dir=False)
        assert not matcher.is_ignored("lib/sub/a.js", is_dir=False)

    def test_directory_only(self) -> None:
        """Test that directory-only patterns skip files of the same name but cover contents."""
        matcher = build_ignore_matcher(["tests/"])
        assert matcher.is_ignored("tests", is_dir=True)
        assert matcher.is_ignored("tests/a.js", is_dir=False)
        assert matcher.is_ignored("src/tests/a.js", is_dir=False)
        assert not matcher.is_ignored("tests", is_dir=False)

    def test_anchored(self) -> None:
        """Test that anchored patterns only match from the root."""
        matcher = build_ignore_matcher(["/README.md"])
        assert matcher.is_ignored("README.md", is_dir=False)
        assert not matcher.is_ignored("docs/README.md", is_dir=False)

    def test_inner_slash_anchors(self) -> None:
        """Test that a pattern with an inner slash is matched from the root."""
        matcher = build_ignore_matcher(["docs/draft"])
        assert matcher.is_ignored("docs/draft", is_dir=True)
        assert matcher.is_ignored("docs/draft/notes.md", is_dir=False)
        assert not matcher.is_ignored("site/docs/draft", is_dir=True)

    def test_double_star(self) -> None:
        """Test that ** spans any number of segments."""
        matcher = build_ignore_matcher(["src/**/*.ts"])
        assert matcher.is_ignored("src/a.ts", is_dir=False)
        assert matcher.is_ignored("src/x/y/a.ts", is_dir=False)
        assert not matcher.is_ignored("lib/a.ts", is_dir=False)

    def test_character_class(self) -> None:
        """Test bracket classes, including negation with '!'."""
        matcher = build_ignore_matcher(["icon[0-9].png", "v[!0-9]"])
        assert matcher.is_ignored("icon7.png", is_dir=False)
        assert not matcher.is_ignored("iconX.png", is_dir=False)
        assert matcher.is_ignored("vx", is_dir=False)
        assert not matcher.is_ignored("v1", is_dir=False)

    def test_literal_dots(self) -> None:
        """Test that regex metacharacters in patterns are literal."""
        matcher = build_ignore_matcher([".DS_Store"])
        assert matcher.is_ignored(".DS_Store", is_dir=False)
        assert not matcher.is_ignored("xDS_Store", is_dir=False)

    def test_match_returns_first_rule(self) -> None:
        """Test that match reports the first covering rule."""
        matcher = build_ignore_matcher(["*.log", "debug.*"])
        rule = matcher.match("debug.log", is_dir=False)
        assert rule is not None
        assert rule.pattern == "*.log"
