"""Unit tests for extension identifier validation."""

from __future__ import annotations

import pytest

from xpikit.core.identifier import is_valid_identifier

pytestmark = pytest.mark.unit


class TestUuidIdentifiers:
    """Tests for the braced UUID shape."""

    @pytest.mark.parametrize(
        "candidate",
        [
            "{12345678-1234-1234-1234-123456789012}",
            "{abcdef12-abcd-ef12-3456-abcdefabcdef}",
            "{ABCDEF12-ABCD-EF12-3456-ABCDEFABCDEF}",
        ],
    )
    def test_accepts_braced_uuid(self, candidate: str) -> None:
        """Test that braced UUIDs validate in any case."""
        assert is_valid_identifier(candidate)

    def test_case_insensitive(self) -> None:
        """Test that upper and lower case forms validate identically."""
        upper = "{ABCDEF12-3456-7890-ABCD-EF1234567890}"
        assert is_valid_identifier(upper) == is_valid_identifier(upper.lower()) is True

    @pytest.mark.parametrize(
        "candidate",
        [
            "12345678-1234-1234-1234-123456789012",
            "{12345678-1234-1234-1234-12345678901}",
            "{12345678-1234-1234-1234-1234567890123}",
            "{1234567g-1234-1234-1234-123456789012}",
            "{12345678123412341234123456789012}",
            "{12345678-1234-1234-1234-123456789012}x",
        ],
    )
    def test_rejects_malformed_uuid(self, candidate: str) -> None:
        """Test that near-miss UUIDs are rejected."""
        assert not is_valid_identifier(candidate)


class TestEmailIdentifiers:
    """Tests for the email-like shape."""

    @pytest.mark.parametrize(
        "candidate",
        ["addon@example.com", "@myext", "my-ext_1.0@mozilla.org", "A@B", "@-._"],
    )
    def test_accepts_email_like(self, candidate: str) -> None:
        """Test that email-like tokens validate."""
        assert is_valid_identifier(candidate)

    @pytest.mark.parametrize(
        "candidate",
        ["addon", "addon@", "a@b@c", "my ext@example.com", "@my ext", "addon@exa!mple", "@", "@myext\n"],
    )
    def test_rejects_invalid_email_like(self, candidate: str) -> None:
        """Test that tokens outside the grammar are rejected."""
        assert not is_valid_identifier(candidate)


class TestTotality:
    """Tests that the predicate never raises."""

    @pytest.mark.parametrize("candidate", ["", None, 42, b"@bytes", ["@x"]])
    def test_non_identifiers_return_false(self, candidate: object) -> None:
        """Test that empty and non-string inputs are rejected without raising."""
        assert is_valid_identifier(candidate) is False
