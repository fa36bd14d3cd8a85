"""
Unit tests for base-N conversion and the digest primitive.
"""

import pytest

from httpetag.core.digest import digest
from httpetag.core.radix import parse_radix_prefix, to_radix


class TestToRadix:
    """Tests for integer rendering."""

    def test_hex(self):
        assert to_radix(255) == "ff"
        assert to_radix(20) == "14"
        assert to_radix(0x18A2F3) == "18a2f3"

    def test_zero(self):
        assert to_radix(0) == "0"
        assert to_radix(0, 2) == "0"

    def test_negative(self):
        assert to_radix(-500) == "-1f4"

    def test_other_bases(self):
        assert to_radix(5, 2) == "101"
        assert to_radix(35, 36) == "z"
        assert to_radix(1000, 10) == "1000"

    def test_invalid_radix(self):
        with pytest.raises(ValueError):
            to_radix(1, 37)


class TestParseRadixPrefix:
    """Tests for lenient leading-digit parsing."""

    def test_plain(self):
        assert parse_radix_prefix("ff") == 255
        assert parse_radix_prefix("FF") == 255

    def test_trailing_garbage(self):
        """Test parsing stops at the first invalid digit."""
        assert parse_radix_prefix("1f-abc") == 31
        assert parse_radix_prefix("12xyz") == 0x12

    def test_leading_whitespace_and_sign(self):
        assert parse_radix_prefix("  ff") == 255
        assert parse_radix_prefix("-1f4") == -500

    def test_no_digits(self):
        assert parse_radix_prefix("") is None
        assert parse_radix_prefix("zz") is None
        assert parse_radix_prefix("-") is None

    def test_other_base(self):
        assert parse_radix_prefix("102", 2) == 2
        assert parse_radix_prefix("1000", 10) == 1000


class TestDigest:
    """Tests for the content digest rendering."""

    def test_known_value(self):
        """Test base64 over the hex SHA-1 of the input."""
        assert digest(b"hello") == (
            "YWFmNGM2MWRkY2M1ZThhMmRhYmVkZTBmM2I0ODJjZDlhZWE5NDM0ZA=="
        )

    def test_prefix_used_by_tags(self):
        assert digest(b"deno911").startswith("MjJkMWZlOWM5ZDFmOWI3OGQ0YzR")

    def test_algorithm(self):
        assert digest(b"hello", "sha256") != digest(b"hello")
