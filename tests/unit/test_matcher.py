"""
Unit tests for If-Match / If-None-Match evaluation.
"""

import pytest

from httpetag import (
    CodecConfig,
    ConditionalMatcher,
    ETagCodec,
    encode,
    if_match,
    if_no_match,
    if_none_match,
)
from httpetag.core.matcher import split_tag_list


class TestSplitTagList:
    """Tests for header list splitting."""

    def test_single(self):
        assert split_tag_list('"a"') == ['"a"']

    def test_whitespace_around_commas(self):
        assert split_tag_list(' "a" ,"b",  W/"c" ') == ['"a"', '"b"', 'W/"c"']


class TestIfMatch:
    """Tests for If-Match."""

    def test_wildcard_strong(self):
        """Test * matches any strong tag."""
        assert if_match("*", "hello") is True
        assert if_match(" * ", b"bytes") is True

    def test_wildcard_weak_option(self):
        """Test * never matches when the tag is weak."""
        assert if_match("*", "hello", {"weak": True}) is False

    def test_wildcard_metadata(self, file_info):
        """Test metadata entities never satisfy If-Match."""
        assert if_match("*", file_info) is False

    def test_own_tag_matches(self):
        """Test the entity's own tag matches."""
        assert if_match(encode("hello"), "hello") is True

    def test_weak_tag_never_matches(self, file_info):
        """Test even the exact weak tag fails."""
        assert if_match(encode(file_info), file_info) is False

    def test_in_list(self):
        """Test matching against a list of candidates."""
        header = f'"1-abc", {encode("hello")} , "2-def"'
        assert if_match(header, "hello") is True

    def test_not_in_list(self):
        assert if_match('"1-abc", "2-def"', "hello") is False

    def test_changed_entity(self):
        """Test an old tag does not match new content."""
        assert if_match(encode("v1"), "v2") is False

    def test_exact_string_comparison(self):
        """Test the quotes are part of the comparison."""
        bare = encode("hello").strip('"')
        assert if_match(bare, "hello") is False

    def test_invalid_entity(self):
        """Test invalid entities propagate the error."""
        with pytest.raises(TypeError):
            if_match("*", None)


class TestIfNoneMatch:
    """Tests for If-None-Match."""

    def test_wildcard(self, file_info):
        """Test * always reports a match (returns False)."""
        assert if_none_match("*", "hello") is False
        assert if_none_match("*", file_info) is False
        assert if_none_match("*", "hello", True) is False

    def test_own_tag(self):
        """Test the entity's own tag means "not modified"."""
        assert if_none_match(encode("hello"), "hello") is False

    def test_weak_tag_eligible(self, file_info):
        """Test weak tags compare for If-None-Match."""
        assert if_none_match(encode(file_info), file_info) is False

    def test_other_tags(self):
        """Test unrelated tags mean "proceed"."""
        assert if_none_match('"1-abc", "2-def"', "hello") is True

    def test_in_list(self):
        header = f'"1-abc",{encode("hello")}'
        assert if_none_match(header, "hello") is False

    def test_alias(self):
        """Test if_no_match is the same function."""
        assert if_no_match is if_none_match
        assert ConditionalMatcher.if_no_match is ConditionalMatcher.if_none_match


class TestComplementarity:
    """Tests relating the two preconditions."""

    @pytest.mark.parametrize("entity", ["a", "deno911", b"\x00\x01", "é" * 50])
    def test_strong_tag(self, entity):
        """Test a strong tag matches If-Match and fails If-None-Match."""
        tag = encode(entity)
        assert if_match(tag, entity) is True
        assert if_none_match(tag, entity) is False


class TestConditionalMatcher:
    """Tests for matcher instances with a custom codec."""

    def test_uses_codec(self):
        """Test tags come from the matcher's codec."""
        codec = ETagCodec(CodecConfig(hash_length=40))
        matcher = ConditionalMatcher(codec)

        assert matcher.if_match(codec.encode("hello"), "hello") is True
        assert matcher.if_match(encode("hello"), "hello") is False
