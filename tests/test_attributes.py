"""Tests for umbrella_mime.attributes."""

from __future__ import annotations

import pytest

from umbrella_mime.attributes import HeaderAttributes


class TestParse:
    def test_single_parameter(self):
        attrs = HeaderAttributes.parse("text/plain; charset=utf-8")
        assert attrs.value == "text/plain"
        assert attrs["charset"] == "utf-8"
        assert len(attrs.all) == 1

    def test_quoted_value(self):
        attrs = HeaderAttributes.parse('text/plain; charset="utf-8"')
        assert attrs.get("charset") == "utf-8"

    def test_multiple_parameters(self):
        attrs = HeaderAttributes.parse("text/plain; charset=utf-8; format=flowed; delsp=yes")
        assert attrs.all == {"charset": "utf-8", "format": "flowed", "delsp": "yes"}

    def test_case_insensitive_names(self):
        attrs = HeaderAttributes.parse("text/plain; Charset=utf-8")
        assert attrs["charset"] == "utf-8"
        assert attrs["CHARSET"] == "utf-8"
        assert "CharSet" in attrs

    def test_absent_header(self):
        attrs = HeaderAttributes.parse(None)
        assert attrs.value == ""
        assert attrs.all == {}

    def test_no_parameters(self):
        attrs = HeaderAttributes.parse("text/plain")
        assert attrs.value == "text/plain"
        assert attrs.all == {}

    def test_whitespace_everywhere(self):
        attrs = HeaderAttributes.parse('text/plain;  charset = "utf-8" ;  format = flowed ')
        assert attrs.value == "text/plain"
        assert attrs["charset"] == "utf-8"
        assert attrs["format"] == "flowed"

    def test_special_characters(self):
        attrs = HeaderAttributes.parse('application/octet-stream; filename="file-name_2024.txt"')
        assert attrs["filename"] == "file-name_2024.txt"

    def test_empty_parameter_value(self):
        attrs = HeaderAttributes.parse("text/plain; charset=")
        assert attrs["charset"] == ""

    def test_segment_without_equals_is_dropped(self):
        attrs = HeaderAttributes.parse("inline; bogus; name=foo")
        assert attrs.all == {"name": "foo"}

    def test_later_duplicate_wins(self):
        attrs = HeaderAttributes.parse("text/plain; charset=us-ascii; CHARSET=utf-8")
        assert attrs["charset"] == "utf-8"

    def test_single_quote_character_is_kept(self):
        attrs = HeaderAttributes.parse('text/plain; charset="')
        assert attrs["charset"] == '"'

    def test_semicolon_inside_quotes_splits(self):
        attrs = HeaderAttributes.parse('attachment; filename="a;b.txt"')
        assert attrs["filename"] == '"a'
        assert attrs.all == {"filename": '"a'}

    def test_missing_parameter(self):
        attrs = HeaderAttributes.parse("text/plain; charset=utf-8")
        assert attrs.get("nonexistent") is None
        with pytest.raises(KeyError):
            attrs["nonexistent"]


class TestEquality:
    def test_structural_equality(self):
        first = HeaderAttributes(value="text/plain", attributes={"charset": "utf-8"})
        second = HeaderAttributes(value="text/plain", attributes={"CHARSET": "utf-8"})
        third = HeaderAttributes(value="text/html", attributes={"charset": "utf-8"})
        assert first == second
        assert first != third

    def test_parse_matches_constructor(self):
        parsed = HeaderAttributes.parse('multipart/mixed; boundary="abc"')
        assert parsed == HeaderAttributes("multipart/mixed", {"boundary": "abc"})

    def test_unhashable(self):
        with pytest.raises(TypeError, match="unhashable type: .HeaderAttributes."):
            hash(HeaderAttributes.parse("text/plain"))

    def test_all_is_a_copy(self):
        attrs = HeaderAttributes.parse("text/plain; charset=utf-8")
        attrs.all["charset"] = "changed"
        assert attrs["charset"] == "utf-8"
