"""
Tests for rename attribute resolution.
"""

from __future__ import annotations

import pytest

from miniserde_derive.pipeline.analyzer import attr_rename, name_of_field, name_of_variant
from miniserde_derive.pipeline.declaration import parse_declaration
from miniserde_derive.pipeline.errors import DeriveError


def field_with(*attributes, name="user_id"):
    decl = parse_declaration(
        {"kind": "struct", "name": "S", "fields": [{"name": name, "type": "int", "attributes": list(attributes)}]}
    )
    return decl.fields[0]


def variant_with(*attributes, name="Active"):
    decl = parse_declaration({"kind": "enum", "name": "E", "variants": [{"name": name, "attributes": list(attributes)}]})
    return decl.variants[0]


class TestResolvedNames:
    def test_no_attributes(self):
        assert attr_rename([]) is None
        assert name_of_field(field_with()) == "user_id"
        assert name_of_variant(variant_with()) == "Active"

    def test_rename(self):
        assert name_of_field(field_with('serde(rename = "userId")')) == "userId"
        assert name_of_variant(variant_with('serde(rename = "active")')) == "active"

    def test_rename_returns_the_literal(self):
        literal = attr_rename(field_with('serde(rename = "userId")').attributes)
        assert literal.text == '"userId"'
        assert literal.span.column == 15

    def test_other_attributes_are_ignored(self):
        field = field_with("doc(hidden)", 'other(rename = "x")', "deprecated")
        assert name_of_field(field) == "user_id"

    def test_rename_among_other_attributes(self):
        field = field_with("doc(hidden)", 'serde(rename = "id")', "deprecated")
        assert name_of_field(field) == "id"

    def test_escaped_and_single_quoted_literals(self):
        assert name_of_field(field_with("serde(rename = 'a\\'b')")) == "a'b"
        assert name_of_field(field_with('serde(rename = "caf\\u00e9")')) == "café"

    def test_empty_rename(self):
        assert name_of_field(field_with('serde(rename = "")')) == ""

    def test_any_delimiter_is_accepted(self):
        assert name_of_field(field_with('serde[rename = "x"]')) == "x"
        assert name_of_field(field_with('serde{rename = "x"}')) == "x"

    def test_trailing_tokens_are_ignored(self):
        assert name_of_field(field_with('serde(rename = "x", default)')) == "x"

    def test_custom_marker(self):
        field = field_with('wire(rename = "x")', 'serde(rename = "y")')
        assert name_of_field(field, "wire") == "x"
        assert name_of_field(field) == "y"


class TestMalformedAttributes:
    def _error(self, *attributes):
        with pytest.raises(DeriveError) as exc_info:
            name_of_field(field_with(*attributes))
        return exc_info.value

    @pytest.mark.parametrize(
        "attribute, column",
        [
            # anchored at the payload
            ("serde(rename)", 5),
            ('serde(rename "x")', 5),
            ('serde(rename == "x")', 5),
            ("serde(rename = other)", 5),
            ("serde(rename =)", 5),
            ("serde()", 5),
            ('serde("x")', 5),
            ('serde = "x"', 6),
            ("serde x", 6),
            # anchored at the path when there is no payload
            ("serde", 0),
            # anchored at the unknown key
            ("serde(skip)", 6),
            ('serde(alias = "x")', 6),
            # anchored at the literal
            ("serde(rename = 5)", 15),
            ('serde(rename = b"x")', 15),
            ('serde(rename = f"x{y}")', 15),
        ],
    )
    def test_unsupported_attribute(self, attribute, column):
        error = self._error(attribute)
        assert error.message == "unsupported attribute"
        assert error.span.source_path == "#/fields/0/attributes/0"
        assert error.span.line == 1
        assert error.span.column == column

    def test_duplicate_rename(self):
        error = self._error('serde(rename = "a")', 'serde(rename = "b")')
        assert error.message == "duplicate rename attribute"
        assert error.span.source_path == "#/fields/0/attributes/1"
        assert error.span.column == 0

    def test_duplicate_is_reported_before_content(self):
        error = self._error('serde(rename = "a")', "doc", "serde(garbage)")
        assert error.message == "duplicate rename attribute"
        assert error.span.source_path == "#/fields/0/attributes/2"

    def test_first_malformed_attribute_wins(self):
        error = self._error("serde(skip)", 'serde(rename = "a")')
        assert error.message == "unsupported attribute"
        assert error.span.source_path == "#/fields/0/attributes/0"

    def test_variant_errors(self):
        with pytest.raises(DeriveError) as exc_info:
            name_of_variant(variant_with("serde(skip)"))
        assert exc_info.value.span.source_path == "#/variants/0/attributes/0"

    def test_error_rendering(self):
        error = self._error("serde(skip)")
        assert str(error) == "#/fields/0/attributes/0:1:6: error: unsupported attribute"


if __name__ == "__main__":
    pytest.main([__file__])
