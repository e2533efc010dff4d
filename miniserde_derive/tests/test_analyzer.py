"""
Tests for shape dispatch and validation.
"""

from __future__ import annotations

import pytest

from miniserde_derive import DeriveConfig, DeriveError
from miniserde_derive.pipeline.analyzer import DeclarationAnalyzer, EnumImpl, StructImpl
from miniserde_derive.pipeline.analyzer.analyzer import (
    UNSUPPORTED_DECLARATION,
    UNSUPPORTED_GENERIC_ENUM,
    UNSUPPORTED_STRUCT,
    UNSUPPORTED_VARIANT,
)
from miniserde_derive.pipeline.declaration import parse_declaration


@pytest.fixture
def analyzer():
    return DeclarationAnalyzer()


class TestDeclarationAnalyzer:
    def test_struct(self, analyzer):
        impl = analyzer.analyze(
            parse_declaration(
                {
                    "kind": "struct",
                    "name": "Hello",
                    "generics": ["T"],
                    "fields": [
                        {"name": "a", "type": "T"},
                        {"name": "b", "type": "str", "attributes": ['serde(rename = "bee")']},
                    ],
                }
            )
        )

        assert isinstance(impl, StructImpl)
        assert impl.name == "Hello"
        assert impl.generic_params == ["T"]
        assert [(f.name, f.external_name, f.ty) for f in impl.fields] == [("a", "a", "T"), ("b", "bee", "str")]

    def test_enum(self, analyzer):
        impl = analyzer.analyze(
            parse_declaration(
                {
                    "kind": "enum",
                    "name": "Tag",
                    "variants": [{"name": "A", "attributes": ['serde(rename = "a")']}, {"name": "B"}],
                }
            )
        )

        assert isinstance(impl, EnumImpl)
        assert [(v.name, v.external_name) for v in impl.variants] == [("A", "a"), ("B", "B")]

    def test_duplicate_external_names_are_kept(self, analyzer):
        impl = analyzer.analyze(
            parse_declaration(
                {
                    "kind": "struct",
                    "name": "Twins",
                    "fields": [
                        {"name": "a", "type": "int", "attributes": ['serde(rename = "x")']},
                        {"name": "b", "type": "int", "attributes": ['serde(rename = "x")']},
                    ],
                }
            )
        )
        assert [f.external_name for f in impl.fields] == ["x", "x"]

    @pytest.mark.parametrize(
        "data, message",
        [
            ({"kind": "union", "name": "U", "fields": []}, UNSUPPORTED_DECLARATION),
            ({"kind": "trait", "name": "T"}, UNSUPPORTED_DECLARATION),
            ({"kind": "struct", "name": "P", "shape": "tuple", "fields": [{"type": "int"}]}, UNSUPPORTED_STRUCT),
            ({"kind": "struct", "name": "P", "shape": "tuple"}, UNSUPPORTED_STRUCT),
            ({"kind": "struct", "name": "M", "shape": "unit"}, UNSUPPORTED_STRUCT),
            ({"kind": "enum", "name": "E", "generics": ["T"], "variants": []}, UNSUPPORTED_GENERIC_ENUM),
        ],
    )
    def test_unsupported_declarations(self, analyzer, data, message):
        with pytest.raises(DeriveError) as exc_info:
            analyzer.analyze(parse_declaration(data))
        assert exc_info.value.message == message
        assert exc_info.value.span.source_path == "#"

    @pytest.mark.parametrize("shape", ["tuple", "named"])
    def test_variant_with_fields(self, analyzer, shape):
        data = {
            "kind": "enum",
            "name": "E",
            "variants": [{"name": "A"}, {"name": "B", "shape": shape, "fields": []}],
        }
        with pytest.raises(DeriveError) as exc_info:
            analyzer.analyze(parse_declaration(data))
        assert exc_info.value.message == UNSUPPORTED_VARIANT
        assert exc_info.value.span.source_path == "#/variants/1"

    def test_generic_enum_is_reported_before_variants(self, analyzer):
        data = {"kind": "enum", "name": "E", "generics": ["T"], "variants": [{"name": "B", "shape": "tuple"}]}
        with pytest.raises(DeriveError) as exc_info:
            analyzer.analyze(parse_declaration(data))
        assert exc_info.value.message == UNSUPPORTED_GENERIC_ENUM

    def test_variant_shapes_are_checked_before_names(self, analyzer):
        data = {
            "kind": "enum",
            "name": "E",
            "variants": [
                {"name": "A", "attributes": ["serde(skip)"]},
                {"name": "B", "shape": "tuple", "fields": [{"type": "int"}]},
            ],
        }
        with pytest.raises(DeriveError) as exc_info:
            analyzer.analyze(parse_declaration(data))
        assert exc_info.value.message == UNSUPPORTED_VARIANT

    def test_struct_attribute_errors_propagate(self, analyzer):
        data = {"kind": "struct", "name": "S", "fields": [{"name": "a", "type": "int", "attributes": ["serde(skip)"]}]}
        with pytest.raises(DeriveError) as exc_info:
            analyzer.analyze(parse_declaration(data))
        assert exc_info.value.message == "unsupported attribute"

    def test_attribute_marker_from_config(self):
        analyzer = DeclarationAnalyzer(DeriveConfig(attribute_marker="wire"))
        data = {
            "kind": "struct",
            "name": "S",
            "fields": [{"name": "a", "type": "int", "attributes": ['wire(rename = "x")', "serde(skip)"]}],
        }
        impl = analyzer.analyze(parse_declaration(data))
        assert impl.fields[0].external_name == "x"


if __name__ == "__main__":
    pytest.main([__file__])
