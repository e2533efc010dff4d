"""
Declaration document parser that builds the declaration tree.

Phase 1 of the pipeline: turn a JSON declaration document into
`Declaration` nodes. Attribute strings are lexed into raw token trees;
no shape validation happens here beyond what is needed to build the tree.
"""

from __future__ import annotations

import ast
import json
import keyword
import logging
from pathlib import Path
from typing import Any

from ..errors import DeclarationError, Span
from .nodes import (
    Attribute,
    Declaration,
    DeclarationDocument,
    EnumDecl,
    EnumVariant,
    FieldsShape,
    NamedField,
    OtherDecl,
    StructDecl,
    TupleField,
    UnionDecl,
)
from .tokens import lex_attribute

logger = logging.getLogger(__name__)


class DeclarationParser:
    """Parses a declaration document into a `DeclarationDocument`."""

    SHAPES = {shape.value: shape for shape in FieldsShape}

    def parse(self, document: dict[str, Any]) -> DeclarationDocument:
        """
        Parse a declaration document.

        Args:
            document: The decoded JSON document

        Returns:
            DeclarationDocument with one node per declaration, in order
        """
        if not isinstance(document, dict):
            raise DeclarationError("declaration document must be an object", Span("#"))

        module = document.get("module")
        if module is not None and not self._is_dotted_name(module):
            raise DeclarationError(f"invalid module name {module!r}", Span("#/module"))

        declarations = document.get("declarations", [])
        if not isinstance(declarations, list):
            raise DeclarationError("'declarations' must be a list", Span("#/declarations"))

        result = DeclarationDocument(module=module, raw=document)
        for index, data in enumerate(declarations):
            result.declarations.append(self.parse_declaration(data, f"#/declarations/{index}"))

        logger.debug("Parsed %d declarations", len(result.declarations))
        return result

    def parse_declaration(self, data: dict[str, Any], path: str = "#") -> Declaration:
        """Parse a single declaration object."""
        if not isinstance(data, dict):
            raise DeclarationError("declaration must be an object", Span(path))

        kind = self._string(data, "kind", path)
        name = self._identifier(data, "name", path)
        generic_params = [
            self._check_identifier(param, f"{path}/generics/{i}") for i, param in enumerate(self._list(data, "generics", path))
        ]

        if kind == "struct":
            return self._parse_struct(data, name, generic_params, path)
        if kind == "enum":
            return self._parse_enum(data, name, generic_params, path)
        if kind == "union":
            fields = [self._parse_named_field(f, f"{path}/fields/{i}") for i, f in enumerate(self._list(data, "fields", path))]
            return UnionDecl(name=name, generic_params=generic_params, source_path=path, fields=fields)
        return OtherDecl(name=name, generic_params=generic_params, source_path=path, kind=kind)

    def _parse_struct(self, data: dict[str, Any], name: str, generic_params: list[str], path: str) -> StructDecl:
        shape = self._shape(data, path, FieldsShape.NAMED)
        decl = StructDecl(name=name, generic_params=generic_params, source_path=path, fields_shape=shape)

        raw_fields = self._list(data, "fields", path)
        if shape == FieldsShape.NAMED:
            decl.fields = [self._parse_named_field(f, f"{path}/fields/{i}") for i, f in enumerate(raw_fields)]
        elif shape == FieldsShape.TUPLE:
            decl.tuple_fields = [self._parse_tuple_field(f, f"{path}/fields/{i}") for i, f in enumerate(raw_fields)]
        elif raw_fields:
            raise DeclarationError("unit structs cannot have fields", Span(f"{path}/fields"))
        return decl

    def _parse_enum(self, data: dict[str, Any], name: str, generic_params: list[str], path: str) -> EnumDecl:
        decl = EnumDecl(name=name, generic_params=generic_params, source_path=path)
        for index, raw in enumerate(self._list(data, "variants", path)):
            variant_path = f"{path}/variants/{index}"
            if not isinstance(raw, dict):
                raise DeclarationError("variant must be an object", Span(variant_path))

            shape = self._shape(raw, variant_path, FieldsShape.UNIT)
            variant = EnumVariant(
                name=self._identifier(raw, "name", variant_path),
                fields_shape=shape,
                attributes=self._parse_attributes(raw, variant_path),
                source_path=variant_path,
            )
            for i, f in enumerate(self._list(raw, "fields", variant_path)):
                field_path = f"{variant_path}/fields/{i}"
                if shape == FieldsShape.NAMED:
                    variant.fields.append(self._parse_named_field(f, field_path))
                else:
                    variant.fields.append(self._parse_tuple_field(f, field_path))
            decl.variants.append(variant)
        return decl

    def _parse_named_field(self, data: Any, path: str) -> NamedField:
        if not isinstance(data, dict):
            raise DeclarationError("field must be an object", Span(path))
        return NamedField(
            name=self._identifier(data, "name", path),
            ty=self._type_expression(data, path),
            attributes=self._parse_attributes(data, path),
            source_path=path,
        )

    def _parse_tuple_field(self, data: Any, path: str) -> TupleField:
        if not isinstance(data, dict):
            raise DeclarationError("field must be an object", Span(path))
        return TupleField(
            ty=self._type_expression(data, path),
            attributes=self._parse_attributes(data, path),
            source_path=path,
        )

    def _parse_attributes(self, data: dict[str, Any], path: str) -> list[Attribute]:
        attributes = []
        for index, text in enumerate(self._list(data, "attributes", path)):
            attribute_path = f"{path}/attributes/{index}"
            if not isinstance(text, str):
                raise DeclarationError("attribute must be a string", Span(attribute_path))
            attributes.append(Attribute(child_tokens=lex_attribute(text, attribute_path), source_path=attribute_path))
        return attributes

    def _shape(self, data: dict[str, Any], path: str, default: FieldsShape) -> FieldsShape:
        shape = data.get("shape")
        if shape is None:
            return default
        if shape not in self.SHAPES:
            raise DeclarationError(f"unknown shape {shape!r}, expected one of {sorted(self.SHAPES)}", Span(f"{path}/shape"))
        return self.SHAPES[shape]

    def _type_expression(self, data: dict[str, Any], path: str) -> str:
        ty = self._string(data, "type", path)
        try:
            expression = ast.parse(ty, mode="eval")
        except SyntaxError as e:
            raise DeclarationError(f"invalid type expression {ty!r}", Span(f"{path}/type")) from e
        # Rendered inline into generated code: comments and line breaks must go
        return ast.unparse(expression.body)

    def _string(self, data: dict[str, Any], key: str, path: str) -> str:
        value = data.get(key)
        if not isinstance(value, str) or not value:
            raise DeclarationError(f"'{key}' must be a non-empty string", Span(f"{path}/{key}"))
        return value

    def _identifier(self, data: dict[str, Any], key: str, path: str) -> str:
        return self._check_identifier(self._string(data, key, path), f"{path}/{key}")

    def _check_identifier(self, value: Any, path: str) -> str:
        if not isinstance(value, str) or not value.isidentifier() or keyword.iskeyword(value):
            raise DeclarationError(f"{value!r} is not a valid identifier", Span(path))
        return value

    def _list(self, data: dict[str, Any], key: str, path: str) -> list[Any]:
        value = data.get(key, [])
        if not isinstance(value, list):
            raise DeclarationError(f"'{key}' must be a list", Span(f"{path}/{key}"))
        return value

    @staticmethod
    def _is_dotted_name(value: Any) -> bool:
        return isinstance(value, str) and all(part.isidentifier() and not keyword.iskeyword(part) for part in value.split("."))


def parse_declaration(data: dict[str, Any], path: str = "#") -> Declaration:
    """Convenience function to parse a single declaration object."""
    return DeclarationParser().parse_declaration(data, path)


def load_declarations(path: str | Path) -> DeclarationDocument:
    """
    Load and parse a declaration document from a JSON file.

    Raises:
        DeclarationError: If the file is not valid JSON or not a valid document
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as e:
            raise DeclarationError(f"invalid JSON: {e.msg}", Span(str(path), e.lineno, e.colno)) from e
    return DeclarationParser().parse(document)
