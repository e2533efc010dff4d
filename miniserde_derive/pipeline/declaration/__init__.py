"""
Declaration tree module.

Contains the declaration node definitions, the attribute lexer and the
declaration document parser.
"""

from __future__ import annotations

from .nodes import (
    Attribute,
    Declaration,
    DeclarationDocument,
    Delimiter,
    EnumDecl,
    EnumVariant,
    FieldsShape,
    Group,
    Ident,
    Literal,
    NamedField,
    OtherDecl,
    Punct,
    StructDecl,
    TokenTree,
    TupleField,
    UnionDecl,
)
from .parser import DeclarationParser, load_declarations, parse_declaration
from .tokens import lex_attribute

__all__ = [
    "Attribute",
    "Declaration",
    "DeclarationDocument",
    "DeclarationParser",
    "Delimiter",
    "EnumDecl",
    "EnumVariant",
    "FieldsShape",
    "Group",
    "Ident",
    "Literal",
    "NamedField",
    "OtherDecl",
    "Punct",
    "StructDecl",
    "TokenTree",
    "TupleField",
    "UnionDecl",
    "lex_attribute",
    "load_declarations",
    "parse_declaration",
]
