"""
Declaration tree node definitions.

These nodes represent a parsed type declaration together with the raw
attribute token trees attached to its fields and variants, exactly as
they were written. Nothing here is validated beyond well-formedness;
shape checks happen in the analyzer.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import Span


class FieldsShape(Enum):
    """Shape of the fields of a struct or enum variant."""

    UNIT = "unit"  # no fields
    TUPLE = "tuple"  # positional fields
    NAMED = "named"  # named fields


class Delimiter(Enum):
    """Delimiter of a token group."""

    PARENTHESIS = "()"
    BRACKET = "[]"
    BRACE = "{}"

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]

    @staticmethod
    def from_open(char: str) -> Delimiter:
        for delimiter in Delimiter:
            if delimiter.open == char:
                return delimiter
        raise ValueError(f"not an opening delimiter: {char!r}")


@dataclass
class TokenTree:
    """Base class for all tokens."""

    span: Span = field(default_factory=Span)


@dataclass
class Ident(TokenTree):
    """An identifier or keyword."""

    text: str = ""


@dataclass
class Punct(TokenTree):
    """An operator or punctuation token (e.g. ``=``, ``,``, ``==``)."""

    text: str = ""


@dataclass
class Literal(TokenTree):
    """A string or number literal, as written in the source."""

    text: str = ""

    def value(self) -> Any:
        """Evaluate the literal to its Python value."""
        return ast.literal_eval(self.text)


@dataclass
class Group(TokenTree):
    """A delimited group of tokens."""

    delimiter: Delimiter = Delimiter.PARENTHESIS
    tokens: list[TokenTree] = field(default_factory=list)


@dataclass
class Attribute:
    """An annotation attached to a field or variant.

    `child_tokens` holds the lexed attribute text: the leading path segment
    (e.g. ``serde``) followed by the value payload.
    """

    child_tokens: list[TokenTree] = field(default_factory=list)
    source_path: str = ""

    @property
    def path(self) -> TokenTree | None:
        """The leading path segment, if any."""
        return self.child_tokens[0] if self.child_tokens else None

    @property
    def value(self) -> list[TokenTree]:
        """The value payload following the path segment."""
        return self.child_tokens[1:]

    @property
    def span(self) -> Span:
        if self.child_tokens:
            return self.child_tokens[0].span
        return Span(self.source_path)


@dataclass
class NamedField:
    """A named struct field."""

    name: str = ""
    ty: str = ""  # Python type expression, e.g. "int" or "list[Item]"
    attributes: list[Attribute] = field(default_factory=list)
    source_path: str = ""

    @property
    def span(self) -> Span:
        return Span(self.source_path)


@dataclass
class TupleField:
    """A positional struct or variant field."""

    ty: str = ""
    attributes: list[Attribute] = field(default_factory=list)
    source_path: str = ""

    @property
    def span(self) -> Span:
        return Span(self.source_path)


@dataclass
class EnumVariant:
    """An enum variant."""

    name: str = ""
    fields_shape: FieldsShape = FieldsShape.UNIT
    fields: list[NamedField | TupleField] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)
    source_path: str = ""

    @property
    def span(self) -> Span:
        return Span(self.source_path)


@dataclass
class Declaration:
    """Base class for all type declarations."""

    name: str = ""
    generic_params: list[str] = field(default_factory=list)
    source_path: str = ""

    @property
    def span(self) -> Span:
        return Span(self.source_path)


@dataclass
class StructDecl(Declaration):
    """A struct declaration."""

    fields_shape: FieldsShape = FieldsShape.NAMED

    # Only one of these is populated, depending on fields_shape
    fields: list[NamedField] = field(default_factory=list)
    tuple_fields: list[TupleField] = field(default_factory=list)


@dataclass
class EnumDecl(Declaration):
    """An enum declaration."""

    variants: list[EnumVariant] = field(default_factory=list)


@dataclass
class UnionDecl(Declaration):
    """A union declaration."""

    fields: list[NamedField] = field(default_factory=list)


@dataclass
class OtherDecl(Declaration):
    """Any other declaration kind (functions, aliases, ...)."""

    kind: str = ""


@dataclass
class DeclarationDocument:
    """Root of a parsed declaration document."""

    # Module the declared types live in (imported by generated code)
    module: str | None = None
    declarations: list[Declaration] = field(default_factory=list)

    # Raw document for reference
    raw: dict[str, Any] = field(default_factory=dict)
