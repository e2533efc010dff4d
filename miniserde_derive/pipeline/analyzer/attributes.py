"""
Rename attribute resolution.

Finds the value of a ``serde(rename = "...")`` attribute on a field or
variant and validates its shape.
"""

from __future__ import annotations

from ..declaration.nodes import Attribute, EnumVariant, Group, Ident, Literal, NamedField, Punct
from ..errors import DeriveError

DEFAULT_MARKER = "serde"

# TODO: support several comma-separated items in one attribute; trailing tokens are not checked yet


def attr_rename(attributes: list[Attribute], marker: str = DEFAULT_MARKER) -> Literal | None:
    """
    Find the rename directive among a field's or variant's attributes.

    Args:
        attributes: Attributes in declaration order
        marker: Leading path segment identifying attributes to inspect

    Returns:
        The literal naming the external name, or None if there is no directive

    Raises:
        DeriveError: If a marker attribute is malformed or appears twice
    """
    rename: Literal | None = None

    for attribute in attributes:
        path = attribute.path
        if not isinstance(path, Ident) or path.text != marker:
            continue

        contents = attribute.value or attribute

        if rename is not None:
            raise DeriveError.at_tokens(attribute, "duplicate rename attribute")

        payload = attribute.value
        if not payload or not isinstance(payload[0], Group):
            raise DeriveError.at_tokens(contents, "unsupported attribute")
        items = payload[0].tokens

        first = items[0] if items else None
        if isinstance(first, Ident) and first.text != "rename":
            raise DeriveError.at_tokens(first, "unsupported attribute")
        if not isinstance(first, Ident):
            raise DeriveError.at_tokens(contents, "unsupported attribute")

        second = items[1] if len(items) > 1 else None
        if not isinstance(second, Punct) or second.text != "=":
            raise DeriveError.at_tokens(contents, "unsupported attribute")

        third = items[2] if len(items) > 2 else None
        if not isinstance(third, Literal):
            raise DeriveError.at_tokens(contents, "unsupported attribute")
        if not isinstance(_literal_value(third), str):
            raise DeriveError.at_tokens(third, "unsupported attribute")

        rename = third

    return rename


def name_of_field(field: NamedField, marker: str = DEFAULT_MARKER) -> str:
    """Determine the external name of a field, respecting a rename attribute."""
    rename = attr_rename(field.attributes, marker)
    return field.name if rename is None else rename.value()


def name_of_variant(variant: EnumVariant, marker: str = DEFAULT_MARKER) -> str:
    """Determine the external name of a variant, respecting a rename attribute."""
    rename = attr_rename(variant.attributes, marker)
    return variant.name if rename is None else rename.value()


def _literal_value(literal: Literal) -> object:
    try:
        return literal.value()
    except (ValueError, SyntaxError):
        # f-strings and other non-constant literals
        return None
