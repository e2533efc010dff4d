"""
IR (Intermediate Representation) node definitions.

These nodes represent a validated declaration with every external name
resolved, ready for code generation.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class FieldImpl:
    """A struct field with its resolved external name."""

    name: str = ""
    external_name: str = ""
    ty: str = ""


@dataclass
class StructImpl:
    """A named-field struct ready for code generation."""

    name: str = ""
    generic_params: list[str] = field(default_factory=list)
    fields: list[FieldImpl] = field(default_factory=list)


@dataclass
class VariantImpl:
    """A unit variant with its resolved external name."""

    name: str = ""
    external_name: str = ""


@dataclass
class EnumImpl:
    """A unit-only enum ready for code generation."""

    name: str = ""
    variants: list[VariantImpl] = field(default_factory=list)
