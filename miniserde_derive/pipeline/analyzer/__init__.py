"""
Analyzer module.

Contains attribute resolution, shape validation and IR building.
"""

from __future__ import annotations

from .analyzer import DeclarationAnalyzer
from .attributes import attr_rename, name_of_field, name_of_variant
from .ir_nodes import EnumImpl, FieldImpl, StructImpl, VariantImpl

__all__ = [
    "DeclarationAnalyzer",
    "EnumImpl",
    "FieldImpl",
    "StructImpl",
    "VariantImpl",
    "attr_rename",
    "name_of_field",
    "name_of_variant",
]
