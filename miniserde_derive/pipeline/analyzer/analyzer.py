"""
Declaration analyzer that validates shapes and builds the IR.

Phase 2 of the pipeline: reject declarations this derive cannot handle
and resolve the external name of every field and variant.
"""

from __future__ import annotations

import logging

from ..config import DeriveConfig
from ..declaration.nodes import Declaration, EnumDecl, FieldsShape, StructDecl
from ..errors import DeriveError
from .attributes import name_of_field, name_of_variant
from .ir_nodes import EnumImpl, FieldImpl, StructImpl, VariantImpl

logger = logging.getLogger(__name__)

UNSUPPORTED_DECLARATION = "currently only structs and enums are supported by this derive"
UNSUPPORTED_STRUCT = "currently only structs with named fields are supported"
UNSUPPORTED_GENERIC_ENUM = "Enums with generics are not supported"
UNSUPPORTED_VARIANT = "Invalid variant: only simple enum variants without fields are supported"


class DeclarationAnalyzer:
    """Validates declarations and builds IR."""

    def __init__(self, config: DeriveConfig | None = None):
        self.config = config or DeriveConfig()

    def analyze(self, decl: Declaration) -> StructImpl | EnumImpl:
        """
        Analyze a declaration.

        Args:
            decl: The parsed declaration

        Returns:
            StructImpl or EnumImpl with all external names resolved

        Raises:
            DeriveError: If the declaration shape is unsupported or an attribute is malformed
        """
        match decl:
            case StructDecl():
                return self.analyze_struct(decl)
            case EnumDecl():
                return self.analyze_enum(decl)
            case _:
                raise DeriveError.at_tokens(decl, UNSUPPORTED_DECLARATION)

    def analyze_struct(self, decl: StructDecl) -> StructImpl:
        if decl.fields_shape != FieldsShape.NAMED:
            raise DeriveError.at_tokens(decl, UNSUPPORTED_STRUCT)

        marker = self.config.attribute_marker
        fields = [FieldImpl(name=f.name, external_name=name_of_field(f, marker), ty=f.ty) for f in decl.fields]

        logger.debug("Analyzed struct %s: %s", decl.name, [f.external_name for f in fields])
        return StructImpl(name=decl.name, generic_params=list(decl.generic_params), fields=fields)

    def analyze_enum(self, decl: EnumDecl) -> EnumImpl:
        if decl.generic_params:
            raise DeriveError.at_tokens(decl, UNSUPPORTED_GENERIC_ENUM)

        # All variants are checked for shape before any attribute is resolved
        for variant in decl.variants:
            if variant.fields_shape != FieldsShape.UNIT:
                raise DeriveError.at_tokens(variant, UNSUPPORTED_VARIANT)

        marker = self.config.attribute_marker
        variants = [VariantImpl(name=v.name, external_name=name_of_variant(v, marker)) for v in decl.variants]

        logger.debug("Analyzed enum %s: %s", decl.name, [v.external_name for v in variants])
        return EnumImpl(name=decl.name, variants=variants)
