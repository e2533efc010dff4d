"""
Base class for derive backends.

A backend renders one direction (serialize or deserialize) of the derive
for a single declaration. Shape dispatch and validation are shared; the
subclasses only pick the templates.
"""

from __future__ import annotations

import logging
from abc import ABC
from pathlib import Path
from typing import Any

import jinja2

from ..analyzer.analyzer import DeclarationAnalyzer
from ..analyzer.ir_nodes import EnumImpl, StructImpl
from ..config import DeriveConfig
from ..declaration.nodes import Declaration

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent.parent / "templates"


def python_string(text: str) -> str:
    """Render `text` as a Python string literal, preferring double quotes."""
    literal = repr(text)
    if literal.startswith("'") and '"' not in text:
        literal = f'"{literal[1:-1]}"'
    return literal


def create_environment() -> jinja2.Environment:
    """Set up the Jinja2 environment shared by all templates."""
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        lstrip_blocks=True,
        trim_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["python_string"] = python_string
    return env


class DeriveBackend(ABC):
    """Abstract base class for derive backends."""

    # Direction name, used in log messages
    DIRECTION: str = ""

    # Template file names
    STRUCT_TEMPLATE: str = ""
    ENUM_TEMPLATE: str = ""

    def __init__(self, config: DeriveConfig | None = None):
        """
        Initialize the backend.

        Args:
            config: Derive configuration
        """
        self.config = config or DeriveConfig()
        self.analyzer = DeclarationAnalyzer(self.config)
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        self.jinja_env = create_environment()
        self.struct_template = self.jinja_env.get_template(self.STRUCT_TEMPLATE)
        self.enum_template = self.jinja_env.get_template(self.ENUM_TEMPLATE)

    def derive(self, decl: Declaration) -> str:
        """
        Generate the implementation for one declaration.

        Args:
            decl: The parsed declaration

        Returns:
            Generated Python source

        Raises:
            DeriveError: If the declaration is unsupported; nothing is generated
        """
        impl = self.analyzer.analyze(decl)
        logger.debug("Deriving %s for %s", self.DIRECTION, impl.name)
        if isinstance(impl, StructImpl):
            return self.struct_template.render(self._prepare_struct_context(impl))
        return self.enum_template.render(self._prepare_enum_context(impl))

    def _prepare_struct_context(self, impl: StructImpl) -> dict[str, Any]:
        return {
            "name": impl.name,
            "generic_params": impl.generic_params,
            "fields": impl.fields,
        }

    def _prepare_enum_context(self, impl: EnumImpl) -> dict[str, Any]:
        return {
            "name": impl.name,
            "variants": impl.variants,
        }
