"""
Pipeline generator tying all phases together.
"""

from __future__ import annotations

import logging
from typing import Any

from .. import __version__
from .backends import DeserializeBackend, SerializeBackend, create_environment
from .config import DeriveConfig
from .declaration.nodes import Declaration, DeclarationDocument
from .declaration.parser import DeclarationParser
from .formatters import get_formatter

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Generates a Python module implementing serialize / deserialize for declared types.

    Pipeline phases:
    1. Parse the declaration document (unless already parsed)
    2. Analyze each declaration and render the enabled directions
    3. Assemble the module behind a prefix of runtime imports
    4. Optionally run a formatter over the result

    Generation is all or nothing: the first `DeriveError` aborts the run.
    """

    def __init__(
        self,
        document: DeclarationDocument | dict[str, Any],
        config: DeriveConfig | None = None,
        generation_comment: str | None = None,
    ):
        """
        Initialize the generator.

        Args:
            document: Declaration document, parsed or raw
            config: Derive configuration
            generation_comment: Comment placed at the top of the module
        """
        self.config = config or DeriveConfig()
        if isinstance(document, DeclarationDocument):
            self.document = document
        else:
            self.document = DeclarationParser().parse(document)
        self.generation_comment = generation_comment or f"Generated by miniserde_derive v{__version__}"

        self.serialize_backend = SerializeBackend(self.config)
        self.deserialize_backend = DeserializeBackend(self.config)
        self.prefix_template = create_environment().get_template("prefix.py.jinja2")

    def generate(self) -> str:
        """Generate the module source."""
        blocks = []
        for decl in self.document.declarations:
            blocks.extend(self.derive_declaration(decl))

        code = self.render_module(blocks)

        if self.config.formatter.enabled:
            code = get_formatter(self.config.formatter.tool).format(code, self.config.formatter)
        return code

    def derive_declaration(self, decl: Declaration) -> list[str]:
        """Render the enabled directions for one declaration."""
        blocks = []
        if self.config.derive_serialize:
            blocks.append(self.serialize_backend.derive(decl))
        if self.config.derive_deserialize:
            blocks.append(self.deserialize_backend.derive(decl))
        return blocks

    def render_module(self, blocks: list[str]) -> str:
        """Assemble rendered blocks behind the module prefix."""
        source_module = self.config.source_module or self.document.module
        prefix = self.prefix_template.render(
            generation_comment=self.generation_comment if self.config.add_generation_comment else None,
            runtime_module=self.config.runtime_module,
            source_module=source_module,
            type_names=[decl.name for decl in self.document.declarations],
        )
        logger.debug("Assembled module with %d blocks", len(blocks))
        return "\n\n\n".join([prefix, *blocks]) + "\n"
