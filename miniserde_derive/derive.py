"""
Entry points deriving code for a single declaration.

`derive_serialize` and `derive_deserialize` return the generated source
for one direction; `PipelineGenerator` assembles whole modules.
"""

from __future__ import annotations

from .pipeline.backends import DeserializeBackend, SerializeBackend
from .pipeline.config import DeriveConfig
from .pipeline.declaration.nodes import Declaration


def derive_serialize(decl: Declaration, config: DeriveConfig | None = None) -> str:
    """Generate the serialize implementation of `decl`.

    Raises:
        DeriveError: If the declaration is unsupported or an attribute is malformed
    """
    return SerializeBackend(config).derive(decl)


def derive_deserialize(decl: Declaration, config: DeriveConfig | None = None) -> str:
    """Generate the deserialize implementation of `decl`.

    Raises:
        DeriveError: If the declaration is unsupported or an attribute is malformed
    """
    return DeserializeBackend(config).derive(decl)
