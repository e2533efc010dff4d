"""miniserde_derive

Generates serialize / deserialize implementations for structs with named
fields and enums of unit variants, targeting a minimal push-style object
model (`miniserde_derive.runtime`).
"""

__version__ = "0.1.0"

from .derive import derive_deserialize, derive_serialize
from .pipeline import (
    AtomicWriter,
    CodeWriteError,
    DeclarationError,
    DeriveConfig,
    DeriveError,
    FormatterConfig,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
)

__all__ = [
    "PipelineGenerator",
    "DeriveConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "DeriveError",
    "DeclarationError",
    "CodeWriteError",
    "AtomicWriter",
    "derive_deserialize",
    "derive_serialize",
]
