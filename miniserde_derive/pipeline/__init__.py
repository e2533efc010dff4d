"""
Pipeline - declaration to serialize / deserialize code generator.

1. Phase 1 (Declaration): Parse the declaration document, lexing attributes into token trees
2. Phase 2 (Analyzer): Validate shapes and resolve external names into IR
3. Phase 3 (Backends): Render each derive direction from IR with Jinja2 templates
4. Phase 4 (Formatter): Optional post-processing (ruff or black)
5. Phase 5 (Writer): Validate and atomically write the generated module
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter, CodeWriteError
from .config import DeriveConfig, FormatterConfig, OutputConfig, OutputMode
from .errors import DeclarationError, DeriveError, Span
from .generator import PipelineGenerator

__all__ = [
    "AtomicWriter",
    "CodeWriteError",
    "DeclarationError",
    "DeriveConfig",
    "DeriveError",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "PipelineGenerator",
    "Span",
]
