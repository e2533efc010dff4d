"""
Configuration for the derive pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to parse the generated code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for post-processing formatters."""

    # Whether formatting is enabled
    enabled: bool = False

    # Which formatter to run: "ruff" or "black"
    tool: str = "ruff"

    # Line length for the formatter
    line_length: int = 100

    # Python version target (e.g., "py312", "py313")
    target_version: str = "py312"


@dataclass
class DeriveConfig:
    """Configuration options for code generation."""

    # Leading path segment of attributes inspected for rename directives
    attribute_marker: str = "serde"

    # Module providing the `de` and `ser` runtime contracts
    runtime_module: str = "miniserde_derive.runtime"

    # Module the declared types are imported from (None = already in scope)
    source_module: str | None = None

    # Which directions to derive
    derive_serialize: bool = True
    derive_deserialize: bool = True

    # Add generation comment at top of file
    add_generation_comment: bool = True

    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> DeriveConfig:
        """Create a config from a dictionary."""
        config = DeriveConfig()
        for k, v in d.items():
            if k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "attribute_marker": self.attribute_marker,
            "runtime_module": self.runtime_module,
            "source_module": self.source_module,
            "derive_serialize": self.derive_serialize,
            "derive_deserialize": self.derive_deserialize,
            "add_generation_comment": self.add_generation_comment,
            "formatter": {
                "enabled": self.formatter.enabled,
                "tool": self.formatter.tool,
                "line_length": self.formatter.line_length,
                "target_version": self.formatter.target_version,
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
