"""
Atomic file writer for generated modules.

Ensures that file writes are atomic so an interrupted run never leaves a
half-written module behind.
"""

from __future__ import annotations

import ast
import logging
import os
import tempfile
from collections.abc import Callable
from pathlib import Path

from .config import OutputConfig, OutputMode

logger = logging.getLogger(__name__)


class CodeWriteError(Exception):
    """Raised when generated code fails validation before being written."""


def validate_python(content: str) -> None:
    """Check that `content` parses as Python.

    Raises:
        CodeWriteError: If it does not
    """
    try:
        ast.parse(content)
    except SyntaxError as e:
        raise CodeWriteError(f"Generated Python code is not valid: {e}") from e


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, validate: Callable[[str], None] | None = None):
        self._validate = validate or validate_python

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            CodeWriteError: If validation fails
            OSError: If file operations fail
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        temp_fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        temp_path = Path(temp_name)
        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self._validate(content)

            # mkstemp creates the file owner-only
            os.chmod(temp_path, 0o644)
            # rename() is atomic on POSIX when source and dest share a filesystem
            temp_path.replace(path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise
        logger.debug("Wrote %s", path)

    def write_output(self, path: Path, content: str, config: OutputConfig) -> None:
        """Write content honoring the output mode.

        Raises:
            FileExistsError: If the file exists and the mode forbids overwriting
            CodeWriteError: If validation fails
        """
        path = Path(path)
        if config.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")

        if config.atomic_write:
            self.write(path, content, config.validate_before_write)
            return

        if config.validate_before_write:
            self._validate(content)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
