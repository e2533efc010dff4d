"""
Black formatter for generated code.
"""

from __future__ import annotations

import logging

from ..config import FormatterConfig
from .base import Formatter

logger = logging.getLogger(__name__)


class BlackFormatter(Formatter):
    """Formatter using black as a library."""

    def __init__(self):
        self._black = None
        self._available = None

    def is_available(self) -> bool:
        """Check if black is installed."""
        if self._available is None:
            try:
                import black

                self._black = black
                self._available = True
            except ImportError:
                self._available = False
        return self._available

    def format(self, code: str, config: FormatterConfig) -> str:
        if not self.is_available():
            logger.warning("black is not installed, leaving generated code unformatted")
            return code

        black = self._black
        target_versions = set()
        target = getattr(black.TargetVersion, config.target_version.upper(), None) if config.target_version else None
        if target is not None:
            target_versions.add(target)

        mode = black.Mode(target_versions=target_versions, line_length=config.line_length)
        try:
            return black.format_str(code, mode=mode)
        except black.InvalidInput as e:
            logger.warning("black rejected the generated code: %s", e)
            return code
