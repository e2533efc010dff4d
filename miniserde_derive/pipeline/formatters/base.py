"""
Base class for code formatters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..config import FormatterConfig


class Formatter(ABC):
    """Abstract base class for code formatters.

    Formatting is best effort: when the tool is missing or rejects the
    input, the code is returned unchanged.
    """

    @abstractmethod
    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format the given code.

        Args:
            code: The generated source code
            config: Formatter configuration

        Returns:
            Formatted code
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the formatter can be used."""
