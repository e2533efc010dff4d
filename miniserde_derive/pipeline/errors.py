"""
Diagnostics raised while deriving code.

Every failure carries a message and a span pointing back into the
declaration document, so callers can render it like a compiler error.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Span:
    """A location in the declaration document.

    `source_path` is a JSON pointer into the document (e.g.
    ``#/declarations/0/fields/1/attributes/0``). `line` and `column` are only
    set for tokens lexed out of attribute text and are relative to that text.
    """

    source_path: str = ""
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        location = self.source_path or "<unknown>"
        if self.line is not None:
            location += f":{self.line}:{self.column or 0}"
        return location


class DeriveError(Exception):
    """A terminal error aborting generation for a whole type."""

    def __init__(self, message: str, span: Span | None = None):
        super().__init__(message)
        self.message = message
        self.span = span or Span()

    @classmethod
    def at_tokens(cls, tokens: Any, message: str) -> DeriveError:
        """Build an error anchored to a token, a token list, or a node."""
        return cls(message, span_of(tokens))

    def __str__(self) -> str:
        return f"{self.span}: error: {self.message}"


class DeclarationError(DeriveError):
    """Raised when a declaration document is malformed."""


def span_of(node: Any) -> Span:
    """Find the span of a token, node or sequence of tokens (first element wins)."""
    if isinstance(node, Span):
        return node
    span = getattr(node, "span", None)
    if isinstance(span, Span):
        return span
    if isinstance(node, Sequence) and not isinstance(node, str) and node:
        return span_of(node[0])
    return Span()
