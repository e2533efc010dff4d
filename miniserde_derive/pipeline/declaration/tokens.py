"""
Attribute lexer.

Turns attribute source text such as ``serde(rename = "id")`` into token
trees using the standard library tokenizer, grouping delimited runs of
tokens into `Group` nodes.
"""

from __future__ import annotations

import io
import tokenize

from ..errors import DeclarationError, Span
from .nodes import Delimiter, Group, Ident, Literal, Punct, TokenTree

_SKIPPED = {
    tokenize.NEWLINE,
    tokenize.NL,
    tokenize.COMMENT,
    tokenize.INDENT,
    tokenize.DEDENT,
    tokenize.ENDMARKER,
}

_OPENING = "([{"
_CLOSING = ")]}"


class AttributeLexer:
    """Lexes one attribute's text into a flat list of token trees."""

    def __init__(self, text: str, source_path: str = ""):
        self.text = text.strip()
        self.source_path = source_path
        self._line_offsets = self._compute_line_offsets(self.text)

    def lex(self) -> list[TokenTree]:
        root: list[TokenTree] = []
        stack: list[Group] = []
        fstring_start: tuple[int, int] | None = None
        fstring_depth = 0

        try:
            for tok in tokenize.generate_tokens(io.StringIO(self.text).readline):
                # f-strings arrive as several tokens; keep them as one literal
                if tok.type == tokenize.FSTRING_START:
                    if fstring_depth == 0:
                        fstring_start = tok.start
                    fstring_depth += 1
                    continue
                if fstring_depth:
                    if tok.type == tokenize.FSTRING_END:
                        fstring_depth -= 1
                        if fstring_depth == 0:
                            literal = Literal(span=self._span(fstring_start), text=self._slice(fstring_start, tok.end))
                            self._current(root, stack).append(literal)
                    continue

                if tok.type in _SKIPPED:
                    continue
                if tok.type == tokenize.NAME:
                    self._current(root, stack).append(Ident(span=self._span(tok.start), text=tok.string))
                elif tok.type in (tokenize.STRING, tokenize.NUMBER):
                    self._current(root, stack).append(Literal(span=self._span(tok.start), text=tok.string))
                elif tok.type == tokenize.OP and tok.string in _OPENING:
                    group = Group(span=self._span(tok.start), delimiter=Delimiter.from_open(tok.string))
                    self._current(root, stack).append(group)
                    stack.append(group)
                elif tok.type == tokenize.OP and tok.string in _CLOSING:
                    if not stack or stack[-1].delimiter.close != tok.string:
                        raise DeclarationError(f"mismatched closing delimiter {tok.string!r}", self._span(tok.start))
                    stack.pop()
                elif tok.type == tokenize.OP:
                    self._current(root, stack).append(Punct(span=self._span(tok.start), text=tok.string))
                else:
                    raise DeclarationError(f"unexpected token {tok.string!r} in attribute", self._span(tok.start))
        except (tokenize.TokenError, SyntaxError) as e:
            raise DeclarationError(f"cannot tokenize attribute {self.text!r}: {e.args[0]}", Span(self.source_path)) from e

        if stack:
            raise DeclarationError(f"unclosed delimiter {stack[-1].delimiter.open!r}", stack[-1].span)
        return root

    @staticmethod
    def _current(root: list[TokenTree], stack: list[Group]) -> list[TokenTree]:
        return stack[-1].tokens if stack else root

    @staticmethod
    def _compute_line_offsets(text: str) -> list[int]:
        offsets = [0]
        for line in text.splitlines(keepends=True):
            offsets.append(offsets[-1] + len(line))
        return offsets

    def _span(self, position: tuple[int, int] | None) -> Span:
        line, column = position or (1, 0)
        return Span(self.source_path, line, column)

    def _slice(self, start: tuple[int, int] | None, end: tuple[int, int]) -> str:
        start = start or (1, 0)
        begin = self._line_offsets[start[0] - 1] + start[1]
        finish = self._line_offsets[end[0] - 1] + end[1]
        return self.text[begin:finish]


def lex_attribute(text: str, source_path: str = "") -> list[TokenTree]:
    """
    Lex attribute text into token trees.

    Args:
        text: Attribute source, e.g. ``serde(rename = "id")``
        source_path: Location of the attribute in the declaration document

    Returns:
        The top-level tokens; delimited runs are nested in `Group` nodes

    Raises:
        DeclarationError: If the text cannot be tokenized or delimiters do not match
    """
    return AttributeLexer(text, source_path).lex()
