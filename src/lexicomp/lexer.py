"""Syntax-driven lexer — converts source text into a lazy stream of classified tokens.

The lexer is total: every input, including empty text and unterminated
strings or comments, produces tokens whose texts concatenate back to the
input exactly.
"""

from __future__ import annotations

from collections.abc import Iterator

from lexicomp.syntax import Syntax
from lexicomp.tokens import (
    Position,
    Span,
    Token,
    TokenType,
    is_digit,
    is_ident_char,
    is_ident_start,
)

# Characters that end a bare hyperlink besides whitespace
_LINK_STOP = frozenset("\"'`<>()[]{}")


class Lexer:
    """Scan one source text against a Syntax. Single use; see TokenStream for reuse."""

    def __init__(self, syntax: Syntax, source: str) -> None:
        self._syntax = syntax
        self._source = source
        self._pos = 0
        self._line = 1
        self._col = 1

    def tokens(self) -> Iterator[Token]:
        """Yield tokens left to right until the source is consumed."""
        while self._pos < len(self._source):
            yield self._lex_next()

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _starts_with(self, text: str) -> bool:
        return bool(text) and self._source.startswith(text, self._pos)

    def _advance_to(self, end: int) -> None:
        """Move to offset `end`, keeping line and column in step."""
        chunk = self._source[self._pos : end]
        newlines = chunk.count("\n")
        if newlines:
            self._line += newlines
            self._col = len(chunk) - chunk.rfind("\n")
        else:
            self._col += len(chunk)
        self._pos = end

    def _emit(self, tt: TokenType, start: Position) -> Token:
        end = self._current_pos()
        return Token(tt, self._source[start.offset : end.offset], Span(start, end))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _lex_next(self) -> Token:
        syntax = self._syntax
        block = syntax.comment_multiline
        line = syntax.comment

        # Longest comment opener wins (Lua: "--[[" over "--")
        if block and self._starts_with(block[0]):
            if not (self._starts_with(line) and len(line) > len(block[0])):
                return self._lex_block_comment(block[0], block[1])
        if self._starts_with(line):
            return self._lex_line_comment()

        ch = self._peek()

        if ch in syntax.quotes:
            return self._lex_string(ch)

        if is_ident_start(ch):
            return self._lex_word()

        if is_digit(ch):
            return self._lex_number()

        if ch.isspace():
            return self._lex_whitespace()

        # Anything else is a single punctuation character
        start = self._current_pos()
        self._advance_to(self._pos + 1)
        return self._emit(TokenType.PUNCTUATION, start)

    # ------------------------------------------------------------------
    # Comments and strings
    # ------------------------------------------------------------------

    def _lex_line_comment(self) -> Token:
        start = self._current_pos()
        body = self._pos + len(self._syntax.comment)
        end = self._source.find("\n", body)
        if end == -1:
            end = len(self._source)
        elif end > body and self._source[end - 1] == "\r":
            end -= 1
        self._advance_to(end)
        return self._emit(TokenType.COMMENT, start)

    def _lex_block_comment(self, opener: str, closer: str) -> Token:
        start = self._current_pos()
        close = self._source.find(closer, self._pos + len(opener))
        end = len(self._source) if close == -1 else close + len(closer)
        self._advance_to(end)
        return self._emit(TokenType.COMMENT, start)

    def _lex_string(self, quote: str) -> Token:
        start = self._current_pos()
        source = self._source
        i = self._pos + 1
        while i < len(source):
            ch = source[i]
            i += 1
            if ch == "\\":
                # Escaped character, including an escaped quote
                i = min(i + 1, len(source))
            elif ch == quote:
                break
        self._advance_to(i)
        return self._emit(TokenType.STRING, start)

    # ------------------------------------------------------------------
    # Words, numbers, whitespace
    # ------------------------------------------------------------------

    def _scan_ident(self, i: int) -> int:
        source = self._source
        while i < len(source) and is_ident_char(source[i]):
            i += 1
        return i

    def _lex_word(self) -> Token:
        start = self._current_pos()
        source = self._source
        end = self._scan_ident(self._pos)
        word = source[self._pos : end]

        if source.startswith("://", end) and word.lower() in self._syntax.hyperlinks:
            end += 3
            while end < len(source) and not (source[end].isspace() or source[end] in _LINK_STOP):
                end += 1
            self._advance_to(end)
            return self._emit(TokenType.HYPERLINK, start)

        tt = self._syntax.classify_word(word)
        if tt is None:
            tt = TokenType.FUNCTION if source.startswith("(", end) else TokenType.LITERAL
        self._advance_to(end)
        return self._emit(tt, start)

    def _lex_number(self) -> Token:
        start = self._current_pos()
        source = self._source
        n = len(source)

        i = self._pos
        while i < n and (is_digit(source[i]) or source[i] == "_"):
            i += 1

        # Fraction: only when a digit follows the dot, so "1..2" stays a range
        if i + 1 < n and source[i] == "." and is_digit(source[i + 1]):
            i += 1
            while i < n and (is_digit(source[i]) or source[i] == "_"):
                i += 1

        # Exponent
        if i < n and source[i] in "eE":
            j = i + 1
            if j < n and source[j] in "+-":
                j += 1
            if j < n and is_digit(source[j]):
                i = j
                while i < n and is_digit(source[i]):
                    i += 1

        # Radix prefixes and type suffixes (0xFF, 10u32) stay in the number
        i = self._scan_ident(i)

        self._advance_to(i)
        return self._emit(TokenType.NUMERIC, start)

    def _lex_whitespace(self) -> Token:
        start = self._current_pos()
        source = self._source
        i = self._pos
        while i < len(source) and source[i].isspace():
            i += 1
        self._advance_to(i)
        return self._emit(TokenType.WHITESPACE, start)


class TokenStream:
    """Lazy, restartable token sequence: each iteration scans the source afresh."""

    __slots__ = ("syntax", "source")

    def __init__(self, syntax: Syntax, source: str) -> None:
        self.syntax = syntax
        self.source = source

    def __iter__(self) -> Iterator[Token]:
        return Lexer(self.syntax, self.source).tokens()

    def __repr__(self) -> str:
        return f"TokenStream({self.syntax.language!r}, {len(self.source)} chars)"


def tokenize(syntax: Syntax, source: str) -> TokenStream:
    """Convenience function: return the lazy token stream for source."""
    return TokenStream(syntax, source)
