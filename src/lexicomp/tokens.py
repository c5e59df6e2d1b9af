"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    # Dictionary words (precedence: keyword > special > type)
    KEYWORD = auto()
    SPECIAL = auto()
    TYPE = auto()

    # Identifiers outside the dictionary
    LITERAL = auto()  # plain identifier
    FUNCTION = auto()  # identifier immediately followed by "("

    # Regions
    COMMENT = auto()  # line or block comment, delimiters included
    STRING = auto()  # quoted region, quotes included
    HYPERLINK = auto()  # scheme://... up to whitespace

    NUMERIC = auto()  # 42, 3.14, 1e-9, 0xFF, 10u32
    PUNCTUATION = auto()  # any other single character
    WHITESPACE = auto()  # maximal whitespace run


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A classified run of source text, exactly as it appears in the input."""

    type: TokenType
    text: str
    span: Span


# Identifier-like tokens harvested into the dynamic dictionary
USER_WORD_TYPES = frozenset({TokenType.LITERAL, TokenType.FUNCTION})


def is_ident_char(ch: str) -> bool:
    """Return True if ch can appear in an identifier (letter, digit, underscore)."""
    return ch.isalnum() or ch == "_"


def is_ident_start(ch: str) -> bool:
    """Return True if ch can start an identifier (not a digit)."""
    return ch.isalpha() or ch == "_"


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return ch in "0123456789"
