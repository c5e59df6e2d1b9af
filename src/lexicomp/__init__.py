"""Syntax tokenizer and trie-based prefix completion for code editors."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lexicomp.syntax import Syntax
    from lexicomp.tokens import TokenType

__version__ = "0.1.0"


def highlight(source: str, syntax: Syntax | str = "rust") -> list[tuple[TokenType, str]]:
    """Tokenize source and return (kind, text) pairs for a renderer."""
    from lexicomp.languages import get_syntax
    from lexicomp.lexer import tokenize

    if isinstance(syntax, str):
        syntax = get_syntax(syntax)
    return [(token.type, token.text) for token in tokenize(syntax, source)]


def complete(source: str, cursor: int, syntax: Syntax | str = "rust") -> list[str]:
    """Return completion candidates for the identifier fragment ending at cursor."""
    from lexicomp.completer import Completer
    from lexicomp.languages import get_syntax

    if isinstance(syntax, str):
        syntax = get_syntax(syntax)
    completer = Completer(syntax)
    completer.update(source, cursor)
    return list(completer.candidates)
