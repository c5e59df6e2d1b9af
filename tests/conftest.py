"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from lexicomp.languages import rust
from lexicomp.lexer import tokenize
from lexicomp.syntax import Syntax
from lexicomp.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source (Rust unless a syntax is given)."""

    def _lex(source: str, syntax: Syntax | None = None) -> list[Token]:
        return list(tokenize(syntax if syntax is not None else rust(), source))

    return _lex


@pytest.fixture
def mini() -> Syntax:
    """A tiny language: two keywords, no types, '#' comments."""
    return Syntax(language="Mini", keywords=frozenset({"function", "end"}), comment="#")


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token texts match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
