"""Tests for the package-level convenience functions."""

from __future__ import annotations

import pytest

import lexicomp
from lexicomp.errors import UnknownSyntaxError
from lexicomp.languages import lua
from lexicomp.tokens import TokenType


class TestHighlight:
    def test_pairs(self) -> None:
        assert lexicomp.highlight("fn f()") == [
            (TokenType.KEYWORD, "fn"),
            (TokenType.WHITESPACE, " "),
            (TokenType.FUNCTION, "f"),
            (TokenType.PUNCTUATION, "("),
            (TokenType.PUNCTUATION, ")"),
        ]

    def test_syntax_by_name_or_descriptor(self) -> None:
        assert lexicomp.highlight("end", "lua") == [(TokenType.KEYWORD, "end")]
        assert lexicomp.highlight("end", lua()) == [(TokenType.KEYWORD, "end")]

    def test_unknown_syntax(self) -> None:
        with pytest.raises(UnknownSyntaxError):
            lexicomp.highlight("x", "cobol")


class TestComplete:
    def test_candidates(self) -> None:
        assert lexicomp.complete("let counter = 1;\ncou", 20) == ["counter"]

    def test_no_prefix(self) -> None:
        assert lexicomp.complete("let x = ", 8) == []
