"""The token stream always reconstructs its input, for every builtin language."""

from __future__ import annotations

import itertools

import pytest

from lexicomp.languages import BUILTIN_SYNTAXES
from lexicomp.lexer import TokenStream, tokenize

SAMPLES = [
    "",
    " ",
    "\n\n\t",
    '"unterminated',
    "'unterminated",
    "/* unterminated",
    "--[[ unterminated",
    "// trailing comment",
    'print("a\\"b")',
    "a\r\nb\rc",
    "§¶ ∑ 😀 ü",
    "0x1F 1e10 1..2 3.",
    "http://x.io/path?q=1#frag",
    """-- Binary Search
function binarySearch(list, value)
    local function search(low, high)
        if low > high then return false end
        local mid = math.floor((low+high)/2)
        return mid
    end
    return search(1,#list)
end""",
    '''def bad_cb(*vals: bytes, maxitems: int | None) -> list[bytes]:
    """doc"""
    ...''',
    """#!/bin/bash
user=p4ymak
if grep $user /etc/passwd
then
echo "The user $user Exists"
fi""",
    """select now(); -- what time it is?
WITH employee_ranking AS (
  SELECT employee_id as real, RANK() OVER (PARTITION BY dept_id ORDER BY salary DESC)
)""",
]


@pytest.mark.parametrize("language", sorted(BUILTIN_SYNTAXES))
@pytest.mark.parametrize("source", SAMPLES)
class TestRoundTrip:
    def test_concatenation_reproduces_input(self, language: str, source: str) -> None:
        syntax = BUILTIN_SYNTAXES[language]()
        assert "".join(t.text for t in tokenize(syntax, source)) == source

    def test_spans_are_contiguous(self, language: str, source: str) -> None:
        syntax = BUILTIN_SYNTAXES[language]()
        offset = 0
        for token in tokenize(syntax, source):
            assert token.text, "tokens are never empty"
            assert token.span.start.offset == offset
            assert token.span.end.offset == offset + len(token.text)
            offset = token.span.end.offset
        assert offset == len(source)


class TestTokenStream:
    def test_restartable(self, mini) -> None:
        stream = tokenize(mini, "function f() end")
        assert list(stream) == list(stream)

    def test_lazy(self, mini) -> None:
        stream = tokenize(mini, "end " * 10_000)
        first = list(itertools.islice(stream, 2))
        assert [t.text for t in first] == ["end", " "]

    def test_is_a_token_stream(self, mini) -> None:
        stream = tokenize(mini, "x")
        assert isinstance(stream, TokenStream)
        assert stream.source == "x"
        assert stream.syntax is mini
