"""Declarative per-language grammar descriptors."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lexicomp.errors import SyntaxConfigError
from lexicomp.tokens import TokenType

_WORD_SET_KEYS = ("keywords", "types", "special", "hyperlinks")
_KNOWN_KEYS = frozenset(
    {"language", "case_sensitive", "comment", "comment_multiline", "quotes", *_WORD_SET_KEYS}
)


@dataclass(frozen=True, slots=True)
class Syntax:
    """Keyword/type/special word sets plus comment and string rules for one language."""

    language: str = "Text"
    case_sensitive: bool = True
    comment: str = ""
    comment_multiline: tuple[str, str] | None = None
    hyperlinks: frozenset[str] = frozenset()
    keywords: frozenset[str] = frozenset()
    types: frozenset[str] = frozenset()
    special: frozenset[str] = frozenset()
    quotes: frozenset[str] = frozenset('"')

    # Lookup sets, case-folded when the language is case-insensitive
    _keywords: frozenset[str] = field(init=False, repr=False, compare=False)
    _types: frozenset[str] = field(init=False, repr=False, compare=False)
    _special: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name in ("hyperlinks", "keywords", "types", "special", "quotes"):
            value = getattr(self, name)
            if not isinstance(value, frozenset):
                object.__setattr__(self, name, frozenset(value))
        object.__setattr__(self, "_keywords", self._lookup_set(self.keywords))
        object.__setattr__(self, "_types", self._lookup_set(self.types))
        object.__setattr__(self, "_special", self._lookup_set(self.special))

    def _lookup_set(self, words: frozenset[str]) -> frozenset[str]:
        if self.case_sensitive:
            return words
        return frozenset(w.lower() for w in words)

    def _fold(self, word: str) -> str:
        return word if self.case_sensitive else word.lower()

    def is_keyword(self, word: str) -> bool:
        return self._fold(word) in self._keywords

    def is_type(self, word: str) -> bool:
        return self._fold(word) in self._types

    def is_special(self, word: str) -> bool:
        return self._fold(word) in self._special

    def classify_word(self, word: str) -> TokenType | None:
        """Return the dictionary class of word (keyword > special > type), or None."""
        folded = self._fold(word)
        if folded in self._keywords:
            return TokenType.KEYWORD
        if folded in self._special:
            return TokenType.SPECIAL
        if folded in self._types:
            return TokenType.TYPE
        return None

    def words(self) -> Iterator[str]:
        """Yield every dictionary word: keywords, then types, then special words."""
        yield from sorted(self.keywords)
        yield from sorted(self.types)
        yield from sorted(self.special)

    @classmethod
    def from_mapping(
        cls, name: str, data: Mapping[str, Any], path: Path | None = None
    ) -> Syntax:
        """Build a descriptor from a TOML table such as ``[syntaxes.<name>]``."""
        key = f"syntaxes.{name}"

        def fail(message: str) -> SyntaxConfigError:
            return SyntaxConfigError(message, path, key)

        if not isinstance(data, Mapping):
            raise fail("syntax definition must be a table")

        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            raise fail(f"unknown syntax field(s): {', '.join(unknown)}")

        language = data.get("language", name)
        if not isinstance(language, str):
            raise fail("'language' must be a string")

        case_sensitive = data.get("case_sensitive", True)
        if not isinstance(case_sensitive, bool):
            raise fail("'case_sensitive' must be a boolean")

        comment = data.get("comment", "")
        if not isinstance(comment, str):
            raise fail("'comment' must be a string")

        comment_multiline = data.get("comment_multiline")
        if comment_multiline is not None:
            if (
                not isinstance(comment_multiline, list)
                or len(comment_multiline) != 2
                or not all(isinstance(d, str) and d for d in comment_multiline)
            ):
                raise fail("'comment_multiline' must be a pair of non-empty strings")
            comment_multiline = (comment_multiline[0], comment_multiline[1])

        sets: dict[str, frozenset[str]] = {}
        for set_key in _WORD_SET_KEYS:
            sets[set_key] = _word_set(data.get(set_key, []), set_key, fail)

        quotes = data.get("quotes", ['"'])
        if not isinstance(quotes, list) or not all(
            isinstance(q, str) and len(q) == 1 for q in quotes
        ):
            raise fail("'quotes' must be a list of single characters")

        return cls(
            language=language,
            case_sensitive=case_sensitive,
            comment=comment,
            comment_multiline=comment_multiline,
            quotes=frozenset(quotes),
            **sets,
        )


def _word_set(
    value: Any, set_key: str, fail: Callable[[str], SyntaxConfigError]
) -> frozenset[str]:
    if not isinstance(value, list) or not all(isinstance(w, str) and w for w in value):
        raise fail(f"'{set_key}' must be a list of non-empty strings")
    return frozenset(value)
