"""Cursor-aware completion session over a static and a dynamic dictionary.

The session is a small state machine:

- ``Idle``: no identifier fragment at the cursor, or nothing matches it.
- ``Suggesting``: a non-empty prefix with candidates; navigation is active.
- ``Dismissed``: the user dismissed the popup at a cursor position; it
  stays suppressed until the cursor moves.

Any cursor change returns the session to Idle before the new state is
computed, so selection and dismissal never survive a cursor move.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lexicomp.bindings import Action, KeyBindings
from lexicomp.lexer import tokenize
from lexicomp.syntax import Syntax
from lexicomp.tokens import USER_WORD_TYPES, TokenType, is_ident_char
from lexicomp.trie import Trie

logger = logging.getLogger(__name__)


def trie_from_syntax(syntax: Syntax) -> Trie:
    """Build the static dictionary: keywords, types and special words.

    Case-insensitive languages also get the lowercased form of every word.
    """
    trie = Trie.from_words(syntax.words())
    if not syntax.case_sensitive:
        for word in syntax.words():
            trie.push(word.lower())
    return trie


def extract_prefix(text: str, cursor: int, anchor: int | None = None) -> str:
    """Return the identifier fragment ending at cursor, or "" when there is none.

    No prefix is produced in the middle of an identifier (the next character
    is an identifier character) unless a selection is active, nor for a
    cursor outside the text.
    """
    if cursor < 0 or cursor > len(text):
        return ""
    has_selection = anchor is not None and anchor != cursor
    if cursor < len(text) and is_ident_char(text[cursor]) and not has_selection:
        return ""
    start = cursor
    while start > 0 and is_ident_char(text[start - 1]):
        start -= 1
    return text[start:cursor]


# ----------------------------------------------------------------------
# Session states
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Idle:
    """No active completion."""


@dataclass(frozen=True, slots=True)
class Suggesting:
    """Candidates for prefix, ranked static-first, with the highlighted index."""

    prefix: str
    candidates: tuple[str, ...]
    selected: int = 0


@dataclass(frozen=True, slots=True)
class Dismissed:
    """Completion suppressed while the cursor stays at this position."""

    cursor: int


State = Idle | Suggesting | Dismissed


# ----------------------------------------------------------------------
# Requests to the text-editing widget
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Insert:
    """Insert text at cursor (the accepted completion suffix)."""

    text: str
    cursor: int


@dataclass(frozen=True, slots=True)
class Refocus:
    """Give focus back to the editor; completion is suppressed at cursor."""

    cursor: int


class Completer:
    """Completion session for one editor buffer."""

    def __init__(
        self,
        syntax: Syntax,
        *,
        user_words: bool = True,
        bindings: KeyBindings | None = None,
    ) -> None:
        self._syntax = syntax
        self._static = trie_from_syntax(syntax)
        self._dynamic: Trie | None = Trie() if user_words else None
        self._bindings = bindings if bindings is not None else KeyBindings()
        self._text = ""
        self._cursor = 0
        self._state: State = Idle()

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def syntax(self) -> Syntax:
        return self._syntax

    @property
    def bindings(self) -> KeyBindings:
        return self._bindings

    @property
    def state(self) -> State:
        return self._state

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def prefix(self) -> str:
        return self._state.prefix if isinstance(self._state, Suggesting) else ""

    @property
    def candidates(self) -> tuple[str, ...]:
        return self._state.candidates if isinstance(self._state, Suggesting) else ()

    @property
    def selected_index(self) -> int:
        return self._state.selected if isinstance(self._state, Suggesting) else 0

    @property
    def selected(self) -> str | None:
        if isinstance(self._state, Suggesting):
            return self._state.candidates[self._state.selected]
        return None

    @property
    def ignored_cursor(self) -> int | None:
        return self._state.cursor if isinstance(self._state, Dismissed) else None

    @property
    def is_active(self) -> bool:
        """True while the popup should be shown."""
        return isinstance(self._state, Suggesting)

    @property
    def static_words(self) -> Trie:
        return self._static

    @property
    def user_words(self) -> Trie | None:
        return self._dynamic

    def items(self) -> list[tuple[str, TokenType]]:
        """Candidates paired with their token class, for styling the popup."""
        return [
            (word, self._syntax.classify_word(word) or TokenType.LITERAL)
            for word in self.candidates
        ]

    # ------------------------------------------------------------------
    # Editor events
    # ------------------------------------------------------------------

    def set_syntax(self, syntax: Syntax) -> None:
        """Switch language: new static dictionary, user words re-harvested."""
        logger.debug("syntax changed: %s -> %s", self._syntax.language, syntax.language)
        self._syntax = syntax
        self._static = trie_from_syntax(syntax)
        if self._dynamic is not None:
            self._dynamic.clear()
            self._harvest(self._dynamic)
        if isinstance(self._state, Suggesting):
            self._state = self._suggest(self._state.prefix)

    def update(self, text: str, cursor: int, anchor: int | None = None) -> Refocus | None:
        """Observe the buffer after an edit or cursor move.

        anchor is the other end of the selection, if any. Returns Refocus
        while completion is dismissed at this cursor.
        """
        if text != self._text:
            self._text = text
            if self._dynamic is not None:
                self._dynamic.clear()
                self._harvest(self._dynamic)

        if cursor != self._cursor:
            self._cursor = cursor
            if not isinstance(self._state, Idle):
                logger.debug("cursor moved to %d, session reset", cursor)
            self._state = Idle()

        if isinstance(self._state, Dismissed):
            return Refocus(cursor)

        self._state = self._suggest(extract_prefix(text, cursor, anchor))
        return None

    def handle(self, action: Action) -> Insert | Refocus | None:
        """Apply a navigation action; no-op unless suggestions are showing."""
        state = self._state
        if not isinstance(state, Suggesting):
            return None

        last = len(state.candidates) - 1
        if action is Action.NEXT:
            selected = 0 if state.selected == last else state.selected + 1
            self._state = Suggesting(state.prefix, state.candidates, selected)
            return None
        if action is Action.PREVIOUS:
            selected = last if state.selected == 0 else state.selected - 1
            self._state = Suggesting(state.prefix, state.candidates, selected)
            return None
        if action is Action.DISMISS:
            logger.debug("completion dismissed at %d", self._cursor)
            self._state = Dismissed(self._cursor)
            return Refocus(self._cursor)

        word = state.candidates[state.selected]
        logger.debug("accepted %r for prefix %r", word, state.prefix)
        self._state = Idle()
        return Insert(word[len(state.prefix) :], self._cursor)

    def handle_key(self, key: str) -> Insert | Refocus | None:
        """Look up key in the bindings and apply its action, if bound."""
        action = self._bindings.action_for(key)
        if action is None:
            return None
        return self.handle(action)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _harvest(self, trie: Trie) -> None:
        for token in tokenize(self._syntax, self._text):
            if token.type in USER_WORD_TYPES:
                trie.push(token.text)
        logger.debug(
            "user dictionary rebuilt: %d words from %d chars", len(trie), len(self._text)
        )

    def _suggest(self, prefix: str) -> State:
        if not prefix:
            return Idle()
        found = self._static.find_completions(prefix)
        if self._dynamic is not None:
            found += self._dynamic.find_completions(prefix)
        # A word equal to the prefix has nothing left to insert
        candidates = tuple(word for word in found if word != prefix)
        if not candidates:
            return Idle()

        selected = 0
        previous = self._state
        if (
            isinstance(previous, Suggesting)
            and previous.prefix == prefix
            and previous.selected < len(candidates)
        ):
            selected = previous.selected
        return Suggesting(prefix, candidates, selected)
