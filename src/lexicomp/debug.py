"""Human-readable dumps of token streams and completion sessions."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from lexicomp.completer import Completer, Dismissed, Suggesting
from lexicomp.tokens import Token

_KIND_WIDTH = max(len("PUNCTUATION"), len("WHITESPACE"))


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one token per line as ``line:col KIND 'text'`` to *file*."""
    for token in tokens:
        start = token.span.start
        where = f"{start.line}:{start.column}"
        file.write(f"{where:<8} {token.type.name:<{_KIND_WIDTH}} {token.text!r}\n")


def dump_candidates(completer: Completer, *, file: TextIO = sys.stdout) -> None:
    """Print the candidate list, marking the selected entry with ``>``."""
    for i, word in enumerate(completer.candidates):
        marker = ">" if i == completer.selected_index else " "
        file.write(f"{marker} {word}\n")


def dump_session(completer: Completer, *, file: TextIO = sys.stderr) -> None:
    """Print the session state and dictionary sizes to *file*."""
    state = completer.state
    user = completer.user_words
    file.write(f"Session {completer.syntax.language}\n")
    file.write(f"  cursor: {completer.cursor}\n")
    if isinstance(state, Suggesting):
        file.write(f"  state: Suggesting prefix={state.prefix!r}\n")
        file.write(f"  selected: {state.selected} of {len(state.candidates)}\n")
    elif isinstance(state, Dismissed):
        file.write(f"  state: Dismissed at {state.cursor}\n")
    else:
        file.write("  state: Idle\n")
    file.write(f"  static words: {len(completer.static_words)}\n")
    file.write(f"  user words: {'off' if user is None else len(user)}\n")
