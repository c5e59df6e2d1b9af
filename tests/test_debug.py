"""Tests for the token and session dumps."""

from __future__ import annotations

import io

from lexicomp.bindings import Action
from lexicomp.completer import Completer
from lexicomp.debug import dump_candidates, dump_session, dump_tokens
from lexicomp.languages import rust


class TestDumpTokens:
    def test_one_line_per_token(self, lex) -> None:
        out = io.StringIO()
        dump_tokens(lex("let\nx"), file=out)
        assert out.getvalue().splitlines() == [
            "1:1      KEYWORD     'let'",
            "1:4      WHITESPACE  '\\n'",
            "2:1      LITERAL     'x'",
        ]


class TestDumpSession:
    def _session(self, text: str) -> Completer:
        completer = Completer(rust())
        completer.update(text, len(text))
        return completer

    def test_candidates_mark_selection(self) -> None:
        completer = self._session("wh")
        out = io.StringIO()
        dump_candidates(completer, file=out)
        assert out.getvalue() == "> where\n  while\n"

        completer.handle(Action.NEXT)
        out = io.StringIO()
        dump_candidates(completer, file=out)
        assert out.getvalue() == "  where\n> while\n"

    def test_suggesting(self) -> None:
        out = io.StringIO()
        dump_session(self._session("wh"), file=out)
        assert out.getvalue() == (
            "Session Rust\n"
            "  cursor: 2\n"
            "  state: Suggesting prefix='wh'\n"
            "  selected: 0 of 2\n"
            f"  static words: {len(list(rust().words()))}\n"
            "  user words: 1\n"
        )

    def test_dismissed_and_idle(self) -> None:
        completer = self._session("wh")
        completer.handle(Action.DISMISS)
        out = io.StringIO()
        dump_session(completer, file=out)
        assert "  state: Dismissed at 2\n" in out.getvalue()

        out = io.StringIO()
        dump_session(self._session("wh "), file=out)
        assert "  state: Idle\n" in out.getvalue()

    def test_user_words_off(self) -> None:
        out = io.StringIO()
        dump_session(Completer(rust(), user_words=False), file=out)
        assert "  user words: off\n" in out.getvalue()
