"""Tests for TOML config file loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from lexicomp.cli import build_parser, load_config, load_syntaxes, resolve_options
from lexicomp.errors import ConfigError, SyntaxConfigError, UnknownSyntaxError


def _resolve(tmp_path: Path, config: str | None, *argv: str, name: str = "doc.rs"):
    if config is not None:
        (tmp_path / "lexicomp.toml").write_text(config)
    doc = tmp_path / name
    doc.write_text("")
    ns = build_parser().parse_args([str(doc), *argv])
    return resolve_options(ns)


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('syntax = "lua"\n')
        assert load_config(cfg, tmp_path) == {"syntax": "lua"}

    def test_auto_discover_lexicomp_toml(self, tmp_path: Path) -> None:
        (tmp_path / "lexicomp.toml").write_text("[completion]\nuser_words = false\n")
        assert load_config(None, tmp_path) == {"completion": {"user_words": False}}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "lexicomp.toml"
        cfg.write_text("[keys\n")
        with pytest.raises(ConfigError, match="invalid TOML") as exc_info:
            load_config(None, tmp_path)
        assert exc_info.value.path == cfg


class TestSyntaxSelection:
    def test_extension(self, tmp_path: Path) -> None:
        assert _resolve(tmp_path, None, name="doc.py").syntax.language == "Python"

    def test_unknown_extension_defaults_to_rust(self, tmp_path: Path) -> None:
        assert _resolve(tmp_path, None, name="notes.txt").syntax.language == "Rust"

    def test_config_overrides_extension(self, tmp_path: Path) -> None:
        assert _resolve(tmp_path, 'syntax = "lua"\n').syntax.language == "Lua"

    def test_cli_overrides_config(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path, 'syntax = "lua"\n', "-s", "sql")
        assert opts.syntax.language == "SQL"

    def test_unknown_syntax_in_config_names_file(self, tmp_path: Path) -> None:
        with pytest.raises(UnknownSyntaxError) as exc_info:
            _resolve(tmp_path, 'syntax = "cobol"\n')
        assert exc_info.value.path == tmp_path / "lexicomp.toml"

    def test_unknown_syntax_on_cli(self, tmp_path: Path) -> None:
        with pytest.raises(UnknownSyntaxError) as exc_info:
            _resolve(tmp_path, None, "-s", "cobol")
        assert exc_info.value.path is None

    def test_syntax_must_be_string(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="'syntax' must be a string"):
            _resolve(tmp_path, "syntax = 3\n")


class TestUserDefinedSyntax:
    CONFIG = """\
syntax = "mini"

[syntaxes.mini]
language = "Mini"
comment = "#"
keywords = ["function", "end"]
types = ["int"]
"""

    def test_selected_by_name(self, tmp_path: Path) -> None:
        syntax = _resolve(tmp_path, self.CONFIG).syntax
        assert syntax.language == "Mini"
        assert syntax.is_keyword("function")
        assert syntax.is_type("int")
        assert syntax.comment == "#"

    def test_selected_from_cli(self, tmp_path: Path) -> None:
        config = self.CONFIG.replace('syntax = "mini"\n', "")
        assert _resolve(tmp_path, config, "-s", "MINI").syntax.language == "Mini"

    def test_load_syntaxes(self) -> None:
        extra = load_syntaxes({"syntaxes": {"a": {}, "b": {"case_sensitive": False}}})
        assert sorted(extra) == ["a", "b"]
        assert extra["a"].language == "a"
        assert extra["b"].case_sensitive is False

    def test_syntaxes_must_be_table(self) -> None:
        with pytest.raises(ConfigError, match="must be a table"):
            load_syntaxes({"syntaxes": ["mini"]})

    def test_bad_definition(self, tmp_path: Path) -> None:
        with pytest.raises(SyntaxConfigError) as exc_info:
            _resolve(tmp_path, "[syntaxes.mini]\nkeywords = 3\n")
        assert exc_info.value.key == "syntaxes.mini"


class TestCompletionSettings:
    def test_user_words_default_on(self, tmp_path: Path) -> None:
        assert _resolve(tmp_path, None).user_words is True

    def test_config_disables_user_words(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path, "[completion]\nuser_words = false\n")
        assert opts.user_words is False

    def test_cli_disables_user_words(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path, "[completion]\nuser_words = true\n", "--no-user-words")
        assert opts.user_words is False

    def test_keys_table(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path, '[keys]\naccept = "Enter"\ndismiss = ""\n')
        assert opts.bindings.accept == "Enter"
        assert opts.bindings.dismiss is None
        assert opts.bindings.next == "ArrowDown"

    def test_bad_keys_table(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="unknown action"):
            _resolve(tmp_path, '[keys]\nclose = "Escape"\n')

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "alt.toml"
        cfg.write_text('[keys]\nnext = "Ctrl+N"\n')
        opts = _resolve(tmp_path, None, "--config", str(cfg))
        assert opts.bindings.next == "Ctrl+N"
