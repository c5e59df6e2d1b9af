"""Command-line interface for lexicomp."""

from __future__ import annotations

import argparse
import io
import logging
import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lexicomp.bindings import KeyBindings
from lexicomp.errors import ConfigError, UnknownSyntaxError
from lexicomp.syntax import Syntax

CONFIG_NAME = "lexicomp.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    syntax: Syntax
    cursor: int | None = None
    anchor: int | None = None
    keys: list[str] = field(default_factory=list)
    user_words: bool = True
    bindings: KeyBindings = field(default_factory=KeyBindings)
    debug: bool = False


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="lexicomp",
        description="Syntax tokenizer and prefix completion for source files",
    )
    p.add_argument("input", help="Input source file")
    p.add_argument(
        "-s",
        "--syntax",
        metavar="NAME",
        help="Language (default: config file, then file extension, then rust)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument(
        "--cursor",
        type=int,
        metavar="N",
        help="Character offset of the cursor; prints completions instead of tokens",
    )
    p.add_argument(
        "--anchor",
        type=int,
        metavar="N",
        help="Other end of an active selection",
    )
    p.add_argument(
        "-k",
        "--key",
        action="append",
        default=[],
        metavar="KEY",
        help="Key pressed in the completion popup (repeatable)",
    )
    p.add_argument(
        "--no-user-words",
        action="store_true",
        help="Only complete language words, not identifiers from the file",
    )
    p.add_argument("--debug", action="store_true", help="Log and dump session state to stderr")
    return p


def find_config(config_path: Path | None, input_dir: Path) -> Path:
    """Return the explicit config path, or the auto-discovered one."""
    return config_path if config_path is not None else input_dir / CONFIG_NAME


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = find_config(config_path, input_dir)

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML: {exc}", path) from exc


def load_syntaxes(config: dict[str, Any], path: Path | None = None) -> dict[str, Syntax]:
    """Build the user-defined descriptors from the ``[syntaxes.*]`` tables."""
    tables = config.get("syntaxes", {})
    if not isinstance(tables, dict):
        raise ConfigError("'syntaxes' must be a table", path, "syntaxes")
    return {name: Syntax.from_mapping(name, data, path) for name, data in tables.items()}


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    from lexicomp.languages import DEFAULT_SYNTAX, get_syntax, guess_syntax

    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = find_config(Path(args.config) if args.config else None, input_dir)
    config = load_config(config_path, input_dir)

    # Syntax: CLI > config > file extension > default
    extra = load_syntaxes(config, config_path)
    name = args.syntax
    if name is None:
        cfg_syntax = config.get("syntax")
        if cfg_syntax is not None and not isinstance(cfg_syntax, str):
            raise ConfigError("'syntax' must be a string", config_path, "syntax")
        name = cfg_syntax
    if name is not None:
        try:
            syntax = get_syntax(name, extra)
        except UnknownSyntaxError as exc:
            if args.syntax is None:
                raise UnknownSyntaxError(exc.name, exc.known, config_path) from None
            raise
    else:
        syntax = guess_syntax(input_file.name) or get_syntax(DEFAULT_SYNTAX)

    # User words: config < CLI
    user_words = True
    cfg_completion = config.get("completion")
    if isinstance(cfg_completion, dict):
        cfg_user_words = cfg_completion.get("user_words")
        if isinstance(cfg_user_words, bool):
            user_words = cfg_user_words
    if args.no_user_words:
        user_words = False

    # Key bindings: config only
    bindings = KeyBindings()
    if "keys" in config:
        bindings = KeyBindings.from_mapping(config["keys"], config_path)

    return CliOptions(
        input_file=input_file,
        syntax=syntax,
        cursor=args.cursor,
        anchor=args.anchor,
        keys=list(args.key),
        user_words=user_words,
        bindings=bindings,
        debug=args.debug,
    )


def dump_file(options: CliOptions, source: str) -> str:
    """Return the token dump of source."""
    from lexicomp.debug import dump_tokens
    from lexicomp.lexer import tokenize

    out = io.StringIO()
    dump_tokens(tokenize(options.syntax, source), file=out)
    return out.getvalue()


def complete_file(options: CliOptions, source: str) -> str:
    """Run a completion session and return the candidate report.

    The cursor defaults to the end of the file. Keys are replayed through the
    bindings; an accepting key reports the inserted suffix instead.
    """
    from lexicomp.completer import Completer, Insert
    from lexicomp.debug import dump_candidates, dump_session

    cursor = options.cursor if options.cursor is not None else len(source)
    completer = Completer(
        options.syntax, user_words=options.user_words, bindings=options.bindings
    )
    completer.update(source, cursor, options.anchor)

    out = io.StringIO()
    for key in options.keys:
        result = completer.handle_key(key)
        if isinstance(result, Insert):
            out.write(f"insert: {result.text}\n")
            break
    else:
        dump_candidates(completer, file=out)

    if options.debug:
        dump_session(completer, file=sys.stderr)
    return out.getvalue()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    if options.debug:
        logging.basicConfig(
            level=logging.DEBUG, stream=sys.stderr, format="%(name)s: %(message)s"
        )

    try:
        source = options.input_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {options.input_file}: {exc}", file=sys.stderr)
        return 1

    if options.cursor is None:
        sys.stdout.write(dump_file(options, source))
    else:
        sys.stdout.write(complete_file(options, source))

    return 0
