"""Error types for configuration surfaces.

The tokenizer, trie and completer never raise on text or cursor input;
only loading descriptors, key bindings and config files can fail.
"""

from __future__ import annotations

from pathlib import Path


class ConfigError(Exception):
    """Raised on invalid configuration, with the offending file and key."""

    def __init__(self, message: str, path: Path | None = None, key: str | None = None) -> None:
        self.message = message
        self.path = path
        self.key = key
        super().__init__(self.format())

    def format(self) -> str:
        result = f"error: {self.message}"
        location = []
        if self.path is not None:
            location.append(str(self.path))
        if self.key is not None:
            location.append(f"[{self.key}]")
        if location:
            result += f"\n  --> {' '.join(location)}"
        return result


class SyntaxConfigError(ConfigError):
    """Raised when a syntax descriptor table is malformed."""


class UnknownSyntaxError(ConfigError):
    """Raised when a language name matches no known descriptor."""

    def __init__(self, name: str, known: list[str], path: Path | None = None) -> None:
        self.name = name
        self.known = sorted(known)
        message = f"unknown syntax '{name}' (known: {', '.join(self.known)})"
        super().__init__(message, path)
