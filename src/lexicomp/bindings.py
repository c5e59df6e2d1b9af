"""Logical completion actions and their key bindings."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any

from lexicomp.errors import ConfigError


class Action(Enum):
    DISMISS = "dismiss"
    NEXT = "next"
    PREVIOUS = "previous"
    ACCEPT = "accept"


@dataclass(frozen=True, slots=True)
class KeyBindings:
    """Key name bound to each action; None leaves the action unbound."""

    dismiss: str | None = "Escape"
    next: str | None = "ArrowDown"
    previous: str | None = "ArrowUp"
    accept: str | None = "Tab"

    def action_for(self, key: str) -> Action | None:
        """Return the action bound to key, if any."""
        for action in Action:
            if getattr(self, action.value) == key:
                return action
        return None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], path: Path | None = None) -> KeyBindings:
        """Build bindings from a ``[keys]`` table. An empty string unbinds an action."""
        if not isinstance(data, Mapping):
            raise ConfigError("'keys' must be a table", path, "keys")
        names = {f.name for f in fields(cls)}
        values: dict[str, str | None] = {}
        for name, key in data.items():
            if name not in names:
                raise ConfigError(f"unknown action '{name}'", path, "keys")
            if not isinstance(key, str):
                raise ConfigError(f"key for '{name}' must be a string", path, "keys")
            values[name] = key or None
        return cls(**values)
