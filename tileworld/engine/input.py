"""Keyboard bindings and the held-input snapshot sampled once per tick."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Mapping, Tuple

from .content import load_yaml
from .errors import ConfigError


class InputAction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    SPRINT = "sprint"


DEFAULT_BINDINGS: Dict[InputAction, Tuple[str, ...]] = {
    InputAction.UP: ("w", "up"),
    InputAction.DOWN: ("s", "down"),
    InputAction.LEFT: ("a", "left"),
    InputAction.RIGHT: ("d", "right"),
    InputAction.SPRINT: ("left shift", "right shift"),
}


class KeyBindings:
    """Map each input action to the key names that trigger it."""

    def __init__(self, bindings: Mapping[InputAction, Iterable[str]] | None = None) -> None:
        merged = dict(DEFAULT_BINDINGS)
        if bindings:
            for action, keys in bindings.items():
                merged[InputAction(action)] = tuple(key.lower() for key in keys)
        self._keys: Dict[InputAction, FrozenSet[str]] = {
            action: frozenset(keys) for action, keys in merged.items()
        }

    def keys_for(self, action: InputAction) -> FrozenSet[str]:
        return self._keys[action]

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "KeyBindings":
        raw = data.get("bindings") or {}
        if not isinstance(raw, dict):
            raise ConfigError('"bindings" must be a mapping of action to key list')
        bindings: Dict[InputAction, Tuple[str, ...]] = {}
        for name, keys in raw.items():
            try:
                action = InputAction(str(name).lower())
            except ValueError:
                raise ConfigError(f"Unknown input action {name!r}") from None
            if isinstance(keys, str):
                keys = [keys]
            if not isinstance(keys, list) or not keys:
                raise ConfigError(f'Keys for "{name}" must be a non-empty list')
            bindings[action] = tuple(str(key) for key in keys)
        return cls(bindings)

    @classmethod
    def load(cls, path: str | Path) -> "KeyBindings":
        return cls.from_dict(load_yaml(path))


class HeldInput:
    """Point-in-time set of held keys, queried by action."""

    __slots__ = ("_held", "_bindings")

    def __init__(self, held_keys: Iterable[str] = (), bindings: KeyBindings | None = None) -> None:
        self._held = frozenset(key.lower() for key in held_keys)
        self._bindings = bindings or KeyBindings()

    def is_held(self, action: InputAction) -> bool:
        return not self._held.isdisjoint(self._bindings.keys_for(action))

    def __repr__(self) -> str:
        return f"HeldInput({sorted(self._held)!r})"
