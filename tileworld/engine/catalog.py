"""Per-kind object metadata: default solidity and visual footprint."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Tuple

from .content import load_yaml
from .errors import ConfigError
from .world import ObjectKind


@dataclass(frozen=True)
class ObjectSpec:
    kind: ObjectKind
    solid: bool
    size: Tuple[int, int]
    offset: Tuple[int, int]
    color: Tuple[int, int, int]


DEFAULT_SPECS: Dict[ObjectKind, ObjectSpec] = {
    ObjectKind.TREE: ObjectSpec(ObjectKind.TREE, True, (192, 192), (-64, -136), (38, 120, 72)),
    ObjectKind.ROCK: ObjectSpec(ObjectKind.ROCK, True, (48, 32), (8, 24), (110, 110, 120)),
    ObjectKind.BUSH: ObjectSpec(ObjectKind.BUSH, False, (32, 32), (16, 24), (34, 139, 94)),
    ObjectKind.FENCE: ObjectSpec(ObjectKind.FENCE, True, (64, 16), (0, 40), (130, 90, 50)),
    ObjectKind.CROP: ObjectSpec(ObjectKind.CROP, False, (32, 32), (16, 16), (229, 201, 90)),
}


def _int_pair(value: object, key: str) -> Tuple[int, int]:
    if not (isinstance(value, (list, tuple)) and len(value) == 2 and all(isinstance(i, int) for i in value)):
        raise ConfigError(f'"{key}" must be [int, int]')
    return int(value[0]), int(value[1])


def _color(value: object, key: str) -> Tuple[int, int, int]:
    if not (isinstance(value, (list, tuple)) and len(value) == 3 and all(isinstance(i, int) for i in value)):
        raise ConfigError(f'"{key}" must be [r, g, b]')
    r, g, b = (max(0, min(255, int(c))) for c in value)
    return (r, g, b)


class ObjectCatalog:
    """Lookup table of object metadata keyed by :class:`ObjectKind`."""

    def __init__(self, specs: Iterable[ObjectSpec] = ()) -> None:
        self._specs: Dict[ObjectKind, ObjectSpec] = dict(DEFAULT_SPECS)
        for spec in specs:
            self._specs[spec.kind] = spec

    def __getitem__(self, kind: ObjectKind) -> ObjectSpec:
        return self._specs[kind]

    def is_solid(self, kind: ObjectKind) -> bool:
        return self._specs[kind].solid

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "ObjectCatalog":
        entries = data.get("objects") or []
        if not isinstance(entries, list):
            raise ConfigError('"objects" must be a list')
        specs = []
        for entry in entries:
            if not isinstance(entry, dict) or "kind" not in entry:
                raise ConfigError('Each object entry needs a "kind"')
            try:
                kind = ObjectKind(str(entry["kind"]).lower())
            except ValueError:
                raise ConfigError(f"Unknown object kind {entry['kind']!r}") from None
            base = DEFAULT_SPECS[kind]
            specs.append(
                ObjectSpec(
                    kind=kind,
                    solid=bool(entry.get("solid", base.solid)),
                    size=_int_pair(entry.get("size", base.size), "size"),
                    offset=_int_pair(entry.get("offset", base.offset), "offset"),
                    color=_color(entry.get("color", base.color), "color"),
                )
            )
        return cls(specs)

    @classmethod
    def load(cls, path: str | Path) -> "ObjectCatalog":
        return cls.from_dict(load_yaml(path))
