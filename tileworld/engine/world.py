"""Tile world model: terrain grid plus the objects placed on it."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .errors import DuplicateObjectId

logger = logging.getLogger(__name__)


class TerrainKind(IntEnum):
    GRASS = 0
    DIRT = 1
    WATER = 2
    STONE = 3


SOLID_TERRAIN: frozenset[TerrainKind] = frozenset({TerrainKind.WATER, TerrainKind.STONE})

TERRAIN_GLYPHS: Dict[TerrainKind, str] = {
    TerrainKind.GRASS: "G",
    TerrainKind.DIRT: "D",
    TerrainKind.WATER: "W",
    TerrainKind.STONE: "S",
}
_GLYPH_TERRAIN: Dict[str, TerrainKind] = {glyph: kind for kind, glyph in TERRAIN_GLYPHS.items()}


class ObjectKind(str, Enum):
    TREE = "tree"
    ROCK = "rock"
    BUSH = "bush"
    FENCE = "fence"
    CROP = "crop"


@dataclass(frozen=True, slots=True)
class WorldObject:
    """A decorative or solid object anchored at the top-left of a tile."""

    id: str
    kind: ObjectKind
    x: float
    y: float
    solid: bool = True
    growth_stage: Optional[int] = None


class World:
    """Immutable terrain grid with a mutable list of placed objects.

    Terrain is stored row-major as ``grid[y][x]``. The grid never changes after
    construction; objects may be added or removed by id.
    """

    def __init__(
        self,
        grid: Sequence[Sequence[TerrainKind]],
        tile_size: int,
        objects: Iterable[WorldObject] = (),
    ) -> None:
        if not grid:
            raise ValueError("World grid must contain at least one row")
        row_lengths = {len(row) for row in grid}
        if len(row_lengths) != 1:
            raise ValueError("World grid rows must be of equal length")
        width = row_lengths.pop()
        if width == 0:
            raise ValueError("World grid rows must contain at least one cell")
        if tile_size <= 0:
            raise ValueError("tile_size must be positive")

        self._grid: Tuple[Tuple[TerrainKind, ...], ...] = tuple(
            tuple(TerrainKind(cell) for cell in row) for row in grid
        )
        self._w = width
        self._h = len(self._grid)
        self._tile_size = int(tile_size)
        self._objects: List[WorldObject] = []
        self._object_ids: Dict[str, WorldObject] = {}
        for obj in objects:
            self.add_object(obj)

    # ---------------------------------------------------------------- geometry
    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    @property
    def tile_size(self) -> int:
        return self._tile_size

    @property
    def pixel_width(self) -> int:
        return self._w * self._tile_size

    @property
    def pixel_height(self) -> int:
        return self._h * self._tile_size

    @property
    def grid(self) -> Tuple[Tuple[TerrainKind, ...], ...]:
        return self._grid

    def is_within(self, tile_x: int, tile_y: int) -> bool:
        return 0 <= tile_x < self._w and 0 <= tile_y < self._h

    # ----------------------------------------------------------------- terrain
    def terrain_at(self, tile_x: int, tile_y: int) -> Optional[TerrainKind]:
        """Return the terrain of a cell, or ``None`` outside the grid."""

        if not self.is_within(tile_x, tile_y):
            return None
        return self._grid[tile_y][tile_x]

    def terrain_at_pixel(self, px: float, py: float) -> Optional[TerrainKind]:
        return self.terrain_at(int(px // self._tile_size), int(py // self._tile_size))

    def terrain_counts(self) -> Counter[TerrainKind]:
        return Counter(cell for row in self._grid for cell in row)

    # ----------------------------------------------------------------- objects
    @property
    def objects(self) -> Tuple[WorldObject, ...]:
        return tuple(self._objects)

    def object(self, object_id: str) -> Optional[WorldObject]:
        return self._object_ids.get(object_id)

    def solid_objects(self) -> Iterator[WorldObject]:
        return (obj for obj in self._objects if obj.solid)

    def add_object(self, obj: WorldObject) -> None:
        """Append ``obj``; its id must be unused and its anchor inside the world."""

        if obj.id in self._object_ids:
            logger.warning("Rejected object %s: id already in use", obj.id)
            raise DuplicateObjectId(obj.id)
        if not (0 <= obj.x < self.pixel_width and 0 <= obj.y < self.pixel_height):
            raise ValueError(
                f"Object {obj.id!r} at ({obj.x}, {obj.y}) lies outside the "
                f"{self.pixel_width}x{self.pixel_height} world"
            )
        self._objects.append(obj)
        self._object_ids[obj.id] = obj
        logger.debug("Added %s %s at (%s, %s)", obj.kind.value, obj.id, obj.x, obj.y)

    def remove_object(self, object_id: str) -> bool:
        """Remove an object by id. Unknown ids are ignored; returns whether one was removed."""

        obj = self._object_ids.pop(object_id, None)
        if obj is None:
            logger.debug("Remove of unknown object %s ignored", object_id)
            return False
        self._objects.remove(obj)
        logger.debug("Removed %s %s", obj.kind.value, object_id)
        return True

    # --------------------------------------------------------------- debugging
    @classmethod
    def from_lines(
        cls,
        lines: Sequence[str],
        tile_size: int,
        objects: Iterable[WorldObject] = (),
    ) -> "World":
        """Build a world from rows of terrain glyphs (``G``, ``D``, ``W``, ``S``)."""

        try:
            grid = [[_GLYPH_TERRAIN[ch] for ch in row] for row in lines]
        except KeyError as exc:
            raise ValueError(f"Unknown terrain glyph {exc.args[0]!r}") from None
        return cls(grid, tile_size, objects)

    def to_lines(self) -> List[str]:
        return ["".join(TERRAIN_GLYPHS[cell] for cell in row) for row in self._grid]

    def __repr__(self) -> str:
        return (
            f"World(width={self._w}, height={self._h}, tile_size={self._tile_size}, "
            f"objects={len(self._objects)})"
        )
