"""Collision tests between the player's hitboxes and the world."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Iterable, Tuple

from .world import SOLID_TERRAIN, TerrainKind, World, WorldObject


@dataclass(frozen=True)
class Hitbox:
    """Rectangle inset from the sprite's top-left corner."""

    offset_x: float
    offset_y: float
    width: float
    height: float

    def at(self, x: float, y: float) -> Tuple[float, float, float, float]:
        return (x + self.offset_x, y + self.offset_y, self.width, self.height)

    def corners(self, x: float, y: float) -> Tuple[Tuple[float, float], ...]:
        left = x + self.offset_x
        top = y + self.offset_y
        right = left + self.width - 1
        bottom = top + self.height - 1
        return ((left, top), (right, top), (left, bottom), (right, bottom))


# Body only: skips the hair at the top of the sprite.
TERRAIN_HITBOX = Hitbox(offset_x=24, offset_y=24, width=32, height=24)
OBJECT_HITBOX = Hitbox(offset_x=8, offset_y=24, width=32, height=24)


def rects_overlap(
    a: Tuple[float, float, float, float],
    b: Tuple[float, float, float, float],
) -> bool:
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


class CollisionResolver:
    """Decide whether the player may occupy a proposed position."""

    def __init__(
        self,
        terrain_hitbox: Hitbox = TERRAIN_HITBOX,
        object_hitbox: Hitbox = OBJECT_HITBOX,
        solid_terrain: AbstractSet[TerrainKind] = SOLID_TERRAIN,
    ) -> None:
        self.terrain_hitbox = terrain_hitbox
        self.object_hitbox = object_hitbox
        self.solid_terrain = frozenset(solid_terrain)

    def is_blocked(self, world: World, objects: Iterable[WorldObject], x: float, y: float) -> bool:
        return self.terrain_blocked(world, x, y) or self.object_blocked(world, objects, x, y)

    def terrain_blocked(self, world: World, x: float, y: float) -> bool:
        """True if any hitbox corner sits on solid terrain. Off-map corners never block."""

        for cx, cy in self.terrain_hitbox.corners(x, y):
            terrain = world.terrain_at_pixel(cx, cy)
            if terrain is not None and terrain in self.solid_terrain:
                return True
        return False

    def object_blocked(self, world: World, objects: Iterable[WorldObject], x: float, y: float) -> bool:
        body = self.object_hitbox.at(x, y)
        size = world.tile_size
        for obj in objects:
            if obj.solid and rects_overlap(body, (obj.x, obj.y, size, size)):
                return True
        return False
