"""Top-down pygame renderer for the tile world."""

from __future__ import annotations

import math
from typing import Dict, Tuple

import pygame as pg

from .camera import CameraState
from .catalog import ObjectCatalog
from .player import Direction, PlayerState
from .simulation import SimulationState
from .world import TerrainKind, World

TERRAIN_COLORS: Dict[TerrainKind, Tuple[int, int, int]] = {
    TerrainKind.GRASS: (76, 140, 64),
    TerrainKind.DIRT: (196, 164, 112),
    TerrainKind.WATER: (64, 133, 191),
    TerrainKind.STONE: (120, 120, 130),
}

_FACING_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


class TopDownRenderer:
    """Draw terrain, the player and objects from a simulation snapshot."""

    def __init__(
        self,
        width: int,
        height: int,
        catalog: ObjectCatalog | None = None,
        tile_size: int = 64,
        player_size: int = 64,
    ) -> None:
        self.catalog = catalog or ObjectCatalog()
        self.tile_size = tile_size
        self.player_size = player_size
        self.background = (18, 20, 28)
        self._tile_cache: Dict[TerrainKind, pg.Surface] = {}
        self.width = 1
        self.height = 1
        self.resize(width, height)

    # -------------------------------------------------------------------- sizing
    def resize(self, width: int, height: int) -> None:
        self.width = max(1, width)
        self.height = max(1, height)

    # ------------------------------------------------------------------- drawing
    def render(self, surface: pg.Surface, state: SimulationState) -> None:
        surface.fill(self.background)
        self._draw_tiles(surface, state.world, state.camera)
        self._draw_player(surface, state.player, state.camera)
        # Objects go on top so tree canopies overlap the player.
        self._draw_objects(surface, state.world, state.camera)

    def visible_tiles(self, world: World, camera: CameraState) -> Tuple[range, range]:
        ts = self.tile_size
        start_x = max(0, int(camera.x // ts))
        start_y = max(0, int(camera.y // ts))
        end_x = min(start_x + math.ceil(self.width / ts) + 1, world.width)
        end_y = min(start_y + math.ceil(self.height / ts) + 1, world.height)
        return range(start_x, end_x), range(start_y, end_y)

    def _draw_tiles(self, surface: pg.Surface, world: World, camera: CameraState) -> None:
        ts = self.tile_size
        columns, rows = self.visible_tiles(world, camera)
        grid = world.grid
        for ty in rows:
            screen_y = int(ty * ts - camera.y)
            for tx in columns:
                tile = self._tile_surface(grid[ty][tx])
                surface.blit(tile, (int(tx * ts - camera.x), screen_y))

    def _tile_surface(self, kind: TerrainKind) -> pg.Surface:
        cached = self._tile_cache.get(kind)
        if cached is not None:
            return cached
        ts = self.tile_size
        tile = pg.Surface((ts, ts))
        color = TERRAIN_COLORS[kind]
        tile.fill(color)
        edge = tuple(max(0, int(c * 0.85)) for c in color)
        pg.draw.rect(tile, edge, tile.get_rect(), width=1)
        self._tile_cache[kind] = tile
        return tile

    def _draw_player(self, surface: pg.Surface, player: PlayerState, camera: CameraState) -> None:
        size = self.player_size
        bob = 2 if player.frame % 2 else 0
        left = player.x - camera.x
        top = player.y - camera.y - bob

        body = pg.Rect(int(left + size * 0.3), int(top + size * 0.375), int(size * 0.4), int(size * 0.45))
        head = (int(left + size / 2), int(top + size * 0.28))
        pg.draw.rect(surface, (60, 90, 200), body, border_radius=6)
        pg.draw.circle(surface, (240, 210, 180), head, int(size * 0.16))

        fx, fy = _FACING_VECTORS[player.facing]
        tip = (head[0] + fx * size * 0.3, head[1] + fy * size * 0.3)
        pg.draw.line(surface, (255, 230, 150), head, tip, 3)

    def _draw_objects(self, surface: pg.Surface, world: World, camera: CameraState) -> None:
        ts = self.tile_size
        for obj in world.objects:
            screen_x = obj.x - camera.x
            screen_y = obj.y - camera.y
            if screen_x + ts < 0 or screen_x > self.width or screen_y + ts < 0 or screen_y > self.height:
                continue
            spec = self.catalog[obj.kind]
            w, h = spec.size
            ox, oy = spec.offset
            rect = pg.Rect(int(screen_x + ox), int(screen_y + oy), w, h)
            pg.draw.ellipse(surface, spec.color, rect)
            if obj.solid:
                outline = tuple(max(0, int(c * 0.6)) for c in spec.color)
                pg.draw.ellipse(surface, outline, rect, width=2)
