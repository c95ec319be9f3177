"""Headless smoke test for the top-down renderer."""

from __future__ import annotations

from typing import Iterator

import pygame as pg
import pytest

from engine.camera import CameraState
from engine.player import PlayerState
from engine.render import TERRAIN_COLORS, TopDownRenderer
from engine.simulation import SimulationState
from engine.world import ObjectKind, TerrainKind, World, WorldObject


@pytest.fixture(scope="module")
def pygame_headless() -> Iterator[None]:
    """Initialise pygame in headless mode for the duration of the module."""

    pg.init()
    try:
        yield
    finally:
        pg.quit()


def _state(camera: CameraState) -> SimulationState:
    world = World.from_lines(["WGGGG", "GGGGG", "GGSGG", "GGGGG"], tile_size=64)
    world.add_object(WorldObject("tree", ObjectKind.TREE, 192, 128))
    world.add_object(WorldObject("bush", ObjectKind.BUSH, 64, 192, solid=False))
    return SimulationState(world, PlayerState(200, 100), camera, (320, 240))


def test_tiles_are_drawn_at_camera_offset(pygame_headless: None) -> None:
    renderer = TopDownRenderer(320, 240, tile_size=64)
    surface = pg.Surface((320, 240))
    renderer.render(surface, _state(CameraState(0, 0)))
    assert tuple(surface.get_at((10, 10)))[:3] == TERRAIN_COLORS[TerrainKind.WATER]
    assert tuple(surface.get_at((100, 10)))[:3] == TERRAIN_COLORS[TerrainKind.GRASS]


def test_visible_tile_range_is_clipped_to_world(pygame_headless: None) -> None:
    renderer = TopDownRenderer(320, 240, tile_size=64)
    world = _state(CameraState()).world
    columns, rows = renderer.visible_tiles(world, CameraState(64, 0))
    assert (columns.start, columns.stop) == (1, 5)
    assert (rows.start, rows.stop) == (0, 4)


def test_render_after_resize(pygame_headless: None) -> None:
    renderer = TopDownRenderer(320, 240, tile_size=64)
    renderer.resize(160, 120)
    surface = pg.Surface((160, 120))
    renderer.render(surface, _state(CameraState(32, 16)))
    assert renderer.visible_tiles(_state(CameraState()).world, CameraState(0, 0))[0] == range(0, 4)
