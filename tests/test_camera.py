"""Camera centring and clamping."""

from __future__ import annotations

import pytest

from engine.camera import CameraController, CameraState, clamp_axis


def test_camera_at_origin_clamps_to_zero() -> None:
    camera = CameraController(tile_size=64).update((0, 0), (800, 600), (9600, 9600))
    assert camera == CameraState(0, 0)


def test_camera_at_far_corner_clamps_to_world_edge() -> None:
    camera = CameraController(tile_size=64).update((9600 - 64, 9600 - 64), (800, 600), (9600, 9600))
    assert camera.offset == (9600 - 800, 9600 - 600)


def test_camera_centres_player_tile() -> None:
    camera = CameraController(tile_size=64).update((2000, 1500), (800, 600), (9600, 9600))
    assert camera.offset == (2000 - 400 + 32, 1500 - 300 + 32)


def test_axes_clamp_independently() -> None:
    camera = CameraController(tile_size=64).update((0, 5000), (800, 600), (9600, 9600))
    assert camera.offset == (0, 5000 - 300 + 32)


@pytest.mark.parametrize("player", [(0, 0), (100, 50), (500, 500)])
def test_world_smaller_than_viewport_pins_to_zero(player) -> None:
    camera = CameraController(tile_size=64).update(player, (800, 600), (512, 384))
    assert camera.offset == (0, 0)


def test_world_exactly_viewport_sized() -> None:
    assert clamp_axis(250.0, 800, 800) == 0.0
    assert clamp_axis(-5.0, 800, 1000) == 0.0
    assert clamp_axis(150.0, 800, 1000) == 150.0
    assert clamp_axis(900.0, 800, 1000) == 200.0
