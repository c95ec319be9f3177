"""Per-tick movement: input, clamping, axis-priority collision and the walk cycle."""

from __future__ import annotations

from typing import Iterable

import pytest

from conftest import grass_lines
from engine.input import HeldInput
from engine.player import Direction, MovementSimulator, PlayerState
from engine.world import World


def _world_with_stone(cells: Iterable[tuple[int, int]], size: int = 20, tile_size: int = 16) -> World:
    rows = [list(row) for row in grass_lines(size, size)]
    for x, y in cells:
        rows[y][x] = "S"
    return World.from_lines(["".join(row) for row in rows], tile_size=tile_size)


def _held(*keys: str) -> HeldInput:
    return HeldInput(keys)


# ------------------------------------------------------------------ axis fallback
def test_diagonal_blocked_prefers_horizontal_slide() -> None:
    world = _world_with_stone([(8, 8)])
    state = MovementSimulator().step(PlayerState(100, 100), _held("d", "s"), world)
    assert (state.x, state.y) == (104, 100)


def test_falls_back_to_vertical_slide() -> None:
    world = _world_with_stone([(8, 8), (8, 7)])
    state = MovementSimulator().step(PlayerState(100, 100), _held("d", "s"), world)
    assert (state.x, state.y) == (100, 104)


def test_fully_blocked_stays_put() -> None:
    world = _world_with_stone([(8, 8), (8, 7), (7, 8)])
    state = MovementSimulator().step(PlayerState(100, 100), _held("right", "down"), world)
    assert (state.x, state.y) == (100, 100)
    assert state.moving


def test_unblocked_diagonal_moves_both_axes() -> None:
    world = _world_with_stone([])
    state = MovementSimulator().step(PlayerState(100, 100), _held("d", "s"), world)
    assert (state.x, state.y) == (104, 104)


# ------------------------------------------------------------------------ input
def test_sprint_uses_sprint_speed(open_world: World) -> None:
    simulator = MovementSimulator(speed=4, sprint_speed=6)
    state = simulator.step(PlayerState(200, 200), _held("a", "left shift"), open_world)
    assert (state.x, state.y) == (194, 200)


def test_sprint_alone_does_not_move(open_world: World) -> None:
    state = MovementSimulator().step(PlayerState(200, 200), _held("right shift"), open_world)
    assert (state.x, state.y) == (200, 200)
    assert not state.moving


def test_either_alias_moves(open_world: World) -> None:
    simulator = MovementSimulator()
    assert simulator.step(PlayerState(200, 200), _held("w"), open_world).y == 196
    assert simulator.step(PlayerState(200, 200), _held("up"), open_world).y == 196
    assert simulator.step(PlayerState(200, 200), _held("w", "up"), open_world).y == 196


@pytest.mark.parametrize(
    ("keys", "facing"),
    [
        (("w",), Direction.UP),
        (("w", "s"), Direction.DOWN),
        (("w", "a"), Direction.LEFT),
        (("s", "a"), Direction.LEFT),
        (("a", "d"), Direction.RIGHT),
        (("w", "s", "a", "d"), Direction.RIGHT),
        (("d", "w"), Direction.RIGHT),
    ],
)
def test_facing_follows_fixed_check_order(open_world: World, keys, facing) -> None:
    state = MovementSimulator().step(PlayerState(200, 200), _held(*keys), open_world)
    assert state.facing is facing


def test_opposite_keys_cancel_but_still_walk(open_world: World) -> None:
    state = MovementSimulator().step(PlayerState(200, 200, frame_counter=7), _held("w", "s"), open_world)
    assert (state.x, state.y) == (200, 200)
    assert state.moving
    assert state.frame == 1


def test_idle_keeps_facing(open_world: World) -> None:
    state = MovementSimulator().step(PlayerState(200, 200, facing=Direction.LEFT), _held(), open_world)
    assert state.facing is Direction.LEFT
    assert not state.moving


# ------------------------------------------------------------------------ bounds
def test_clamped_to_world_bounds(open_world: World) -> None:
    simulator = MovementSimulator()
    corner = simulator.step(PlayerState(0, 0), _held("w", "a"), open_world)
    assert (corner.x, corner.y) == (0, 0)

    limit = open_world.pixel_width - simulator.player_size
    edge = simulator.step(PlayerState(limit - 2, 100), _held("d"), open_world)
    assert edge.x == limit


# --------------------------------------------------------------------- animation
def test_walk_cycle_over_sixteen_ticks(open_world: World) -> None:
    simulator = MovementSimulator(animation_speed=8)
    state = PlayerState(200, 200)
    frames = []
    for _ in range(16):
        state = simulator.step(state, _held("d"), open_world)
        frames.append((state.frame, state.frame_counter))

    assert frames[6] == (0, 7)
    assert frames[7] == (1, 0)
    assert [frame for frame, _ in frames[7:15]] == [1] * 8
    assert frames[15] == (0, 0)
    assert state.x == 200 + 16 * 4


def test_release_resets_animation(open_world: World) -> None:
    simulator = MovementSimulator()
    state = PlayerState(200, 200)
    for _ in range(10):
        state = simulator.step(state, _held("s"), open_world)
    assert (state.frame, state.frame_counter) == (1, 2)

    state = simulator.step(state, _held(), open_world)
    assert (state.frame, state.frame_counter) == (0, 0)
    assert state.facing is Direction.DOWN


def test_step_does_not_mutate_input_state(open_world: World) -> None:
    before = PlayerState(200, 200)
    MovementSimulator().step(before, _held("d"), open_world)
    assert before == PlayerState(200, 200)


@pytest.mark.parametrize("kwargs", [{"animation_speed": 0}, {"walk_frames": 0}])
def test_invalid_animation_settings(kwargs) -> None:
    with pytest.raises(ValueError):
        MovementSimulator(**kwargs)
