"""Player state and the per-tick movement/animation step."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .collision import CollisionResolver
from .input import HeldInput, InputAction
from .world import World

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True, slots=True)
class PlayerState:
    """Top-left sprite position in world pixels plus animation state."""

    x: float
    y: float
    facing: Direction = Direction.DOWN
    frame: int = 0
    frame_counter: int = 0
    moving: bool = False

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


# Checked in this order every tick; the last held direction sets the facing.
_DIRECTION_STEPS: Tuple[Tuple[InputAction, Direction, int, int], ...] = (
    (InputAction.UP, Direction.UP, 0, -1),
    (InputAction.DOWN, Direction.DOWN, 0, 1),
    (InputAction.LEFT, Direction.LEFT, -1, 0),
    (InputAction.RIGHT, Direction.RIGHT, 1, 0),
)


class MovementSimulator:
    """Advance the player one tick: input, bounds clamp, collision and walk cycle."""

    def __init__(
        self,
        resolver: CollisionResolver | None = None,
        speed: float = 4.0,
        sprint_speed: float = 6.0,
        player_size: int = 64,
        animation_speed: int = 8,
        walk_frames: int = 2,
    ) -> None:
        if animation_speed < 1:
            raise ValueError("animation_speed must be at least one tick")
        if walk_frames < 1:
            raise ValueError("walk_frames must be at least one")
        self.resolver = resolver or CollisionResolver()
        self.speed = speed
        self.sprint_speed = sprint_speed
        self.player_size = player_size
        self.animation_speed = animation_speed
        self.walk_frames = walk_frames

    # ------------------------------------------------------------------ movement
    def step(self, state: PlayerState, held: HeldInput, world: World) -> PlayerState:
        speed = self.sprint_speed if held.is_held(InputAction.SPRINT) else self.speed

        dx = 0.0
        dy = 0.0
        facing = state.facing
        moving = False
        for action, direction, step_x, step_y in _DIRECTION_STEPS:
            if held.is_held(action):
                dx += step_x * speed
                dy += step_y * speed
                facing = direction
                moving = True

        new_x = max(0.0, min(state.x + dx, world.pixel_width - self.player_size))
        new_y = max(0.0, min(state.y + dy, world.pixel_height - self.player_size))
        x, y = self.resolve(world, state.x, state.y, new_x, new_y)
        frame, frame_counter = self.animate(state, moving)
        return PlayerState(x, y, facing, frame, frame_counter, moving)

    def resolve(
        self,
        world: World,
        old_x: float,
        old_y: float,
        new_x: float,
        new_y: float,
    ) -> Tuple[float, float]:
        """Try the full move, then a horizontal slide, then a vertical slide, else stay put."""

        blocked = self.resolver.is_blocked
        if not blocked(world, world.solid_objects(), new_x, new_y):
            return new_x, new_y
        if not blocked(world, world.solid_objects(), new_x, old_y):
            return new_x, old_y
        if not blocked(world, world.solid_objects(), old_x, new_y):
            return old_x, new_y
        logger.debug("Movement to (%s, %s) fully blocked", new_x, new_y)
        return old_x, old_y

    # ----------------------------------------------------------------- animation
    def animate(self, state: PlayerState, moving: bool) -> Tuple[int, int]:
        if not moving:
            return 0, 0
        frame = state.frame
        counter = state.frame_counter + 1
        if counter >= self.animation_speed:
            counter = 0
            frame = (frame + 1) % self.walk_frames
        return frame, counter
