"""Explicitly owned simulation state and the tick that advances it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterator, Optional, Tuple

from .camera import CameraController, CameraState
from .catalog import ObjectCatalog
from .errors import TileWorldError
from .input import HeldInput
from .player import MovementSimulator, PlayerState
from .world import ObjectKind, World, WorldObject
from .worldgen import WorldGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationState:
    """Everything the renderer needs for one frame."""

    world: World
    player: PlayerState
    camera: CameraState
    viewport: Tuple[int, int]


class Simulation:
    """Owns the world, player and camera and advances them once per tick."""

    def __init__(
        self,
        generator: WorldGenerator,
        width: int,
        height: int,
        viewport: Tuple[int, int] = (800, 600),
        simulator: Optional[MovementSimulator] = None,
        camera: Optional[CameraController] = None,
        catalog: Optional[ObjectCatalog] = None,
        spawn: Optional[Tuple[float, float]] = None,
    ) -> None:
        self.generator = generator
        self.simulator = simulator or MovementSimulator()
        self.camera = camera or CameraController(generator.tile_size)
        self.catalog = catalog or ObjectCatalog()
        self._placed = 0

        world = generator.generate(width, height)
        if spawn is None:
            half = self.simulator.player_size / 2
            spawn = (viewport[0] / 2 + half, viewport[1] / 2 + half)
        player = PlayerState(*self.spawn_position(world, spawn))
        self._state = self.advance_camera(SimulationState(world, player, CameraState(), viewport))

    # ------------------------------------------------------------------- access
    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def world(self) -> World:
        return self._state.world

    @property
    def player(self) -> PlayerState:
        return self._state.player

    # --------------------------------------------------------------------- tick
    def advance(self, state: SimulationState, held: HeldInput) -> SimulationState:
        """Return the state one tick after ``state`` without touching ``self``."""

        player = self.simulator.step(state.player, held, state.world)
        return self.advance_camera(replace(state, player=player))

    def advance_camera(self, state: SimulationState) -> SimulationState:
        world = state.world
        camera = self.camera.update(
            state.player.position,
            state.viewport,
            (world.pixel_width, world.pixel_height),
        )
        return replace(state, camera=camera)

    def tick(self, held: HeldInput) -> SimulationState:
        self._state = self.advance(self._state, held)
        return self._state

    def resize(self, viewport: Tuple[int, int]) -> SimulationState:
        width, height = viewport
        self._state = self.advance_camera(replace(self._state, viewport=(max(1, width), max(1, height))))
        return self._state

    # ------------------------------------------------------------- regeneration
    def regenerate(self, width: int, height: int, generator: Optional[WorldGenerator] = None) -> World:
        """Build a new world and swap it in once complete.

        If generation fails the current world stays in place and the error
        propagates to the caller.
        """

        generator = generator or self.generator
        try:
            world = generator.generate(width, height)
        except TileWorldError:
            logger.warning("Regeneration to %sx%s failed; keeping current world", width, height)
            raise

        player = self._state.player
        x, y = self.spawn_position(world, player.position)
        self.generator = generator
        self._state = self.advance_camera(
            replace(self._state, world=world, player=replace(player, x=x, y=y))
        )
        return world

    # ------------------------------------------------------------------ objects
    def add_object(self, obj: WorldObject) -> None:
        self._state.world.add_object(obj)

    def remove_object(self, object_id: str) -> bool:
        return self._state.world.remove_object(object_id)

    def place_object(self, kind: ObjectKind, tile_x: int, tile_y: int) -> WorldObject:
        """Create an object of ``kind`` on a tile with a fresh id and add it."""

        world = self._state.world
        if not world.is_within(tile_x, tile_y):
            raise ValueError(f"Tile ({tile_x}, {tile_y}) is outside the world")
        object_id = self._next_object_id(world)
        obj = WorldObject(
            id=object_id,
            kind=kind,
            x=tile_x * world.tile_size,
            y=tile_y * world.tile_size,
            solid=self.catalog.is_solid(kind),
            growth_stage=0 if kind == ObjectKind.CROP else None,
        )
        world.add_object(obj)
        return obj

    def _next_object_id(self, world: World) -> str:
        while True:
            object_id = f"placed_{self._placed}"
            self._placed += 1
            if world.object(object_id) is None:
                return object_id

    # -------------------------------------------------------------------- spawn
    def spawn_position(self, world: World, preferred: Tuple[float, float]) -> Tuple[float, float]:
        """Nearest unblocked position to ``preferred``, searching outward one tile ring at a time."""

        size = self.simulator.player_size
        max_x = max(0.0, world.pixel_width - size)
        max_y = max(0.0, world.pixel_height - size)
        start_x = max(0.0, min(float(preferred[0]), max_x))
        start_y = max(0.0, min(float(preferred[1]), max_y))

        resolver = self.simulator.resolver
        step = world.tile_size
        for dx, dy in self._ring_offsets(max(world.width, world.height)):
            x = max(0.0, min(start_x + dx * step, max_x))
            y = max(0.0, min(start_y + dy * step, max_y))
            if not resolver.is_blocked(world, world.solid_objects(), x, y):
                return x, y
        logger.warning("No open spawn found near (%s, %s)", start_x, start_y)
        return start_x, start_y

    @staticmethod
    def _ring_offsets(max_radius: int) -> Iterator[Tuple[int, int]]:
        yield 0, 0
        for radius in range(1, max_radius + 1):
            for dy in range(-radius, radius + 1):
                for dx in range(-radius, radius + 1):
                    if max(abs(dx), abs(dy)) == radius:
                        yield dx, dy
