"""Entry point for the top-down tile world explorer."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Set

import pygame as pg

from engine.camera import CameraController
from engine.catalog import ObjectCatalog
from engine.collision import CollisionResolver
from engine.errors import TileWorldError
from engine.input import HeldInput, KeyBindings
from engine.player import MovementSimulator
from engine.render import TopDownRenderer
from engine.simulation import Simulation
from engine.worldgen import GenerationProfile, WorldGenerator
import settings as S

logger = logging.getLogger("tileworld")


@dataclass
class GameConfig:
    resolution: tuple[int, int]
    fps_limit: int
    tile_size: int
    world_size: tuple[int, int]
    seed: int
    player_size: int
    speed: float
    sprint_speed: float
    animation_speed: int
    content_dir: Path


class GameApp:
    """High-level application wrapper providing lifecycle management."""

    def __init__(self, config: GameConfig) -> None:
        pg.init()
        pg.display.set_caption("Tile World")
        self.screen = pg.display.set_mode(config.resolution, pg.RESIZABLE)
        self.clock = pg.time.Clock()
        self.config = config

        content = config.content_dir
        self.profile = GenerationProfile.load(content / "world" / "terrain.yaml")
        self.catalog = ObjectCatalog.load(content / "world" / "objects.yaml")
        self.bindings = KeyBindings.load(content / "input" / "bindings.yaml")

        simulator = MovementSimulator(
            CollisionResolver(),
            speed=config.speed,
            sprint_speed=config.sprint_speed,
            player_size=config.player_size,
            animation_speed=config.animation_speed,
        )
        self.seed = config.seed
        self.simulation = Simulation(
            self._make_generator(self.seed),
            *config.world_size,
            viewport=config.resolution,
            simulator=simulator,
            camera=CameraController(config.tile_size),
            catalog=self.catalog,
        )
        self.renderer = TopDownRenderer(
            *config.resolution,
            catalog=self.catalog,
            tile_size=config.tile_size,
            player_size=config.player_size,
        )
        self._held_keys: Set[str] = set()

    def _make_generator(self, seed: int) -> WorldGenerator:
        return WorldGenerator(seed=seed, tile_size=self.config.tile_size, profile=self.profile)

    # ----------------------------------------------------------------- lifecycle
    def run(self) -> None:
        try:
            while True:
                self.clock.tick(self.config.fps_limit)
                if not self._process_events():
                    break
                state = self.simulation.tick(HeldInput(self._held_keys, self.bindings))
                self.renderer.render(self.screen, state)
                pg.display.flip()
                fps = self.clock.get_fps()
                pg.display.set_caption(f"Tile World :: seed {self.seed} :: FPS {fps:5.1f}")
        finally:
            pg.quit()

    # ------------------------------------------------------------------- internals
    def _process_events(self) -> bool:
        for event in pg.event.get():
            if event.type == pg.QUIT:
                return False
            if event.type == pg.VIDEORESIZE:
                self.screen = pg.display.set_mode(event.size, pg.RESIZABLE)
                self.renderer.resize(*event.size)
                self.simulation.resize(event.size)
            if event.type == pg.KEYDOWN:
                if event.key == pg.K_ESCAPE:
                    return False
                if event.key == pg.K_r:
                    self._regenerate()
                self._held_keys.add(pg.key.name(event.key).lower())
            if event.type == pg.KEYUP:
                self._held_keys.discard(pg.key.name(event.key).lower())
            if event.type == pg.WINDOWFOCUSLOST:
                self._held_keys.clear()
        return True

    def _regenerate(self) -> None:
        seed = self.seed + 1
        try:
            self.simulation.regenerate(*self.config.world_size, generator=self._make_generator(seed))
        except TileWorldError as exc:
            logger.error("Could not regenerate world: %s", exc)
            return
        self.seed = seed


def build_config() -> GameConfig:
    resolution = (getattr(S, "WINDOW_W", 800), getattr(S, "WINDOW_H", 600))
    fps_limit = getattr(S, "FPS", 60)
    tile_size = getattr(S, "TILE_SIZE", 64)
    world_size = (getattr(S, "WORLD_W", 150), getattr(S, "WORLD_H", 150))
    seed = getattr(S, "SEED", 1337)
    player_size = getattr(S, "PLAYER_SIZE", 64)
    speed = getattr(S, "PLAYER_SPEED", 4)
    sprint_speed = getattr(S, "SPRINT_SPEED", 6)
    animation_speed = getattr(S, "ANIMATION_SPEED", 8)
    content_dir = Path(getattr(S, "CONTENT_DIR", Path(__file__).resolve().parent / "content"))
    return GameConfig(
        resolution,
        fps_limit,
        tile_size,
        world_size,
        seed,
        player_size,
        speed,
        sprint_speed,
        animation_speed,
        content_dir,
    )


def main(argv: Iterable[str] | None = None) -> int:
    logging.basicConfig(
        level=getattr(S, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = build_config()
    try:
        app = GameApp(config)
    except TileWorldError as exc:
        logger.error("Failed to start: %s", exc)
        return 1
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
