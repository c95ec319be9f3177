"""Procedural world generation: terrain classification, smoothing and object scattering."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .content import as_float, as_int, as_pair, load_yaml
from .errors import ConfigError, InvalidDimension
from .noise import NoiseField, NoiseSource
from .world import ObjectKind, TerrainKind, World, WorldObject

logger = logging.getLogger(__name__)

TerrainGrid = List[List[TerrainKind]]


@dataclass(frozen=True)
class GenerationProfile:
    """Noise scales and classification thresholds for world generation."""

    elevation_scale: float = 0.05
    moisture_scale: float = 0.1
    river_scale: tuple[float, float] = (0.15, 0.02)
    object_scale: float = 0.2
    river_band: tuple[float, float] = (0.35, 0.45)
    lake_below: float = -0.25
    mountain_above: float = 0.5
    lowland_below: float = 0.1
    dry_below: float = 0.0
    tree_band: tuple[float, float] = (0.6, 0.65)
    isolation_threshold: int = 2

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationProfile":
        defaults = cls()
        scales = data.get("scales") or {}
        thresholds = data.get("thresholds") or {}
        smoothing = data.get("smoothing") or {}
        for section, value in (("scales", scales), ("thresholds", thresholds), ("smoothing", smoothing)):
            if not isinstance(value, dict):
                raise ConfigError(f'"{section}" must be a mapping')
        return cls(
            elevation_scale=as_float(scales, "elevation", defaults.elevation_scale),
            moisture_scale=as_float(scales, "moisture", defaults.moisture_scale),
            river_scale=as_pair(scales, "river", defaults.river_scale),
            object_scale=as_float(scales, "objects", defaults.object_scale),
            river_band=as_pair(thresholds, "river_band", defaults.river_band),
            lake_below=as_float(thresholds, "lake_below", defaults.lake_below),
            mountain_above=as_float(thresholds, "mountain_above", defaults.mountain_above),
            lowland_below=as_float(thresholds, "lowland_below", defaults.lowland_below),
            dry_below=as_float(thresholds, "dry_below", defaults.dry_below),
            tree_band=as_pair(thresholds, "tree_band", defaults.tree_band),
            isolation_threshold=as_int(smoothing, "isolation_threshold", defaults.isolation_threshold),
        )

    @classmethod
    def load(cls, path: str | Path) -> "GenerationProfile":
        return cls.from_dict(load_yaml(path))


def classify_cell(
    elevation: float,
    moisture: float,
    river: float,
    profile: GenerationProfile = GenerationProfile(),
) -> TerrainKind:
    """Pick the terrain for one cell. Rules are checked in order; first match wins."""

    river_low, river_high = profile.river_band
    if river_low < river < river_high:
        return TerrainKind.WATER
    if elevation < profile.lake_below:
        return TerrainKind.WATER
    if elevation > profile.mountain_above:
        return TerrainKind.STONE
    if elevation < profile.lowland_below and moisture < profile.dry_below:
        return TerrainKind.DIRT
    return TerrainKind.GRASS


def smooth_terrain(grid: Sequence[Sequence[TerrainKind]], isolation_threshold: int = 2) -> TerrainGrid:
    """Turn isolated interior cells into grass, leaving water untouched.

    Neighbour counts are read from ``grid`` while results go to a copy, so a
    cell never sees values smoothed earlier in the same pass.
    """

    height = len(grid)
    width = len(grid[0]) if height else 0
    smoothed = [list(row) for row in grid]
    for y in range(1, height - 1):
        for x in range(1, width - 1):
            current = grid[y][x]
            if current == TerrainKind.WATER:
                continue
            same = 0
            for dy in (-1, 0, 1):
                for dx in (-1, 0, 1):
                    if (dx or dy) and grid[y + dy][x + dx] == current:
                        same += 1
            if same <= isolation_threshold:
                smoothed[y][x] = TerrainKind.GRASS
    return smoothed


class WorldGenerator:
    """Deterministic world generator driven by four independent noise channels."""

    def __init__(
        self,
        seed: int = 1337,
        tile_size: int = 64,
        profile: Optional[GenerationProfile] = None,
        elevation: Optional[NoiseSource] = None,
        moisture: Optional[NoiseSource] = None,
        river: Optional[NoiseSource] = None,
        density: Optional[NoiseSource] = None,
    ) -> None:
        self.seed = seed
        self.tile_size = tile_size
        self.profile = profile or GenerationProfile()
        self.elevation = elevation or NoiseField.for_channel(seed, "elevation")
        self.moisture = moisture or NoiseField.for_channel(seed, "moisture")
        self.river = river or NoiseField.for_channel(seed, "river")
        self.density = density or NoiseField.for_channel(seed, "objects")

    # ---------------------------------------------------------------- generation
    def generate(self, width: int, height: int) -> World:
        if width < 1 or height < 1:
            raise InvalidDimension(width, height)

        grid = self.classify_terrain(width, height)
        grid = smooth_terrain(grid, self.profile.isolation_threshold)
        objects = self.scatter_objects(grid)
        world = World(grid, self.tile_size, objects)

        counts = world.terrain_counts()
        logger.info(
            "Generated %dx%d world (seed=%s): %s, %d objects",
            width,
            height,
            self.seed,
            ", ".join(f"{kind.name.lower()}={counts[kind]}" for kind in TerrainKind),
            len(objects),
        )
        return world

    def classify_terrain(self, width: int, height: int) -> TerrainGrid:
        p = self.profile
        river_sx, river_sy = p.river_scale
        grid: TerrainGrid = []
        for y in range(height):
            row: List[TerrainKind] = []
            for x in range(width):
                elevation = self.elevation.sample(x * p.elevation_scale, y * p.elevation_scale)
                moisture = self.moisture.sample(x * p.moisture_scale, y * p.moisture_scale)
                river = self.river.sample(x * river_sx, y * river_sy)
                row.append(classify_cell(elevation, moisture, river, p))
            grid.append(row)
        return grid

    def scatter_objects(self, grid: Sequence[Sequence[TerrainKind]]) -> List[WorldObject]:
        """Place a solid tree on every grass cell whose density sample falls in the tree band."""

        low, high = self.profile.tree_band
        scale = self.profile.object_scale
        objects: List[WorldObject] = []
        for y, row in enumerate(grid):
            for x, cell in enumerate(row):
                if cell != TerrainKind.GRASS:
                    continue
                chance = self.density.sample(x * scale, y * scale)
                if low < chance < high:
                    objects.append(
                        WorldObject(
                            id=f"obj_{len(objects)}",
                            kind=ObjectKind.TREE,
                            x=x * self.tile_size,
                            y=y * self.tile_size,
                            solid=True,
                        )
                    )
        logger.debug("Scattered %d trees", len(objects))
        return objects
