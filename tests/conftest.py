"""Shared fixtures and noise doubles for the engine tests."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Sequence

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
GAME_ROOT = REPO_ROOT / "tileworld"
if str(GAME_ROOT) not in sys.path:
    sys.path.insert(0, str(GAME_ROOT))

from engine.world import World


class ConstantNoise:
    """Noise source that returns the same value everywhere."""

    def __init__(self, value: float) -> None:
        self.value = value

    def sample(self, x: float, y: float) -> float:
        return self.value


class FunctionNoise:
    def __init__(self, fn: Callable[[float, float], float]) -> None:
        self.fn = fn

    def sample(self, x: float, y: float) -> float:
        return self.fn(x, y)


class FixedWorldGenerator:
    """Stands in for WorldGenerator by returning worlds built from glyph rows."""

    def __init__(self, lines: Sequence[str], tile_size: int = 64) -> None:
        self.lines = list(lines)
        self.tile_size = tile_size
        self.calls = 0

    def generate(self, width: int, height: int) -> World:
        self.calls += 1
        return World.from_lines(self.lines, self.tile_size)


def grass_lines(width: int, height: int) -> list[str]:
    return ["G" * width for _ in range(height)]


@pytest.fixture
def open_world() -> World:
    """A 20x20 all-grass world with 64px tiles."""

    return World.from_lines(grass_lines(20, 20), tile_size=64)
