"""Camera that follows the player and stays inside the world."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class CameraState:
    x: float = 0.0
    y: float = 0.0

    @property
    def offset(self) -> Tuple[float, float]:
        return (self.x, self.y)


def clamp_axis(value: float, viewport: float, world: float) -> float:
    """Clamp one camera axis to ``[0, world - viewport]``.

    When the world is narrower than the viewport the range is empty and the
    camera pins to 0.
    """

    upper = world - viewport
    if upper <= 0:
        return 0.0
    return max(0.0, min(value, upper))


class CameraController:
    """Center the viewport on the player's tile anchor."""

    def __init__(self, tile_size: int = 64) -> None:
        self.tile_size = tile_size

    def update(
        self,
        player_position: Tuple[float, float],
        viewport_size: Tuple[int, int],
        world_size: Tuple[int, int],
    ) -> CameraState:
        px, py = player_position
        view_w, view_h = viewport_size
        world_w, world_h = world_size
        half_tile = self.tile_size / 2
        x = px - view_w / 2 + half_tile
        y = py - view_h / 2 + half_tile
        return CameraState(clamp_axis(x, view_w, world_w), clamp_axis(y, view_h, world_h))
