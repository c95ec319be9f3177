"""Seeded 2D simplex noise used to drive world generation."""

from __future__ import annotations

import math
import random
from typing import List, Protocol, Tuple

_F2 = 0.5 * (math.sqrt(3.0) - 1.0)
_G2 = (3.0 - math.sqrt(3.0)) / 6.0

_GRADIENTS: Tuple[Tuple[int, int], ...] = (
    (1, 1), (-1, 1), (1, -1), (-1, -1),
    (1, 0), (-1, 0), (1, 0), (-1, 0),
    (0, 1), (0, -1), (0, 1), (0, -1),
)


class NoiseSource(Protocol):
    """Anything that maps a 2D coordinate to a value in ``[-1, 1]``."""

    def sample(self, x: float, y: float) -> float: ...


class NoiseField:
    """Coherent simplex noise with its own permutation table.

    Two fields built from the same seed produce identical samples; fields with
    different seeds are uncorrelated, which is how independent channels
    (elevation, moisture, rivers, object density) are obtained.
    """

    __slots__ = ("seed", "_perm", "_perm_mod12")

    def __init__(self, seed: int | str = 0) -> None:
        self.seed = seed
        rng = random.Random(seed)
        table = list(range(256))
        rng.shuffle(table)
        self._perm: List[int] = table + table
        self._perm_mod12: List[int] = [value % 12 for value in self._perm]

    @classmethod
    def for_channel(cls, seed: int, channel: str) -> "NoiseField":
        """Derive an independently seeded field for a named channel."""

        return cls(f"{seed}:{channel}")

    def sample(self, x: float, y: float) -> float:
        skew = (x + y) * _F2
        i = math.floor(x + skew)
        j = math.floor(y + skew)
        unskew = (i + j) * _G2
        x0 = x - (i - unskew)
        y0 = y - (j - unskew)

        # Which of the two simplices of the skewed cell we are in.
        if x0 > y0:
            i1, j1 = 1, 0
        else:
            i1, j1 = 0, 1

        x1 = x0 - i1 + _G2
        y1 = y0 - j1 + _G2
        x2 = x0 - 1.0 + 2.0 * _G2
        y2 = y0 - 1.0 + 2.0 * _G2

        ii = i & 255
        jj = j & 255
        perm = self._perm
        mod12 = self._perm_mod12
        g0 = mod12[ii + perm[jj]]
        g1 = mod12[ii + i1 + perm[jj + j1]]
        g2 = mod12[ii + 1 + perm[jj + 1]]

        total = (
            self._corner(g0, x0, y0)
            + self._corner(g1, x1, y1)
            + self._corner(g2, x2, y2)
        )
        return max(-1.0, min(1.0, 70.0 * total))

    @staticmethod
    def _corner(gradient: int, x: float, y: float) -> float:
        falloff = 0.5 - x * x - y * y
        if falloff < 0.0:
            return 0.0
        gx, gy = _GRADIENTS[gradient]
        falloff *= falloff
        return falloff * falloff * (gx * x + gy * y)

    def __repr__(self) -> str:
        return f"NoiseField(seed={self.seed!r})"
