"""Exception types raised by the tile world engine."""

from __future__ import annotations


class TileWorldError(Exception):
    """Base class for all engine errors."""


class InvalidDimension(TileWorldError, ValueError):
    """World dimensions must both be at least one tile."""

    def __init__(self, width: int, height: int) -> None:
        super().__init__(f"World dimensions must be >= 1, got {width}x{height}")
        self.width = width
        self.height = height


class DuplicateObjectId(TileWorldError, KeyError):
    def __init__(self, object_id: str) -> None:
        super().__init__(object_id)
        self.object_id = object_id

    def __str__(self) -> str:
        return f"Object id already present: {self.object_id!r}"


class ConfigError(TileWorldError, ValueError):
    """A content file could not be interpreted."""
