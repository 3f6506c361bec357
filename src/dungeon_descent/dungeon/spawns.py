from __future__ import annotations

import logging
from typing import Iterable, List

from ..exceptions import SpawnPoolExhaustedError
from ..rng import RandomSource
from .map import DungeonMap, Point
from .tiles import TileType

logger = logging.getLogger(__name__)


class SpawnPool:
    """Unused FLOOR positions of one level.

    Every entity placed on the level is drawn from the pool and the point is
    removed, so no two spawns ever share a tile.
    """

    def __init__(self, points: Iterable[Point]) -> None:
        self._points: List[Point] = list(points)

    @classmethod
    def from_map(cls, level: DungeonMap) -> "SpawnPool":
        pool = cls(level.positions_of(TileType.FLOOR))
        logger.debug("Spawn pool for %r has %d points", level, len(pool))
        return pool

    def __len__(self) -> int:
        return len(self._points)

    def __contains__(self, p: object) -> bool:
        return p in self._points

    @property
    def points(self) -> List[Point]:
        return list(self._points)

    def draw(self, rng: RandomSource) -> Point:
        """Remove and return a uniformly chosen point."""
        if not self._points:
            raise SpawnPoolExhaustedError("Spawn pool is empty; cannot place another entity")
        return self._points.pop(rng.randrange(len(self._points)))
