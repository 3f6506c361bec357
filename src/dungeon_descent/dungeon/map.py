from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from .tiles import TileType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Point":
        return Point(self.x + dx, self.y + dy)


class DungeonMap:
    """
    The level tile grid. Width and height are fixed for the level's lifetime;
    the only tile change after generation is a CHEST turning into FLOOR.
    All tile reads are bounds-checked: reading outside the grid is a defect in
    the caller and raises IndexError rather than wrapping or clamping.
    """

    def __init__(self, width: int, height: int, default: TileType = TileType.WALL) -> None:
        if width < 3 or height < 3:
            raise ValueError("Map must be at least 3x3 to maintain wall borders")
        self.width = width
        self.height = height
        self._tiles: List[List[TileType]] = [
            [default for _ in range(width)] for _ in range(height)
        ]

    # ---- Safety / Bounds -------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_border(self, x: int, y: int) -> bool:
        return x in (0, self.width - 1) or y in (0, self.height - 1)

    def get_tile(self, x: int, y: int) -> TileType:
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile out of bounds: ({x},{y}) not in [0,{self.width})x[0,{self.height})")
        return self._tiles[y][x]

    def set_tile(self, x: int, y: int, t: TileType) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile out of bounds: ({x},{y}) not in [0,{self.width})x[0,{self.height})")
        self._tiles[y][x] = t

    def __getitem__(self, p: Point) -> TileType:
        return self.get_tile(p.x, p.y)

    # ---- Query -----------------------------------------------------------
    def is_walkable(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return self._tiles[y][x].is_walkable

    def cells(self) -> Iterator[Tuple[Point, TileType]]:
        """Yield every cell column by column (x outer, y inner)."""
        for x in range(self.width):
            for y in range(self.height):
                yield Point(x, y), self._tiles[y][x]

    def positions_of(self, tile: TileType) -> List[Point]:
        return [p for p, t in self.cells() if t is tile]

    def count(self, tile: TileType) -> int:
        return sum(1 for _, t in self.cells() if t is tile)

    def consume_chest(self, p: Point) -> None:
        """Turn an opened chest into plain floor."""
        if self.get_tile(p.x, p.y) is not TileType.CHEST:
            raise ValueError(f"No chest to consume at ({p.x},{p.y})")
        self._tiles[p.y][p.x] = TileType.FLOOR
        logger.debug("Chest at (%d,%d) consumed", p.x, p.y)

    # ---- Export / Compare -----------------------------------------------
    @classmethod
    def from_lines(cls, rows: Sequence[str]) -> "DungeonMap":
        """Build a map from glyph rows ('#', '.', 'C', '>') for tests and tools."""
        if not rows:
            raise ValueError("rows must not be empty")
        width = len(rows[0])
        for r in rows:
            if len(r) != width:
                raise ValueError("All rows must be same width")
        m = cls(width, len(rows))
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                m.set_tile(x, y, TileType.from_glyph(ch))
        return m

    def to_str_lines(self) -> List[str]:
        return ["".join(t.glyph for t in row) for row in self._tiles]

    def snapshot(self) -> Tuple[Tuple[TileType, ...], ...]:
        """
        Immutable copy of the tiles, row-major (``snapshot[y][x]``).
        """
        return tuple(tuple(row) for row in self._tiles)

    def __repr__(self) -> str:
        return f"DungeonMap({self.width}x{self.height})"
