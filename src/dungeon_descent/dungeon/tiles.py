from enum import Enum
from typing import Tuple


class TileType(Enum):
    """Dungeon tile kinds.

    - WALL: Non-walkable obstacle; every border cell is a wall
    - FLOOR: Walkable open tile; the only kind entities are spawned on
    - CHEST: Walkable tile that yields a reward and becomes FLOOR when entered
    - STAIRS: Walkable tile that triggers descent to the next depth
    """

    WALL = 0
    FLOOR = 1
    CHEST = 2
    STAIRS = 3

    @property
    def is_walkable(self) -> bool:
        return self is not TileType.WALL

    @property
    def glyph(self) -> str:
        """A single-character visualization used by the console view and logs."""
        return _GLYPHS[self]

    @property
    def color(self) -> Tuple[int, int, int]:
        """Default RGB color for 2D rendering (Arcade)."""
        return {
            TileType.WALL: (40, 40, 48),
            TileType.FLOOR: (150, 150, 150),
            TileType.CHEST: (170, 110, 40),
            TileType.STAIRS: (200, 160, 40),
        }[self]

    @classmethod
    def from_glyph(cls, ch: str) -> "TileType":
        for tile, glyph in _GLYPHS.items():
            if glyph == ch:
                return tile
        raise ValueError(f"Unknown tile glyph: {ch!r}")


_GLYPHS = {
    TileType.WALL: "#",
    TileType.FLOOR: ".",
    TileType.CHEST: "C",
    TileType.STAIRS: ">",
}
