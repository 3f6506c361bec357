from enum import Enum
from typing import Tuple


class Direction(Enum):
    """Cardinal movement; y grows downwards."""

    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value

    @classmethod
    def from_key(cls, key: str) -> "Direction":
        try:
            return _KEYS[key.lower()]
        except KeyError:
            raise ValueError(f"Not a movement key: {key!r}") from None


# Order in which a monster's random roll maps to a direction.
MONSTER_DIRECTIONS: Tuple[Direction, ...] = (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)

_KEYS = {
    "w": Direction.UP,
    "up": Direction.UP,
    "d": Direction.RIGHT,
    "right": Direction.RIGHT,
    "s": Direction.DOWN,
    "down": Direction.DOWN,
    "a": Direction.LEFT,
    "left": Direction.LEFT,
}
