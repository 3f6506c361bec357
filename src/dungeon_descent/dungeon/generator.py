from __future__ import annotations

import logging

from ..config import GameConfig
from ..exceptions import LevelGenerationError
from ..rng import RandomSource
from .map import DungeonMap
from .tiles import TileType

logger = logging.getLogger(__name__)

WALL_ROLL = 90
STAIRS_ROLL = 70
CHEST_ROLL = 15


class LevelGenerator:
    """Per-depth level generator.

    A single linear scan over the grid, column by column:
    - Solid wall border
    - Each interior cell rolls [0, 100): >= 90 wall (floor on the final
      depth), [70, 90) the one staircase if none placed yet, < 15 a chest
      while the depth's quota lasts, anything else floor
    - Once a chest roll finds the quota already reached, chest rolls yield
      floor for the rest of the level

    There is no reachability check between spawn points and the stairs.
    The shared random source is injected so a seeded run is reproducible.
    """

    def __init__(self, rng: RandomSource, config: GameConfig) -> None:
        self.rng = rng
        self.config = config

    def required_floor(self, depth: int) -> int:
        """Floor tiles needed to spawn every monster plus the player."""
        return self.config.monster_count(depth) + 1

    def generate(self, depth: int) -> DungeonMap:
        if depth < 1:
            raise ValueError(f"depth must be >= 1, got {depth}")
        needed = self.required_floor(depth)
        for attempt in range(1, self.config.max_generation_attempts + 1):
            level = self._generate_once(depth)
            floors = level.count(TileType.FLOOR)
            if floors > needed:
                return level
            logger.warning(
                "Depth %d attempt %d produced %d floor tiles (need > %d); regenerating",
                depth,
                attempt,
                floors,
                needed,
            )
        raise LevelGenerationError(
            f"No level with enough floor for depth {depth} after "
            f"{self.config.max_generation_attempts} attempts"
        )

    def _generate_once(self, depth: int) -> DungeonMap:
        width, height = self.config.width, self.config.height
        final = self.config.is_final_depth(depth)
        max_chests = self.config.chest_quota(depth)
        logger.info("Generating depth %d (%dx%d, chest quota %d)", depth, width, height, max_chests)

        level = DungeonMap(width, height, default=TileType.WALL)
        stairs_placed = final
        chests_closed = False
        chest_count = 0

        for x in range(1, width - 1):
            for y in range(1, height - 1):
                roll = self.rng.randrange(100)
                if roll >= WALL_ROLL:
                    tile = TileType.FLOOR if final else TileType.WALL
                elif roll >= STAIRS_ROLL and not stairs_placed:
                    tile = TileType.STAIRS
                    stairs_placed = True
                elif roll < CHEST_ROLL and not chests_closed:
                    if chest_count >= max_chests:
                        tile = TileType.FLOOR
                        chests_closed = True
                    else:
                        tile = TileType.CHEST
                        chest_count += 1
                else:
                    tile = TileType.FLOOR
                level.set_tile(x, y, tile)

        logger.debug("Generated depth %d:\n%s", depth, "\n".join(level.to_str_lines()))
        return level
