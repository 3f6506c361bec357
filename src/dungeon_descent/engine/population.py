from __future__ import annotations

import logging
from typing import List, Optional

from ..config import GameConfig
from ..dungeon.map import Point
from ..dungeon.spawns import SpawnPool
from ..rng import RandomSource
from .entities import Entity, MonsterRoster, Role

logger = logging.getLogger(__name__)


class PopulationSpawner:
    """Creates and places the player and the monsters of a level.

    Every placement draws a point out of the level's SpawnPool, so entities
    never share a starting tile within one level.
    """

    def __init__(self, rng: RandomSource, config: GameConfig) -> None:
        self.rng = rng
        self.config = config

    def make_monster(self, depth: int, p: Point) -> Entity:
        if self.config.is_final_depth(depth):
            stats = self.config.boss
            return Entity(Role.MONSTER, stats.max_health, p.x, p.y, damage=stats.damage, boss=True)
        stats = self.config.monster
        return Entity(Role.MONSTER, stats.max_health, p.x, p.y, damage=stats.damage)

    def make_player(self, p: Point) -> Entity:
        stats = self.config.player
        return Entity(Role.PLAYER, stats.max_health, p.x, p.y, damage=stats.damage)

    def spawn_monsters(self, depth: int, pool: SpawnPool) -> MonsterRoster:
        count = self.config.monster_count(depth)
        monsters: List[Optional[Entity]] = []
        for _ in range(count):
            monsters.append(self.make_monster(depth, pool.draw(self.rng)))
        logger.debug("Spawned %d monsters at depth %d: %s", count, depth, monsters)
        return MonsterRoster(monsters)

    def spawn_player(self, pool: SpawnPool) -> Entity:
        player = self.make_player(pool.draw(self.rng))
        logger.debug("Spawned %r", player)
        return player

    def place_player(self, player: Entity, pool: SpawnPool) -> None:
        """Move an existing player to a fresh spawn point, keeping its stats."""
        player.move_to(pool.draw(self.rng))
        logger.debug("Placed %r", player)
