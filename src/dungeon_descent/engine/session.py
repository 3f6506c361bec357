from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from ..config import GameConfig
from ..dungeon.generator import LevelGenerator
from ..dungeon.map import DungeonMap
from ..dungeon.spawns import SpawnPool
from ..dungeon.tiles import TileType
from ..exceptions import SessionNotStartedError, SessionOverError
from ..rng import RandomSource
from .chest import open_chest
from .combat import hit_monster, hit_player
from .directions import MONSTER_DIRECTIONS, Direction
from .entities import Entity, MonsterRoster
from .population import PopulationSpawner
from .presenter import NullPresenter, Presenter, Snapshot

logger = logging.getLogger(__name__)


class Outcome(Enum):
    IN_PROGRESS = auto()
    VICTORY = auto()
    DEFEAT = auto()


@dataclass
class TurnResult:
    """What happened during one call to GameSession.move_player."""

    direction: Direction
    depth: int
    outcome: Outcome = Outcome.IN_PROGRESS
    moved: bool = False
    descended: bool = False
    messages: List[str] = field(default_factory=list)


class GameSession:
    """Owns one run: depth, level, player, monster roster and outcome.

    Each call to :meth:`move_player` resolves a whole turn synchronously:

    1. the player bumps a wall, attacks a monster, opens a chest or moves
    2. dead monsters are cleared; killing the boss wins the game
    3. every living monster takes one random step or attacks
    4. a dead player loses the game; a player on stairs descends
    5. the presenter is asked to redraw

    Victory and defeat end the session: later turns raise SessionOverError.
    Front-ends decide what ending the session means for the process.
    """

    def __init__(
        self,
        presenter: Optional[Presenter] = None,
        config: Optional[GameConfig] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng or RandomSource(self.config.seed)
        self.presenter: Presenter = presenter or NullPresenter()
        self.generator = LevelGenerator(self.rng, self.config)
        self.spawner = PopulationSpawner(self.rng, self.config)
        self.depth: int = self.config.start_depth
        self.level: Optional[DungeonMap] = None
        self.spawns: Optional[SpawnPool] = None
        self.player: Optional[Entity] = None
        self.monsters = MonsterRoster([])
        self._outcome = Outcome.IN_PROGRESS
        self._boss_defeated = False

    # ---- Lifecycle -------------------------------------------------------
    def start(self) -> None:
        """Generate the first level, spawn monsters and a fresh player, then draw."""
        self._build_level()
        assert self.spawns is not None
        self.player = self.spawner.spawn_player(self.spawns)
        logger.info("Session started at depth %d with %r", self.depth, self.player)
        self._render()

    def load(self, level: DungeonMap, player: Entity, monsters: MonsterRoster, depth: int = 1) -> None:
        """Install a prepared level instead of generating one (scenarios, tools)."""
        self.depth = depth
        self.level = level
        self.player = player
        self.monsters = monsters
        occupied = {player.pos} | {m.pos for m in monsters}
        self.spawns = SpawnPool(p for p in level.positions_of(TileType.FLOOR) if p not in occupied)
        self._outcome = Outcome.IN_PROGRESS
        self._boss_defeated = False
        logger.info("Loaded depth %d with %r and %d monsters", depth, player, len(monsters))
        self._render()

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def is_over(self) -> bool:
        return self._outcome is not Outcome.IN_PROGRESS

    def is_boss_defeated(self) -> bool:
        return self._boss_defeated

    def snapshot(self) -> Snapshot:
        return Snapshot(
            depth=self.depth,
            tiles=self.level.snapshot() if self.level is not None else (),
            player=self.player.view() if self.player is not None else None,
            monsters=self.monsters.views(),
        )

    # ---- Turn ------------------------------------------------------------
    def move_player(self, direction: Direction) -> TurnResult:
        if self.is_over:
            raise SessionOverError(f"Session already ended in {self._outcome.name.lower()}")
        if self.player is None or self.level is None:
            raise SessionNotStartedError("move_player() called before start()")

        result = TurnResult(direction=direction, depth=self.depth)
        logger.debug("Turn: player %r moves %s", self.player, direction.name)
        self._player_action(direction, result)
        self._clean_dead_monsters()

        if self._boss_defeated:
            self._outcome = Outcome.VICTORY
            logger.info("Boss defeated at depth %d", self.depth)
            self.presenter.notify_victory()
        else:
            for monster in list(self.monsters):
                self._monster_action(monster, result)
            if not self.player.alive:
                self._outcome = Outcome.DEFEAT
                logger.info("Player died at depth %d", self.depth)
            elif self.level.get_tile(self.player.x, self.player.y) is TileType.STAIRS:
                self._descend()
                result.descended = True

        result.outcome = self._outcome
        result.depth = self.depth
        self._render()
        return result

    def _player_action(self, direction: Direction, result: TurnResult) -> None:
        assert self.player is not None and self.level is not None
        target = self.player.pos.offset(*direction.delta)
        tile = self.level.get_tile(target.x, target.y)
        if tile is TileType.WALL:
            logger.debug("Player bumped wall at (%d,%d)", target.x, target.y)
            return
        monster = self.monsters.at(target)
        if monster is not None:
            self._combat(hit_monster(self.player, monster), result)
            return
        if tile is TileType.CHEST:
            reward = open_chest(self.player, self.rng)
            result.messages.append(reward.label)
            self.presenter.notify_chest(reward.label)
            self.player.move_to(target)
            self.level.consume_chest(target)
        else:
            self.player.move_to(target)
        result.moved = True

    def _monster_action(self, monster: Entity, result: TurnResult) -> None:
        assert self.player is not None and self.level is not None
        direction = self.rng.choice(MONSTER_DIRECTIONS)
        target = monster.pos.offset(*direction.delta)
        if self.level.get_tile(target.x, target.y) is TileType.WALL:
            return
        if target == self.player.pos:
            absorb = self.config.armour_absorb_for(self.depth)
            self._combat(hit_player(monster, self.player, absorb), result)
            return
        # Monsters may end up sharing a tile with each other.
        monster.move_to(target)

    def _combat(self, message: str, result: TurnResult) -> None:
        result.messages.append(message)
        self.presenter.notify_combat(message)

    def _clean_dead_monsters(self) -> None:
        for monster in self.monsters.remove_dead():
            if monster.boss:
                self._boss_defeated = True

    # ---- Levels ----------------------------------------------------------
    def _build_level(self) -> None:
        self.level = self.generator.generate(self.depth)
        self.spawns = SpawnPool.from_map(self.level)
        self.monsters = self.spawner.spawn_monsters(self.depth, self.spawns)

    def _descend(self) -> None:
        assert self.player is not None
        self.depth += 1
        self._build_level()
        assert self.spawns is not None
        self.spawner.place_player(self.player, self.spawns)
        logger.info("Descended to depth %d. Player at %s", self.depth, self.player.pos)

    def _render(self) -> None:
        self.presenter.render_level(self.snapshot())


__all__ = ["GameSession", "Outcome", "TurnResult"]
