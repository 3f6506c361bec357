from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

from ..dungeon.map import Point

logger = logging.getLogger(__name__)


class Role(Enum):
    PLAYER = "player"
    MONSTER = "monster"


@dataclass(frozen=True)
class EntityView:
    """Read-only copy of an entity handed to presenters."""

    role: Role
    x: int
    y: int
    health: int
    max_health: int
    damage: int
    armour: int
    boss: bool = False

    @property
    def pos(self) -> Point:
        return Point(self.x, self.y)


@dataclass
class Entity:
    """The player or a monster on the grid.

    Health never exceeds max_health; armour never drops below zero. Health
    may go to zero or below, which is how death is detected.
    """

    role: Role
    max_health: int
    x: int
    y: int
    damage: int = 10
    armour: int = 0
    boss: bool = False

    def __post_init__(self) -> None:
        if self.max_health <= 0:
            raise ValueError("max_health must be positive")
        self.health = self.max_health

    @property
    def pos(self) -> Point:
        return Point(self.x, self.y)

    @property
    def is_player(self) -> bool:
        return self.role is Role.PLAYER

    @property
    def alive(self) -> bool:
        return self.health > 0

    def move_to(self, p: Point) -> None:
        self.x = p.x
        self.y = p.y

    def change_health(self, change: int) -> None:
        self.health = min(self.max_health, self.health + change)

    def heal_full(self) -> None:
        self.health = self.max_health

    def change_damage(self, change: int) -> None:
        self.damage += change

    def change_armour(self, change: int) -> None:
        self.armour = max(0, self.armour + change)

    def view(self) -> EntityView:
        return EntityView(
            role=self.role,
            x=self.x,
            y=self.y,
            health=self.health,
            max_health=self.max_health,
            damage=self.damage,
            armour=self.armour,
            boss=self.boss,
        )

    def __repr__(self) -> str:
        kind = "Boss" if self.boss else self.role.value.capitalize()
        return f"{kind}(@{self.x},{self.y} hp={self.health}/{self.max_health} dmg={self.damage} ar={self.armour})"


class MonsterRoster:
    """Fixed-capacity monster slots for one level.

    Dead monsters leave an empty slot behind; slot indices never shift, so a
    monster hit earlier in a turn is still found at the same index when dead
    monsters are cleaned up.
    """

    def __init__(self, monsters: Sequence[Optional[Entity]]) -> None:
        self._slots: List[Optional[Entity]] = list(monsters)

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def slots(self) -> Tuple[Optional[Entity], ...]:
        return tuple(self._slots)

    def __iter__(self) -> Iterator[Entity]:
        return (m for m in self._slots if m is not None)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def indexed(self) -> Iterator[Tuple[int, Entity]]:
        for i, m in enumerate(self._slots):
            if m is not None:
                yield i, m

    def at(self, p: Point) -> Optional[Entity]:
        """First occupied slot whose monster stands on ``p``."""
        for m in self:
            if m.x == p.x and m.y == p.y:
                return m
        return None

    def remove_dead(self) -> List[Entity]:
        """Empty the slot of every monster with health <= 0 and return them."""
        removed: List[Entity] = []
        for i, m in self.indexed():
            if not m.alive:
                self._slots[i] = None
                removed.append(m)
                logger.debug("Removed dead monster from slot %d: %r", i, m)
        return removed

    def views(self) -> Tuple[Optional[EntityView], ...]:
        return tuple(m.view() if m is not None else None for m in self._slots)
