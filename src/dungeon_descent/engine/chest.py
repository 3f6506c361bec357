from __future__ import annotations

import logging
from enum import Enum

from ..rng import RandomSource
from .entities import Entity

logger = logging.getLogger(__name__)


class ChestReward(Enum):
    """The six chest outcomes, keyed by their 1..6 roll."""

    GREATER_HEALING_POTION = (1, "Greater Healing Potion")
    SWORD_UPGRADE = (2, "Sword Upgrade")
    ARMOUR = (3, "Armour")
    GREATER_SWORD_UPGRADE = (4, "Greater Sword Upgrade")
    SUPER_ARMOUR = (5, "Super Armour")
    HEALTH_POTION = (6, "Health Potion")

    @property
    def roll(self) -> int:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]

    @classmethod
    def from_roll(cls, roll: int) -> "ChestReward":
        for reward in cls:
            if reward.roll == roll:
                return reward
        raise ValueError(f"Chest roll out of range: {roll}")


def apply_reward(reward: ChestReward, player: Entity) -> None:
    if reward is ChestReward.GREATER_HEALING_POTION:
        player.heal_full()
    elif reward in (ChestReward.SWORD_UPGRADE, ChestReward.GREATER_SWORD_UPGRADE):
        player.change_damage(5)
    elif reward is ChestReward.ARMOUR:
        player.change_armour(5)
    elif reward is ChestReward.SUPER_ARMOUR:
        player.change_armour(10)
    elif reward is ChestReward.HEALTH_POTION:
        player.change_health(20)


def open_chest(player: Entity, rng: RandomSource) -> ChestReward:
    """Roll a chest reward and apply it to the player."""
    reward = ChestReward.from_roll(rng.randint(1, 6))
    apply_reward(reward, player)
    logger.info("Chest opened: %s -> %r", reward.label, player)
    return reward
