from __future__ import annotations

import logging

from .entities import Entity

logger = logging.getLogger(__name__)


def hit_monster(player: Entity, monster: Entity) -> str:
    """Player strikes a monster for its full damage. Returns the combat message."""
    monster.change_health(-player.damage)
    logger.debug("Player hit %r for %d", monster, player.damage)
    return f"Monster took {player.damage} damage"


def hit_player(monster: Entity, player: Entity, armour_absorb: int) -> str:
    """Monster strikes the player. Returns the combat message.

    While the player has armour the hit only wears the armour down by
    ``armour_absorb``, whatever the monster's damage; health is untouched.
    """
    if player.armour > 0:
        player.change_armour(-armour_absorb)
        logger.debug("Armour absorbed hit from %r; armour now %d", monster, player.armour)
        return "Your armour was hit!"
    player.change_health(-monster.damage)
    logger.debug("Player took %d from %r; health now %d", monster.damage, monster, player.health)
    return f"You took {monster.damage} damage"
