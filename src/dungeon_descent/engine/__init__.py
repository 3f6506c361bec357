"""
Simulation engine: entities, population spawning, combat, chests and the
turn-by-turn GameSession that ties them to the dungeon.
"""
from .directions import Direction
from .entities import Entity, EntityView, MonsterRoster, Role
from .presenter import NullPresenter, Presenter, Snapshot, render_ascii
from .session import GameSession, Outcome, TurnResult

__all__ = [
    "Direction",
    "Entity",
    "EntityView",
    "GameSession",
    "MonsterRoster",
    "NullPresenter",
    "Outcome",
    "Presenter",
    "Role",
    "Snapshot",
    "TurnResult",
    "render_ascii",
]
