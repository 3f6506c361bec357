from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

from ..dungeon.tiles import TileType
from .entities import EntityView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Immutable picture of the session handed to presenters.

    ``tiles`` is row-major (``tiles[y][x]``); ``monsters`` keeps the roster's
    slot layout, with None for empty slots.
    """

    depth: int
    tiles: Tuple[Tuple[TileType, ...], ...]
    player: Optional[EntityView]
    monsters: Tuple[Optional[EntityView], ...]

    @property
    def width(self) -> int:
        return len(self.tiles[0]) if self.tiles else 0

    @property
    def height(self) -> int:
        return len(self.tiles)

    def living_monsters(self) -> Tuple[EntityView, ...]:
        return tuple(m for m in self.monsters if m is not None)


class Presenter(Protocol):
    """What the engine calls into after each turn.

    Implementations only observe: they receive copies and must not reach back
    into the session to change it.
    """

    def render_level(self, snapshot: Snapshot) -> None: ...

    def notify_combat(self, message: str) -> None: ...

    def notify_chest(self, message: str) -> None: ...

    def notify_victory(self) -> None: ...


class NullPresenter:
    """Presenter that only logs; used when a session runs without a front-end."""

    def render_level(self, snapshot: Snapshot) -> None:
        logger.debug("Render depth %d (%d monsters)", snapshot.depth, len(snapshot.living_monsters()))

    def notify_combat(self, message: str) -> None:
        logger.debug("Combat: %s", message)

    def notify_chest(self, message: str) -> None:
        logger.debug("Chest: %s", message)

    def notify_victory(self) -> None:
        logger.debug("Victory")


def render_ascii(snapshot: Snapshot) -> List[str]:
    """Text frame: tile glyphs with '@' for the player, 'M' monsters, 'B' the boss."""
    grid = [[t.glyph for t in row] for row in snapshot.tiles]
    for m in snapshot.living_monsters():
        grid[m.y][m.x] = "B" if m.boss else "M"
    if snapshot.player is not None:
        grid[snapshot.player.y][snapshot.player.x] = "@"
    return ["".join(row) for row in grid]
