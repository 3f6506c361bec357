from __future__ import annotations

import logging
from typing import Optional

import arcade

from ..config import GameConfig
from ..engine.directions import Direction
from ..engine.presenter import Snapshot
from ..engine.session import GameSession, Outcome

logger = logging.getLogger(__name__)

TILE_SIZE = 32
MARGIN = 2
STATUS_HEIGHT = 56

PLAYER_COLOR = (60, 180, 255)
MONSTER_COLOR = (200, 50, 50)
BOSS_COLOR = (140, 0, 160)

KEYMAP = {
    arcade.key.UP: Direction.UP,
    arcade.key.W: Direction.UP,
    arcade.key.DOWN: Direction.DOWN,
    arcade.key.S: Direction.DOWN,
    arcade.key.LEFT: Direction.LEFT,
    arcade.key.A: Direction.LEFT,
    arcade.key.RIGHT: Direction.RIGHT,
    arcade.key.D: Direction.RIGHT,
}


class DungeonWindow(arcade.Window):
    """Arcade window that draws the latest snapshot and turns keys into moves.

    The window is also the session's presenter: it only keeps copies of what
    the engine hands it and shows the last notification in the status bar.
    """

    def __init__(self, config: GameConfig) -> None:
        super().__init__(
            config.width * TILE_SIZE,
            config.height * TILE_SIZE + STATUS_HEIGHT,
            title="Dungeon Descent",
        )
        self.background_color = arcade.color.BLACK
        self._snapshot: Optional[Snapshot] = None
        self._message = ""
        self.session = GameSession(presenter=self, config=config)
        self.session.start()
        logger.info("Arcade window initialized (%dx%d)", self.width, self.height)

    # ---- Presenter -------------------------------------------------------
    def render_level(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot
        self.set_caption(f"Dungeon Descent - Depth {snapshot.depth}")

    def notify_combat(self, message: str) -> None:
        self._message = message

    def notify_chest(self, message: str) -> None:
        self._message = f"You found: {message}"

    def notify_victory(self) -> None:
        self._message = "The boss is dead. You win! Press any key to exit."

    # ---- Arcade callbacks -----------------------------------------------
    def _draw_cell(self, x: int, y: int, rows: int, color) -> None:
        left = x * TILE_SIZE + MARGIN // 2
        bottom = STATUS_HEIGHT + (rows - 1 - y) * TILE_SIZE + MARGIN // 2
        arcade.draw_lbwh_rectangle_filled(left, bottom, TILE_SIZE - MARGIN, TILE_SIZE - MARGIN, color)

    def on_draw(self) -> None:
        self.clear()
        snap = self._snapshot
        if snap is None:
            return
        rows = snap.height
        for y, row in enumerate(snap.tiles):
            for x, tile in enumerate(row):
                self._draw_cell(x, y, rows, tile.color)
        for m in snap.living_monsters():
            self._draw_cell(m.x, m.y, rows, BOSS_COLOR if m.boss else MONSTER_COLOR)
        p = snap.player
        if p is not None:
            self._draw_cell(p.x, p.y, rows, PLAYER_COLOR)
            arcade.draw_text(
                f"Depth {snap.depth}   HP {p.health}/{p.max_health}   DMG {p.damage}   ARM {p.armour}",
                10,
                STATUS_HEIGHT - 22,
                arcade.color.WHITE,
                14,
            )
        arcade.draw_text(self._message, 10, 8, arcade.color.LIGHT_GRAY, 12)

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        if self.session.is_over or symbol == arcade.key.ESCAPE:
            self.close()
            return
        direction = KEYMAP.get(symbol)
        if direction is None:
            return
        self.session.move_player(direction)
        if self.session.outcome is Outcome.DEFEAT:
            self._message = f"You died on depth {self.session.depth}. Press any key to exit."


def run_gui(config: GameConfig) -> int:  # pragma: no cover - manual usage
    """Open the game window and block until it is closed."""
    window = DungeonWindow(config)
    try:
        logger.info("Launching Arcade window")
        arcade.run()
        logger.info("Arcade loop finished")
        return 0
    except Exception:
        logger.exception("Unhandled exception in GUI loop; exiting with code 1")
        return 1
    finally:
        window.close()
