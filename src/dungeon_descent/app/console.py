from __future__ import annotations

import logging
import sys
from typing import Iterable, Iterator, Optional, TextIO

from ..config import GameConfig
from ..engine.directions import Direction
from ..engine.presenter import Snapshot, render_ascii
from ..engine.session import GameSession, Outcome

logger = logging.getLogger(__name__)

QUIT_KEYS = {"q", "quit", "exit"}


class ConsolePresenter:
    """Prints each frame and every notification to a text stream."""

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self.out = out or sys.stdout

    def _print(self, text: str) -> None:
        print(text, file=self.out)

    def render_level(self, snapshot: Snapshot) -> None:
        for line in render_ascii(snapshot):
            self._print(line)
        p = snapshot.player
        if p is not None:
            self._print(
                f"Depth {snapshot.depth}  HP {p.health}/{p.max_health}  "
                f"DMG {p.damage}  ARM {p.armour}  Monsters {len(snapshot.living_monsters())}"
            )
        self._print("")

    def notify_combat(self, message: str) -> None:
        self._print(f"[combat] {message}")

    def notify_chest(self, message: str) -> None:
        self._print(f"[chest] You found: {message}")

    def notify_victory(self) -> None:
        self._print("*** The boss is dead. You win! ***")


def _commands(script: Optional[str], stream: TextIO) -> Iterator[str]:
    if script is not None:
        yield from (ch for ch in script if not ch.isspace())
        return
    for line in stream:
        cmd = line.strip()
        if cmd:
            yield cmd


def play(session: GameSession, commands: Iterable[str]) -> Outcome:
    """Feed commands to the session until they run out, a quit key or the end."""
    for cmd in commands:
        if cmd.lower() in QUIT_KEYS:
            logger.info("Player quit at depth %d", session.depth)
            break
        try:
            direction = Direction.from_key(cmd)
        except ValueError:
            print(f"Unknown command {cmd!r}; use w/a/s/d or q", file=sys.stderr)
            continue
        session.move_player(direction)
        if session.is_over:
            break
    return session.outcome


def run_headless(
    config: GameConfig,
    script: Optional[str] = None,
    stdin: Optional[TextIO] = None,
    out: Optional[TextIO] = None,
) -> int:
    """Run a session in the terminal.

    Commands come from ``script`` (one character per move) when given,
    otherwise one per line from stdin. Returns the process exit code.
    """
    out = out or sys.stdout
    print("Dungeon Descent (headless)", file=out)
    print("Move with w/a/s/d, q to quit.\n", file=out)
    session = GameSession(presenter=ConsolePresenter(out), config=config)
    session.start()
    try:
        outcome = play(session, _commands(script, stdin or sys.stdin))
    except KeyboardInterrupt:
        print("Interrupted by user", file=out)
        return 130
    if outcome is Outcome.DEFEAT:
        print(f"You died on depth {session.depth}.", file=out)
    elif outcome is Outcome.IN_PROGRESS:
        print(f"Run ended on depth {session.depth}.", file=out)
    return 0
