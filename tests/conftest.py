import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from dungeon_descent.engine.presenter import Snapshot  # noqa: E402
from dungeon_descent.rng import RandomSource  # noqa: E402


@dataclass
class ScriptedRandom(RandomSource):
    """RandomSource that returns queued values first, then falls back to the seeded stream."""

    script: List[int] = field(default_factory=list)

    def randrange(self, stop: int) -> int:
        if self.script:
            value = self.script.pop(0)
            assert 0 <= value < stop, f"scripted {value} outside [0, {stop})"
            return value
        return super().randrange(stop)

    def randint(self, a: int, b: int) -> int:
        if self.script:
            value = self.script.pop(0)
            assert a <= value <= b, f"scripted {value} outside [{a}, {b}]"
            return value
        return super().randint(a, b)


class RecordingPresenter:
    def __init__(self) -> None:
        self.frames: List[Snapshot] = []
        self.combat: List[str] = []
        self.chests: List[str] = []
        self.victories = 0

    def render_level(self, snapshot: Snapshot) -> None:
        self.frames.append(snapshot)

    def notify_combat(self, message: str) -> None:
        self.combat.append(message)

    def notify_chest(self, message: str) -> None:
        self.chests.append(message)

    def notify_victory(self) -> None:
        self.victories += 1


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def scripted():
    def make(*values: int, seed: int = 1234) -> ScriptedRandom:
        return ScriptedRandom(seed=seed, script=list(values))

    return make
