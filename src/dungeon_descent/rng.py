from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass
class RandomSource:
    """
    A thin wrapper around random.Random shared by one game session:
    - the level generator, population spawner and turn engine all draw from it
    - optional deterministic seeding for tests and replays
    - never reseeded once a session is running
    """

    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.seed is not None:
            self._rng = random.Random(self.seed)
            logger.debug("Initialized RandomSource with deterministic seed=%s", self.seed)
        else:
            # Non-deterministic seed using system random state
            self._rng = random.Random()
            logger.debug("Initialized RandomSource with non-deterministic seed")

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def randrange(self, stop: int) -> int:
        """Uniform integer in [0, stop)."""
        if stop <= 0:
            raise ValueError(f"randrange() requires a positive bound, got {stop}")
        return self._rng.randrange(stop)

    def random(self) -> float:
        return self._rng.random()

    def choice(self, seq: Sequence[Any]) -> Any:
        if not seq:
            raise ValueError("RandomSource.choice() received an empty sequence")
        return seq[self.randrange(len(seq))]


__all__ = ["RandomSource"]
