"""
Dungeon Descent package root.

The simulation core lives in ``dungeon`` (tiles, maps, generation, spawn
points) and ``engine`` (entities, population, turn resolution). Front-ends
under ``app`` drive the engine and must not mutate its state directly.
"""
from importlib.metadata import version, PackageNotFoundError

__all__ = ["__version__"]

try:
    __version__ = version("dungeon-descent")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"
