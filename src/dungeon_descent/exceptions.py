class DungeonDescentError(Exception):
    """Base exception for the Dungeon Descent project."""


class ConfigError(DungeonDescentError):
    """Raised when configuration values are missing or invalid."""


class LevelGenerationError(DungeonDescentError):
    """Raised when no level with enough floor for its population could be generated."""


class SpawnPoolExhaustedError(DungeonDescentError):
    """Raised when a placement is requested from an empty spawn pool."""


class SessionNotStartedError(DungeonDescentError):
    """Raised when a turn is requested before the session has a level and player."""


class SessionOverError(DungeonDescentError):
    """Raised when a turn is requested after victory or defeat."""
