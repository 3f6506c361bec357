from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from importlib.resources import files as resource_files
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from ..exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "DESCENT_"


@dataclass(frozen=True)
class Quota:
    """Content density for one level: chest quota and monster count."""

    chests: int
    monsters: int


@dataclass(frozen=True)
class DepthBand:
    max_depth: int
    chests: int
    monsters: int

    @property
    def quota(self) -> Quota:
        return Quota(chests=self.chests, monsters=self.monsters)


@dataclass(frozen=True)
class StatBlock:
    max_health: int
    damage: int


@dataclass(frozen=True)
class GameConfig:
    """Layout, difficulty curve and entity stats for a run.

    Depth lookups go through :meth:`quota_for`: the final depth always uses
    ``final_level``, other depths use the first band whose ``max_depth`` covers
    them, and anything past the last band falls back to ``fallback``.
    """

    width: int = 25
    height: int = 18
    start_depth: int = 1
    final_depth: int = 40
    max_generation_attempts: int = 50
    depth_bands: Tuple[DepthBand, ...] = (
        DepthBand(5, 2, 3),
        DepthBand(20, 3, 4),
        DepthBand(35, 4, 5),
        DepthBand(39, 5, 6),
    )
    final_level: Quota = field(default_factory=lambda: Quota(chests=0, monsters=1))
    fallback: Quota = field(default_factory=lambda: Quota(chests=2, monsters=2))
    player: StatBlock = field(default_factory=lambda: StatBlock(max_health=100, damage=10))
    monster: StatBlock = field(default_factory=lambda: StatBlock(max_health=50, damage=10))
    boss: StatBlock = field(default_factory=lambda: StatBlock(max_health=5000, damage=70))
    armour_absorb: int = 5
    final_armour_absorb: int = 10
    seed: Optional[int] = None

    def is_final_depth(self, depth: int) -> bool:
        return depth == self.final_depth

    def quota_for(self, depth: int) -> Quota:
        if self.is_final_depth(depth):
            return self.final_level
        for band in self.depth_bands:
            if depth <= band.max_depth:
                return band.quota
        logger.warning("No depth band covers depth %d; using fallback quota", depth)
        return self.fallback

    def chest_quota(self, depth: int) -> int:
        return self.quota_for(depth).chests

    def monster_count(self, depth: int) -> int:
        return self.quota_for(depth).monsters

    def armour_absorb_for(self, depth: int) -> int:
        return self.final_armour_absorb if self.is_final_depth(depth) else self.armour_absorb

    def validate(self) -> "GameConfig":
        """Raise ConfigError if the configuration cannot produce a playable run."""
        if self.width < 3 or self.height < 3:
            raise ConfigError(f"Dungeon must be at least 3x3, got {self.width}x{self.height}")
        if self.final_depth < 1:
            raise ConfigError(f"final_depth must be >= 1, got {self.final_depth}")
        if not 1 <= self.start_depth <= self.final_depth:
            raise ConfigError(
                f"start_depth must be within [1, {self.final_depth}], got {self.start_depth}"
            )
        if self.max_generation_attempts < 1:
            raise ConfigError("max_generation_attempts must be >= 1")
        previous = 0
        for band in self.depth_bands:
            if band.max_depth <= previous:
                raise ConfigError("depth_bands must be sorted by strictly increasing max_depth")
            previous = band.max_depth
        quotas = [b.quota for b in self.depth_bands] + [self.final_level, self.fallback]
        for quota in quotas:
            if quota.chests < 0 or quota.monsters < 0:
                raise ConfigError(f"Quota values must be non-negative: {quota}")
        for name in ("player", "monster", "boss"):
            stats: StatBlock = getattr(self, name)
            if stats.max_health <= 0:
                raise ConfigError(f"{name}.max_health must be positive")
        return self

    def with_overrides(self, **changes: Any) -> "GameConfig":
        """Return a copy with the non-None keyword values applied."""
        changes = {k: v for k, v in changes.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes).validate()


def _deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _deep_merge(dict(merged[key]), value)
        else:
            merged[key] = value
    return merged


def _read_defaults() -> Dict[str, Any]:
    data = resource_files("dungeon_descent.config").joinpath("defaults.yaml").read_text(encoding="utf-8")
    logger.debug("Loaded embedded default config resource")
    return yaml.safe_load(data) or {}


def _env_int(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


def _stat_block(raw: Mapping[str, Any], name: str) -> StatBlock:
    block = raw.get(name) or {}
    try:
        return StatBlock(max_health=int(block["max_health"]), damage=int(block["damage"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid stat block '{name}': {block!r}") from exc


def _quota(raw: Mapping[str, Any], name: str) -> Quota:
    block = raw.get(name) or {}
    try:
        return Quota(chests=int(block["chests"]), monsters=int(block["monsters"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid quota '{name}': {block!r}") from exc


def _from_raw(raw: Mapping[str, Any]) -> GameConfig:
    dungeon = raw.get("dungeon") or {}
    armour = raw.get("armour") or {}
    try:
        bands = tuple(
            DepthBand(max_depth=int(b["max_depth"]), chests=int(b["chests"]), monsters=int(b["monsters"]))
            for b in raw.get("depth_bands") or []
        )
        seed = raw.get("seed")
        return GameConfig(
            width=int(dungeon["width"]),
            height=int(dungeon["height"]),
            start_depth=int(dungeon.get("start_depth", 1)),
            final_depth=int(dungeon["final_depth"]),
            max_generation_attempts=int(dungeon.get("max_generation_attempts", 50)),
            depth_bands=bands,
            final_level=_quota(raw, "final_level"),
            fallback=_quota(raw, "fallback"),
            player=_stat_block(raw, "player"),
            monster=_stat_block(raw, "monster"),
            boss=_stat_block(raw, "boss"),
            armour_absorb=int(armour["absorb"]),
            final_armour_absorb=int(armour["final_absorb"]),
            seed=None if seed is None else int(seed),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def load_config(path: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> GameConfig:
    """Load the game configuration.

    The embedded defaults are always read first. If ``path`` is given, its YAML
    content is merged over them key by key. Finally DESCENT_SEED,
    DESCENT_WIDTH, DESCENT_HEIGHT and DESCENT_START_DEPTH override the result.
    """
    raw = _read_defaults()
    if path is not None:
        try:
            with open(path, "r", encoding="utf-8") as f:
                user = yaml.safe_load(f.read()) or {}
        except OSError as exc:
            raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
        if not isinstance(user, Mapping):
            raise ConfigError(f"Config file {path} must contain a mapping at the top level")
        raw = _deep_merge(raw, user)
        logger.debug("Merged config overrides from path: %s", path)

    cfg = _from_raw(raw)

    env = os.environ if env is None else env
    cfg = cfg.with_overrides(
        seed=_env_int(env, "SEED"),
        width=_env_int(env, "WIDTH"),
        height=_env_int(env, "HEIGHT"),
        start_depth=_env_int(env, "START_DEPTH"),
    )
    cfg.validate()
    logger.info(
        "Config: %dx%d, depths %d..%d, seed=%s",
        cfg.width,
        cfg.height,
        cfg.start_depth,
        cfg.final_depth,
        cfg.seed,
    )
    return cfg


__all__ = ["DepthBand", "GameConfig", "Quota", "StatBlock", "load_config"]
