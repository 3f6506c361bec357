"""Game configuration: embedded YAML defaults, user overrides and env vars."""
from .loader import DepthBand, GameConfig, Quota, StatBlock, load_config

__all__ = ["DepthBand", "GameConfig", "Quota", "StatBlock", "load_config"]
