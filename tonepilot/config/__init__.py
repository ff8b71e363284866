"""Configuration for tonepilot."""

from tonepilot.config.loader import load_config, save_config
from tonepilot.config.schema import Config, MemoryConfig, RouterConfig

__all__ = ["Config", "MemoryConfig", "RouterConfig", "load_config", "save_config"]
