"""Configuration management for imagedetail."""

from imagedetail.config.manager import ConfigManager, ConfigError
from imagedetail.config.defaults import DEFAULT_CONFIG

__all__ = ["ConfigManager", "ConfigError", "DEFAULT_CONFIG"]
