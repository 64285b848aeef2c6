"""Configuration manager for imagedetail."""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from imagedetail.config.defaults import DEFAULT_CONFIG, ENV_OVERRIDES

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration errors."""
    pass


class ConfigManager:
    """Manages configuration loading and access.

    This class handles loading configuration from YAML files, merging it with
    the built-in defaults, applying environment overrides, and providing
    access to configuration values with dot notation.

    Attributes:
        config: Dictionary containing all configuration values
        config_path: Path to the loaded configuration file

    Examples:
        >>> config = ConfigManager.load("config.yaml")
        >>> print(config.get("server.port"))
        3000
        >>> print(config.get("analysis.pixel_stats"))
        True
    """

    def __init__(self, config: Dict[str, Any], config_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config: Configuration dictionary
            config_path: Path to the configuration file (optional)
        """
        self.config = config
        self.config_path = config_path

    @classmethod
    def defaults(cls) -> "ConfigManager":
        """Return a manager holding a private copy of the default configuration."""
        return cls(copy.deepcopy(DEFAULT_CONFIG))

    @classmethod
    def load(
        cls,
        config_path: Optional[str] = None,
        environ: Optional[Dict[str, str]] = None
    ) -> "ConfigManager":
        """Load configuration from file, falling back to defaults.

        This method loads configuration from the specified path, or searches
        for config.yaml in standard locations. When no file is found the
        defaults are used.

        Args:
            config_path: Path to configuration file (optional)
            environ: Environment mapping for overrides (defaults to os.environ)

        Returns:
            ConfigManager instance with loaded configuration

        Raises:
            ConfigError: If an explicit path is missing or cannot be parsed
        """
        if config_path:
            path = Path(config_path).expanduser()
            if not path.exists():
                raise ConfigError(f"Configuration file not found: {path}")
        else:
            path = cls._find_config_file()

        if path and path.exists():
            logger.info(f"Loading configuration from: {path}")
            config = cls._merge_with_defaults(cls._load_yaml(path))
        else:
            logger.debug("No configuration file found, using defaults")
            config = copy.deepcopy(DEFAULT_CONFIG)
            path = None

        cls._apply_env_overrides(config, os.environ if environ is None else environ)

        return cls(config, path)

    @staticmethod
    def _find_config_file() -> Optional[Path]:
        """Search for config.yaml in standard locations.

        Search order:
        1. ~/.imagedetail/config.yaml (user home directory - primary location)
        2. ./config.yaml (current directory - for development/testing)

        Returns:
            Path to config file if found, None otherwise
        """
        search_paths = [
            Path.home() / ".imagedetail" / "config.yaml",
            Path.cwd() / "config.yaml",
        ]

        for path in search_paths:
            if path.exists():
                logger.debug(f"Found config file: {path}")
                return path

        logger.debug("No config file found in standard locations")
        return None

    @staticmethod
    def _load_yaml(path: Path) -> Dict[str, Any]:
        """Load configuration from YAML file.

        Args:
            path: Path to YAML file

        Returns:
            Configuration dictionary

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        try:
            with open(path, 'r') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Failed to parse YAML configuration: {path}\n"
                f"Error: {e}"
            ) from e
        except OSError as e:
            raise ConfigError(
                f"Failed to load configuration file: {path}\n"
                f"Error: {e}"
            ) from e

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigError(
                f"Invalid configuration file: {path}\n"
                "Configuration must be a YAML dictionary."
            )

        return config

    @staticmethod
    def _merge_with_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
        """Merge loaded config with defaults to add any missing fields.

        User config values take precedence over defaults.

        Args:
            config: Loaded configuration dictionary

        Returns:
            Merged configuration with defaults
        """
        def deep_merge(base: dict, updates: dict) -> dict:
            """Recursively merge two dictionaries, with updates taking precedence."""
            result = copy.deepcopy(base)
            for key, value in updates.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = deep_merge(result[key], value)
                else:
                    result[key] = value
            return result

        return deep_merge(DEFAULT_CONFIG, config)

    @staticmethod
    def _apply_env_overrides(config: Dict[str, Any], environ: Dict[str, str]) -> None:
        """Apply environment variable overrides in place.

        Args:
            config: Configuration dictionary
            environ: Environment mapping

        Raises:
            ConfigError: If an override cannot be converted to its type
        """
        for env_name, (key, cast) in ENV_OVERRIDES.items():
            raw_value = environ.get(env_name)
            if not raw_value:
                continue
            try:
                value = cast(raw_value)
            except ValueError as e:
                raise ConfigError(
                    f"Invalid value for {env_name}: {raw_value!r}"
                ) from e
            ConfigManager._set_nested_value(config, key, value)
            logger.debug(f"Applied {env_name} override to {key}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "server.port" or "upload.directory")
            default: Default value to return if key not found

        Returns:
            Configuration value or default

        Examples:
            >>> config.get("server.port")
            3000
            >>> config.get("nonexistent.key", "default_value")
            'default_value'
        """
        value = self._get_nested_value(self.config, key)
        return value if value is not None else default

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "analysis.pixel_stats")
            value: Value to set
        """
        self._set_nested_value(self.config, key, value)

    @staticmethod
    def _get_nested_value(config: Dict[str, Any], key: str) -> Any:
        """Get value from nested dictionary using dot notation.

        Args:
            config: Configuration dictionary
            key: Dot-separated key path

        Returns:
            Value at key path, or None if not found
        """
        value = config

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return None

        return value

    @staticmethod
    def _set_nested_value(config: Dict[str, Any], key: str, value: Any) -> None:
        """Set value in nested dictionary using dot notation.

        Args:
            config: Configuration dictionary
            key: Dot-separated key path
            value: Value to set
        """
        keys = key.split(".")
        current = config

        for k in keys[:-1]:
            if k not in current or not isinstance(current[k], dict):
                current[k] = {}
            current = current[k]

        current[keys[-1]] = value

    def __repr__(self) -> str:
        """Return string representation of configuration."""
        path_str = f" from {self.config_path}" if self.config_path else ""
        return f"<ConfigManager{path_str}>"
