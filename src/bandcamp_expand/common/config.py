"""Configuration loader with multi-source support."""

import logging
import toml
import os
from pathlib import Path
from typing import Dict, Any, Optional, Type, TypeVar
import platformdirs
from pydantic import BaseModel

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=BaseModel)


class ConfigLoader:
    """Loads configuration from multiple sources with priority.

    Priority (lowest first): model defaults, defaults file, system config,
    user config, environment variables.
    """

    def __init__(self, app_name: str = "bandcamp-expand", config_class: Type[T] = None) -> None:
        self.app_name = app_name
        self.config_class = config_class
        self._config: Optional[T] = None

    def load(self, defaults_path: Optional[Path] = None) -> T:
        """Load configuration from all sources.

        Args:
            defaults_path: Optional path to a TOML file with base settings

        Returns:
            Validated configuration object

        Raises:
            ConfigurationError: If a file cannot be parsed or validation fails
        """
        config_dict = self._load_defaults(defaults_path)

        system_config = self._load_system_config()
        if system_config:
            config_dict = self._deep_merge(config_dict, system_config)

        user_config = self._load_user_config()
        if user_config:
            config_dict = self._deep_merge(config_dict, user_config)

        config_dict = self._apply_env_overrides(config_dict)

        if self.config_class:
            try:
                self._config = self.config_class(**config_dict)
            except ValueError as e:
                # pydantic.ValidationError is a ValueError subclass
                raise ConfigurationError(f"Invalid configuration: {e}") from e
        else:
            self._config = config_dict

        return self._config

    def _read_toml(self, path: Path) -> Dict[str, Any]:
        try:
            return toml.load(path)
        except (toml.TomlDecodeError, OSError) as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}", path=str(path)) from e

    def _load_defaults(self, defaults_path: Optional[Path] = None) -> Dict[str, Any]:
        """Load the base configuration file, if any."""
        if defaults_path is not None:
            if not defaults_path.exists():
                raise ConfigurationError(
                    f"Config file not found: {defaults_path}", path=str(defaults_path)
                )
            return self._read_toml(defaults_path)

        possible_paths = [
            Path.cwd() / "config" / "defaults.toml",
            Path.home() / ".config" / self.app_name / "defaults.toml",
        ]

        for path in possible_paths:
            if path.exists():
                logger.debug(f"Loading defaults from {path}")
                return self._read_toml(path)

        # Model defaults apply when no file exists
        return {}

    def _load_system_config(self) -> Optional[Dict[str, Any]]:
        """Load system-wide configuration."""
        if os.name == "nt":  # Windows
            system_path = (
                Path(os.environ.get("PROGRAMDATA", "C:\\ProgramData"))
                / self.app_name
                / "config.toml"
            )
        else:  # Linux/Mac
            system_path = Path(f"/etc/{self.app_name}/config.toml")

        if system_path.exists():
            return self._read_toml(system_path)

        return None

    def _load_user_config(self) -> Optional[Dict[str, Any]]:
        """Load user-specific configuration."""
        user_config_dir = platformdirs.user_config_dir(appname=self.app_name, appauthor=False)
        user_config_path = Path(user_config_dir) / "config.toml"

        logger.debug(f"Looking for user config: app_name={self.app_name}, path={user_config_path}, exists={user_config_path.exists()}")

        if user_config_path.exists():
            logger.debug(f"Loading user config from {user_config_path}")
            return self._read_toml(user_config_path)

        return None

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Override config with environment variables.

        Format is ``<APP>_<SECTION>_<KEY>``, e.g.
        ``BANDCAMP_EXPAND_PATHS_MUSIC_ROOT`` -> ``paths.music_root``. The first
        segment after the prefix names the section; the rest is the key, so
        keys may contain underscores.
        """
        prefix = f"{self.app_name.upper().replace('-', '_')}_"

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(prefix):
                continue

            remainder = env_key[len(prefix):].lower()
            if "_" not in remainder:
                continue
            section, key = remainder.split("_", 1)

            current = config.setdefault(section, {})
            if not isinstance(current, dict):
                continue
            current[key] = self._convert_env_value(env_value)

        return config

    def _convert_env_value(self, value: str) -> Any:
        """Convert string environment variable to appropriate type."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        # Paths and names stay strings; pydantic coerces numerics
        return value

