"""
Configuration management utilities.

This module loads optional TOML configuration files holding endpoint settings,
so credentials don't have to be passed on the command line:

    [from]
    url = "https://nexus-a.example.com"
    user = "reader"
    password = "secret"
    repository = "maven-releases"

    [to]
    url = "https://nexus-b.example.com"
    user = "writer"
    password = "secret"
    repository = "maven-mirror"
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

# Keys of an endpoint table in the configuration file
ENDPOINT_KEYS = ("url", "user", "password", "repository")


class ConfigManager:
    """
    Manages configuration loading and access.

    This class provides a centralized way to load and access configuration
    from TOML files with proper error handling and validation.
    """

    def __init__(self, config_path: str, logger: Optional[logging.Logger] = None) -> None:
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to configuration file
            logger: Logger for load diagnostics
        """
        self.config_path = Path(config_path).expanduser()
        self._config: Optional[Dict[str, Any]] = None
        self._logger = logger

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from file.

        Returns:
            Dictionary containing configuration data

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        if self._config is not None:
            return self._config

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "rb") as f:
                self._config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in configuration file {self.config_path}: {e}") from e
        except OSError as e:
            raise ValueError(f"Failed to load configuration from {self.config_path}: {e}") from e

        if self._logger is not None:
            self._logger.debug("Loaded configuration from %s", self.config_path)
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.

        Supports nested keys using dot notation (e.g., "from.url").

        Args:
            key: Configuration key (supports dot notation for nested keys)
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value: Any = self.load()

        for k in key.split("."):
            if not isinstance(value, dict):
                return default
            value = value.get(k)
            if value is None:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Section name (e.g., "from")

        Returns:
            Dictionary containing section data, or empty dict if section not found
        """
        value = self.load().get(section, {})
        return value if isinstance(value, dict) else {}

    def get_endpoint(self, section: str) -> Dict[str, str]:
        """
        Get the endpoint settings present in a section.

        Unknown keys are ignored and values are converted to strings.

        Args:
            section: Either "from" or "to"

        Returns:
            Dictionary restricted to ``url``, ``user``, ``password`` and ``repository``
        """
        data = self.get_section(section)
        return {key: str(data[key]) for key in ENDPOINT_KEYS if data.get(key) is not None}


__all__ = ["ConfigManager", "ENDPOINT_KEYS"]
