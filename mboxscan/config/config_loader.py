"""Configuration loader for application settings."""

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .scanner_config import AppConfig, ScannerConfig


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or validated."""

    pass


class ConfigLoader:
    """Load and validate application configuration."""

    DEFAULT_CONFIG_PATHS = [
        Path("~/.mboxscan/config.json"),
        Path("config/mboxscan.json"),
    ]

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration loader.

        Args:
            config_path: Optional custom config file path
        """
        self.config_path = config_path
        self._config: Optional[AppConfig] = None

    def load_app_config(self) -> AppConfig:
        """
        Load application configuration from file.

        Returns:
            AppConfig instance (defaults if no config file exists)

        Raises:
            FileNotFoundError: If an explicit config path does not exist
            ConfigError: If config is invalid
        """
        if self._config is not None:
            return self._config

        if self.config_path and not self.config_path.expanduser().exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        config_paths = [self.config_path] if self.config_path else self.DEFAULT_CONFIG_PATHS

        for config_path in config_paths:
            if config_path and config_path.expanduser().exists():
                try:
                    with open(config_path.expanduser(), "r", encoding="utf-8") as f:
                        config_data = json.load(f)
                    self._config = AppConfig(**config_data)
                    return self._config
                except (json.JSONDecodeError, ValidationError, TypeError) as e:
                    raise ConfigError(f"Invalid config in {config_path}: {e}") from e

        # Return default config if no file found
        self._config = AppConfig()
        return self._config

    def load_scanner_config(self, headers_only: Optional[bool] = None) -> ScannerConfig:
        """
        Load scanner settings, optionally overriding the scanning mode.

        Args:
            headers_only: Override for ScannerConfig.headers_only

        Returns:
            ScannerConfig instance
        """
        scanner = self.load_app_config().scanner
        if headers_only is not None and headers_only != scanner.headers_only:
            scanner = scanner.model_copy(update={"headers_only": headers_only})
        return scanner

    def reload(self) -> AppConfig:
        """Reload configuration from file."""
        self._config = None
        return self.load_app_config()
