"""Configuration management"""

from .config_loader import ConfigError, ConfigLoader
from .scanner_config import AppConfig, LoggingConfig, ReportConfig, ScannerConfig

__all__ = ["AppConfig", "ConfigError", "ConfigLoader", "LoggingConfig", "ReportConfig", "ScannerConfig"]
