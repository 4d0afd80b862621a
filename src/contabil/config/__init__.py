"""Configuration module for contabil."""

from contabil.config.logging import configure_logging, get_logger
from contabil.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "configure_logging", "get_logger"]
