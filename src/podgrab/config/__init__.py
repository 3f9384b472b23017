"""Configuration loading and logging setup for podgrab."""

from podgrab.config.logging import setup_logging
from podgrab.config.manager import ConfigManager
from podgrab.config.schema import GlobalConfig

__all__ = ["ConfigManager", "GlobalConfig", "setup_logging"]
