"""Filesystem locations used by podgrab."""

import os
from pathlib import Path

import platformdirs

APP_NAME = "podgrab"
CONFIG_DIR_ENV = "PODGRAB_CONFIG_DIR"


def get_config_dir() -> Path:
    """Return the configuration directory.

    ``PODGRAB_CONFIG_DIR`` overrides the platform default
    (e.g. ``~/.config/podgrab`` on Linux).
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path(platformdirs.user_config_dir(APP_NAME))


def get_config_file() -> Path:
    """Return the path of the main config file."""
    return get_config_dir() / "config.yaml"
