"""Resolution of the directories bluefin-cli stores its configuration in."""

from __future__ import annotations

import os
from pathlib import Path

from .utils import home_dir

APP_NAME = "bluefin-cli"


def config_dir() -> Path:
    """Return the directory where configuration files should be stored.

    Resolved on every call:

    1. ``~/.config/bluefin-cli`` if it already exists (user override).
    2. ``$HOMEBREW_PREFIX/etc/bluefin-cli`` if ``HOMEBREW_PREFIX`` is set.
    3. ``~/.config/bluefin-cli`` otherwise.
    """
    home_config = home_dir() / ".config" / APP_NAME
    if home_config.is_dir():
        return home_config

    prefix = os.environ.get("HOMEBREW_PREFIX")
    if prefix:
        return Path(prefix) / "etc" / APP_NAME

    return home_config
