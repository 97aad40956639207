"""Configuration management for bluefin-cli."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from .env import config_dir
from .tools import TOOLS, Tool, ToolId, get_tool
from .utils import log

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "shell.json"
LEGACY_CONFIG_FILENAME = "bling.json"


class ConfigError(ValueError):
    """The configuration file could not be read or parsed."""


@dataclass
class ShellConfig:
    """Enabled state of every registered tool.

    Tools without an explicit value fall back to their registered default,
    or to the per-shell default when ``shell`` is set.
    """

    shell: str | None = None
    values: dict[ToolId, bool] = field(default_factory=dict)

    def is_enabled(self, tool: str | ToolId | Tool) -> bool:
        """Return True if ``tool`` is enabled."""
        resolved = get_tool(tool)
        if resolved.id in self.values:
            return self.values[resolved.id]
        return resolved.default_for(self.shell)

    def set_enabled(self, tool: str | ToolId | Tool, enabled: bool) -> None:  # noqa: FBT001
        """Set the enabled state of ``tool``."""
        self.values[get_tool(tool).id] = bool(enabled)

    def enabled_tools(self) -> Iterator[Tool]:
        """Yield enabled tools in registry order."""
        for tool in TOOLS:
            if self.is_enabled(tool):
                yield tool

    def to_dict(self) -> dict[str, bool]:
        """Fully resolved mapping, keyed by lowercase tool id."""
        return {tool.id.value: self.is_enabled(tool) for tool in TOOLS}

    @classmethod
    def from_dict(cls, data: dict, shell: str | None = None) -> ShellConfig:
        """Build a config from a parsed JSON object."""
        config = cls(shell=shell)
        for key, value in data.items():
            try:
                tool = get_tool(key)
            except KeyError:
                log(f"Ignoring unknown tool in config: {key}", "warning")
                continue
            if not isinstance(value, bool):
                msg = f"Value for {key!r} must be true or false, got {value!r}"
                raise ConfigError(msg)
            config.values[tool.id] = value
        return config


def config_path() -> Path:
    """Path of the tool configuration file.

    A ``bling.json`` left by older releases is renamed to ``shell.json``.
    """
    directory = config_dir()
    path = directory / CONFIG_FILENAME
    legacy = directory / LEGACY_CONFIG_FILENAME
    if not path.exists() and legacy.exists():
        try:
            legacy.rename(path)
            logger.debug("Migrated %s to %s", legacy, path)
        except OSError as e:
            logger.warning("Could not migrate %s: %s", legacy, e)
    return path


def default_config(shell: str | None = None) -> ShellConfig:
    """Return a configuration with no explicit values.

    Every tool resolves to its default for ``shell`` when read.
    """
    return ShellConfig(shell=shell)


def load_config(shell: str | None = None) -> ShellConfig:
    """Load the configuration, or the defaults if no file exists yet."""
    path = config_path()
    if not path.exists():
        logger.debug("No config at %s, using defaults", path)
        return default_config(shell)

    try:
        data = json.loads(path.read_text())
    except OSError as e:
        msg = f"Failed to read config {path}: {e}"
        raise ConfigError(msg) from e
    except json.JSONDecodeError as e:
        msg = f"Failed to parse config {path}: {e}"
        raise ConfigError(msg) from e

    if not isinstance(data, dict):
        msg = f"Config {path} must contain a JSON object"
        raise ConfigError(msg)
    return ShellConfig.from_dict(data, shell=shell)


def load_config_or_default(shell: str | None = None) -> ShellConfig:
    """Load the configuration, falling back to defaults on errors."""
    try:
        return load_config(shell)
    except ConfigError as e:
        log(f"{e}; using defaults", "warning")
        return default_config(shell)


def save_config(config: ShellConfig) -> Path:
    """Write the explicitly set values to disk, replacing the previous file.

    Tools left at their default are not stored, so per-shell defaults keep
    applying to every shell that reads the file.
    """
    path = config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {
        tool.id.value: config.values[tool.id]
        for tool in TOOLS
        if tool.id in config.values
    }
    path.write_text(json.dumps(data, indent=2) + "\n")
    logger.debug("Saved config to %s", path)
    return path
