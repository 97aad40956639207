"""bluefin-cli - the Bluefin terminal experience on any machine.

Toggles shell enhancements (eza, bat, ugrep, atuin, starship, zoxide, ...)
in bash, zsh and fish, installs the tools and Homebrew bundles they need,
and shows a message of the day.
"""

from __future__ import annotations

__version__ = "0.0.3"

from . import config, install, rcfile, shell, tools, utils  # noqa: E402
from .cli import main  # noqa: E402
from .config import ShellConfig, default_config, load_config, save_config  # noqa: E402
from .install import install_bundle, install_tools  # noqa: E402
from .rcfile import disable_block, enable_block, has_block  # noqa: E402
from .shell import check_status, render_init, toggle  # noqa: E402
from .tools import TOOLS, Tool, ToolId, get_tool  # noqa: E402

__all__ = [
    "TOOLS",
    "ShellConfig",
    "Tool",
    "ToolId",
    "check_status",
    "config",
    "default_config",
    "disable_block",
    "enable_block",
    "get_tool",
    "has_block",
    "install",
    "install_bundle",
    "install_tools",
    "load_config",
    "main",
    "rcfile",
    "render_init",
    "save_config",
    "shell",
    "toggle",
    "tools",
    "utils",
]
