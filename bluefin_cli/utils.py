"""Utility functions for bluefin-cli."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Literal

from rich.console import Console
from rich.logging import RichHandler

# Initialize rich consoles
console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)

_LEVEL_STYLES = {
    "info": ("🔄", "blue"),
    "success": ("✅", "green"),
    "warning": ("⚠️", "yellow"),
    "error": ("❌", "bold red"),
    "default": ("", ""),
}


def log(
    message: str,
    level: Literal["info", "success", "warning", "error", "default"] = "default",
    emoji: str | None = None,
) -> None:
    """Print a styled message to the console.

    Warnings and errors go to stderr so that output meant to be evaluated by a
    shell is never polluted.
    """
    default_emoji, style = _LEVEL_STYLES[level]
    prefix = emoji if emoji is not None else default_emoji
    text = f"[{style}]{message}[/{style}]" if style else message
    if prefix:
        text = f"{prefix} {text}"
    target = err_console if level in ("warning", "error") else console
    target.print(text)


def setup_logging(verbose: bool = False) -> None:  # noqa: FBT001, FBT002
    """Configure logging level based on verbosity."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def home_dir() -> Path:
    """Return the user's home directory, honouring ``$HOME``."""
    return Path(os.environ.get("HOME") or os.path.expanduser("~"))


def state_dir() -> Path:
    """Directory holding generated env files and MOTD assets."""
    return home_dir() / ".local" / "share" / "bluefin-cli"


def which(binary: str) -> str | None:
    """Look up ``binary`` in ``PATH``."""
    return shutil.which(binary)


def is_linux() -> bool:
    """Check if the OS is Linux."""
    return sys.platform.startswith("linux")


def run_command(
    cmd: list[str],
    *,
    env: dict[str, str] | None = None,
    input_text: str | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess:
    """Run ``cmd`` with inherited stdio and wait for it to finish.

    Extra ``env`` entries are layered on top of the current environment.
    """
    logger.debug("Running: %s", " ".join(cmd))
    full_env = {**os.environ, **env} if env else None
    return subprocess.run(  # noqa: S603
        cmd,
        env=full_env,
        input=input_text,
        text=input_text is not None,
        check=check,
    )


def capture_command(cmd: list[str]) -> str | None:
    """Run ``cmd`` and return its stripped stdout, or ``None`` on failure."""
    logger.debug("Capturing: %s", " ".join(cmd))
    try:
        result = subprocess.run(  # noqa: S603
            cmd,
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug("Command %s failed: %s", cmd[0], e)
        return None
    return result.stdout.strip()
