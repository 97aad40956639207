"""Message of the day: setup, display and per-shell toggling."""

from __future__ import annotations

import json
import logging
import platform
import random
import subprocess
from dataclasses import asdict, dataclass
from pathlib import Path

from rich.console import Console
from rich.markdown import Markdown

from . import rcfile
from .utils import capture_command, log, run_command, state_dir, which

# Initialize rich console
console = Console()
logger = logging.getLogger(__name__)

BLOCK_NAME = "motd"
SCRIPT_NAME = "bluefin-motd.sh"
THEMES = ("slate", "dark", "light", "dracula", "pink")

DEFAULT_TIPS = [
    "Use `brew search` and `brew install` to install packages. Homebrew will take care of updates automatically",
    "`tldr vim` will give you the basic rundown on commands for a given tool",
    "Performance profiling tools are built-in: try `top`, `htop`, and other debugging tools",
    "Switch shells safely: change your shell in Terminal settings instead of system-wide",
    "Container development is OS-agnostic - your devcontainers work on Linux, macOS, and Windows",
    "Use `docker compose` for multi-container development if devcontainers don't fit your workflow",
    "Bluefin separates the OS from your development environment - embrace the cloud-native workflow",
    "Check out DevPod for open-source, client-only development environments that work with any IDE",
    "Develop with devcontainers! Use `devcontainer.json` files in your projects for isolated, reproducible environments",
    "VS Code comes with devcontainers extension pre-installed - perfect for containerized development",
    "Use `eza -l --icons` for a beautiful file listing with icons and colors",
    "The `bat` command is like `cat` but with syntax highlighting and Git integration",
    "Navigate directories faster with `zoxide` - just use `z <partial-name>` to jump around",
    "Search your shell history with `atuin` using Ctrl+R for a better history search experience",
    "Customize your prompt with `starship config` to modify colors, icons, and modules",
]

TEMPLATE = """# 󱍢 Welcome to Bluefin CLI
󱋩 {name}:{tag}

|  Command | Description |
| ------- | ----------- |
| `bluefin-cli shell bash on`  | Enable the shell experience for bash  |
| `bluefin-cli status` | Show current configuration |
| `bluefin-cli --help` | Show all available commands |
| `brew help` | Manage command line packages |

{tip}

- **󰊤** [GitHub Issues](https://github.com/hanthor/bluefin-cli/issues)
- **󰈙** [Documentation](https://github.com/hanthor/bluefin-cli)
"""

LAUNCHER = """#!/usr/bin/env bash
bluefin-cli motd show
"""


@dataclass
class ImageInfo:
    """Operating system identification shown in the banner."""

    name: str = ""
    tag: str = ""
    flavor: str = "homebrew"
    vendor: str = "bluefin-cli"


@dataclass
class MotdConfig:
    """Contents of ``motd.json``."""

    tips_directory: str
    image_info_file: str
    template_file: str
    themes_directory: str
    check_outdated: str = "false"
    default_theme: str = "slate"

    def to_json(self) -> dict[str, str]:
        """Mapping with the dash-separated keys used in ``motd.json``."""
        return {key.replace("_", "-"): value for key, value in asdict(self).items()}

    @classmethod
    def from_json(cls, data: dict[str, str]) -> MotdConfig:
        """Build a config from the contents of ``motd.json``."""
        return cls(**{key.replace("-", "_"): value for key, value in data.items()})


def motd_dir() -> Path:
    """Directory holding the MOTD tips, launcher and ``motd.json``."""
    return state_dir() / "motd"


def default_motd_config(directory: Path) -> MotdConfig:
    """Config pointing at the assets under ``directory``."""
    return MotdConfig(
        tips_directory=str(directory / "tips"),
        image_info_file=str(directory / "image-info.json"),
        template_file=str(directory / "template.md"),
        themes_directory=str(directory / "themes"),
    )


def setup_motd() -> Path:
    """Create the MOTD directory, default tips, launcher script and config.

    Existing tips and an existing ``motd.json`` are left untouched.
    """
    directory = motd_dir()
    tips = directory / "tips"
    tips.mkdir(parents=True, exist_ok=True)

    for i, tip in enumerate(DEFAULT_TIPS, start=1):
        tip_file = tips / f"{i:02d}-tip.md"
        if not tip_file.exists():
            tip_file.write_text(tip)

    script = directory / SCRIPT_NAME
    script.write_text(LAUNCHER)
    script.chmod(0o755)

    config_file = directory / "motd.json"
    if not config_file.exists():
        data = default_motd_config(directory).to_json()
        config_file.write_text(json.dumps(data, indent=2))
    return directory


def directive(shell: str) -> str:
    """rc-file line that runs the launcher script for ``shell``."""
    script = motd_dir() / SCRIPT_NAME
    if rcfile.validate_shell(shell) == "fish":
        return f"if status is-interactive; and test -x {script}; {script}; end"
    return f"[ -x {script} ] && {script}"


def toggle(target: str, enable: bool) -> None:  # noqa: FBT001
    """Enable or disable the MOTD for one shell, or ``all`` of them.

    Errors for one shell are reported and do not stop the others.
    """
    shells = rcfile.SHELLS if target == "all" else (target,)
    for shell in shells:
        try:
            _toggle_for_shell(shell, enable)
        except (ValueError, OSError) as e:
            log(f"Error toggling MOTD for {shell}: {e}", "error", "✗")


def _toggle_for_shell(shell: str, enable: bool) -> None:  # noqa: FBT001
    rcfile.validate_shell(shell)
    setup_motd()
    if enable:
        if rcfile.enable_block(shell, BLOCK_NAME, [directive(shell)]):
            log(f"MOTD enabled for {shell}", "success", "✓")
        else:
            log(f"MOTD already enabled for {shell}", "info", "ℹ")
    elif rcfile.disable_block(shell, BLOCK_NAME):
        log(f"MOTD disabled for {shell}", "success", "✓")
    else:
        log(f"MOTD already disabled for {shell}", "info", "ℹ")


def check_status() -> dict[str, bool]:
    """Return whether the MOTD is enabled for each shell."""
    return rcfile.block_status(BLOCK_NAME)


def parse_os_release(text: str) -> tuple[str, str]:
    """Extract ``NAME`` and ``VERSION_ID`` from os-release content."""
    name = tag = ""
    for line in text.splitlines():
        if line.startswith("NAME="):
            name = line.removeprefix("NAME=").strip('"')
        elif line.startswith("VERSION_ID="):
            tag = line.removeprefix("VERSION_ID=").strip('"')
    return name, tag


def image_info(os_release: Path = Path("/etc/os-release")) -> ImageInfo:
    """Detect the operating system name and version."""
    info = ImageInfo()
    system = platform.system()
    if system == "Darwin":
        info.name = "macOS"
        info.tag = capture_command(["sw_vers", "-productVersion"]) or ""
    elif system == "Linux":
        try:
            info.name, info.tag = parse_os_release(os_release.read_text())
        except OSError as e:
            logger.debug("Could not read %s: %s", os_release, e)

    info.name = info.name or system.lower()
    info.tag = info.tag or "unknown"
    return info


def random_tip(tips_dir: Path) -> str:
    """A random tip from ``tips_dir``, or an empty string."""
    files = sorted(tips_dir.glob("*.md"))
    if not files:
        return ""
    try:
        content = random.choice(files).read_text()  # noqa: S311
    except OSError:
        return ""
    return f"💡 **Tip:** {content}"


def render_motd() -> str:
    """Markdown content of the banner."""
    directory = setup_motd()
    info = image_info()
    return TEMPLATE.format(
        name=info.name,
        tag=info.tag,
        tip=random_tip(directory / "tips"),
    )


def show() -> None:
    """Display the MOTD, through ``glow`` when it is installed."""
    content = render_motd()
    glow = which("glow")
    if glow:
        try:
            run_command([glow, "-s", "dark", "-w", "80", "-"], input_text=content)
            return
        except (OSError, subprocess.CalledProcessError) as e:
            logger.debug("glow failed, falling back to plain output: %s", e)
    console.print(Markdown(content))


def load_motd_config() -> MotdConfig:
    """Read ``motd.json``, or the defaults if it is missing or invalid."""
    directory = motd_dir()
    config_file = directory / "motd.json"
    try:
        return MotdConfig.from_json(json.loads(config_file.read_text()))
    except (OSError, ValueError, TypeError) as e:
        logger.debug("Using default MOTD config: %s", e)
        return default_motd_config(directory)


def set_theme(theme: str) -> None:
    """Store ``theme`` as the MOTD theme."""
    if theme not in THEMES:
        msg = f"unknown MOTD theme: {theme} (available: {', '.join(THEMES)})"
        raise ValueError(msg)
    directory = setup_motd()
    config = load_motd_config()
    config.default_theme = theme
    (directory / "motd.json").write_text(json.dumps(config.to_json(), indent=2))
    log(f"MOTD theme set to: {theme}", "success", "✓")
