"""Shell experience integration: rc-file toggling and the ``init`` script."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from . import rcfile
from .config import ShellConfig, load_config_or_default
from .tools import TOOLS
from .utils import log, state_dir, which

logger = logging.getLogger(__name__)

BLOCK_NAME = "shell-config"
RESOURCES_DIR = Path(__file__).parent / "resources"

_DIRECTIVES = {
    "bash": 'eval "$(bluefin-cli init bash)"',
    "zsh": 'eval "$(bluefin-cli init zsh)"',
    "fish": "bluefin-cli init fish | source",
}

_MOTD_HOOKS = {
    "posix": """# bluefin-cli motd hook
if [ -n "$PS1" ] && [ -t 1 ]; then
    bluefin-cli motd show
fi""",
    "fish": """# bluefin-cli motd hook
if status is-interactive
    bluefin-cli motd show
end""",
}


def _family(shell: str) -> str:
    return "fish" if rcfile.validate_shell(shell) == "fish" else "posix"


def directive(shell: str) -> str:
    """Line that hooks ``bluefin-cli init`` into the rc file of ``shell``."""
    return _DIRECTIVES[rcfile.validate_shell(shell)]


def toggle(shell: str, enable: bool, home: Path | None = None) -> bool:  # noqa: FBT001
    """Enable or disable the shell experience for ``shell``.

    Returns True if the rc file was changed.
    """
    if enable:
        changed = rcfile.enable_block(shell, BLOCK_NAME, [directive(shell)], home)
        if changed:
            log(f"Shell experience enabled for {shell}", "success", "✓")
            rc = rcfile.rc_path(shell, home)
            log(f"Restart your shell or source {rc}", "info", "ℹ")
        else:
            log(f"Shell experience already enabled for {shell}", "info", "ℹ")
        return changed

    changed = rcfile.disable_block(shell, BLOCK_NAME, home)
    if changed:
        log(f"Shell experience disabled for {shell}", "success", "✓")
    else:
        log(f"Shell experience already disabled for {shell}", "info", "ℹ")
    return changed


def check_status(home: Path | None = None) -> dict[str, bool]:
    """Return whether the shell experience is enabled for each shell."""
    return rcfile.block_status(BLOCK_NAME, home)


def installed_shells() -> list[str]:
    """Supported shells that are present in PATH."""
    return [shell for shell in rcfile.SHELLS if which(shell)]


def default_shell() -> str:
    """Name of the user's login shell, from ``$SHELL``."""
    return os.path.basename(os.environ.get("SHELL", ""))


def check_dependencies() -> dict[str, bool]:
    """Presence in PATH of every managed tool's binary."""
    return {tool.binary: which(tool.binary) is not None for tool in TOOLS}


def render_env(shell: str, config: ShellConfig) -> str:
    """Environment variable block reflecting ``config``."""
    fish = _family(shell) == "fish"
    lines = []
    for tool in TOOLS:
        value = int(config.is_enabled(tool))
        if fish:
            lines.append(f"set -gx {tool.env_var} {value}")
        else:
            lines.append(f"export {tool.env_var}={value}")
    return "\n".join(lines) + "\n"


def shell_script(shell: str) -> str:
    """Static alias/initialisation snippet for the family of ``shell``."""
    name = "shell.fish" if _family(shell) == "fish" else "shell.sh"
    return (RESOURCES_DIR / name).read_text()


def render_init(
    shell: str,
    config: ShellConfig | None = None,
    motd: bool = True,  # noqa: FBT001, FBT002
) -> str:
    """Full initialisation script evaluated by the user's shell."""
    rcfile.validate_shell(shell)
    if config is None:
        config = load_config_or_default(shell)

    parts = [render_env(shell, config), shell_script(shell)]
    if motd:
        parts.append(_MOTD_HOOKS[_family(shell)] + "\n")
    return "\n".join(parts)


def write_env_files(
    config: ShellConfig,
    directory: Path | None = None,
) -> list[Path]:
    """Persist the env block and snippet for both shell families."""
    directory = directory or state_dir()
    directory.mkdir(parents=True, exist_ok=True)
    written = []
    for filename, shell in (("env.sh", "bash"), ("env.fish", "fish")):
        path = directory / filename
        path.write_text(render_env(shell, config) + "\n" + shell_script(shell))
        logger.debug("Wrote %s", path)
        written.append(path)
    return written
