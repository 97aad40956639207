"""Status report of the shell experience, MOTD and managed tools."""

from __future__ import annotations

import os

from rich.console import Console, Group, RenderableType
from rich.table import Table
from rich.text import Text

from . import motd, shell
from .tools import TOOLS
from .ui import Theme
from .utils import capture_command, which


def current_shell() -> str:
    """Best-effort name of the shell that launched us (parent process)."""
    ppid = os.getppid()
    if ppid <= 0:
        return ""
    comm = capture_command(["ps", "-p", str(ppid), "-o", "comm="])
    if not comm:
        return ""
    # login shells show up as e.g. "-zsh"
    return os.path.basename(comm.lstrip("-"))


def _state_line(theme: Theme, label: str, on: bool, on_text: str, off_text: str) -> Text:  # noqa: FBT001
    style = theme.enabled if on else theme.disabled
    line = Text("  ")
    line.append("✓" if on else "✗", style=style)
    line.append(f" {label}: ")
    line.append(on_text if on else off_text, style=style)
    return line


def _shell_lines(
    theme: Theme,
    shells: list[str],
    status: dict[str, bool],
    default: str = "",
    current: str = "",
) -> list[Text]:
    lines = []
    for name in shells:
        line = _state_line(theme, name, status.get(name, False), "enabled", "disabled")
        if name == default and name == current:
            line.append(" ★ (default, current)", style=theme.default_marker)
        elif name == default:
            line.append(" ★ (default)", style=theme.default_marker)
        elif name == current:
            line.append(" ● (current)", style=theme.current_marker)
        lines.append(line)
    return lines


def build_status(theme: Theme) -> RenderableType:
    """Two-column status renderable."""
    shells = shell.installed_shells()
    default = shell.default_shell()
    current = current_shell()

    left: list[RenderableType] = [Text("Shell Experience:", style=theme.label)]
    if shells:
        left += _shell_lines(theme, shells, shell.check_status(), default, current)
    else:
        left.append(Text("  (no compatible shells found)"))
    left += [Text(""), Text("Message of the Day:", style=theme.label)]
    left += _shell_lines(theme, shells, motd.check_status())

    right: list[RenderableType] = [Text("Managed Tools:", style=theme.label)]
    deps = shell.check_dependencies()
    for tool in TOOLS:
        right.append(
            _state_line(theme, tool.name, deps[tool.binary], "installed", "not installed"),
        )
    right += [Text(""), Text("Package Manager:", style=theme.label)]
    if which("brew"):
        right.append(_state_line(theme, "Homebrew", True, "installed", ""))  # noqa: FBT003
        version = capture_command(["brew", "--version"])
        if version:
            right.append(Text(f"    {version.splitlines()[0]}"))
    else:
        right.append(_state_line(theme, "Homebrew", False, "", "not installed"))  # noqa: FBT003
        right.append(Text("    Install from: https://brew.sh"))

    grid = Table.grid(padding=(0, 2))
    grid.add_column(min_width=40)
    grid.add_column()
    grid.add_row(Group(*left), Group(*right))
    return grid


def show(console: Console, theme: Theme) -> None:
    """Print the status report."""
    console.print(Text("Bluefin CLI Status", style=f"{theme.title} underline"))
    console.print()
    console.print(build_status(theme))
