"""Presentation context and prompt helpers for the interactive menus.

Every rendering function receives the ``Console`` and ``Theme`` to use, so
nothing depends on module import order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.text import Text

Option = tuple[str, str]  # (value, label)


@dataclass(frozen=True)
class Theme:
    """Named rich styles used across the UI."""

    title: str = "bold cyan"
    subtitle: str = "bright_black"
    success: str = "bold green"
    error: str = "bold red"
    warning: str = "yellow"
    info: str = "blue"
    enabled: str = "green"
    disabled: str = "bright_black"
    label: str = "bold blue"
    default_marker: str = "gold1"
    current_marker: str = "aquamarine1"
    faint: str = "dim"


DEFAULT_THEME = Theme()


def clear_screen(console: Console) -> None:
    console.clear()


def render_header(
    console: Console,
    theme: Theme,
    title: str,
    subtitle: str = "",
) -> None:
    """Consistent header for menus."""
    console.rule(Text(title, style=theme.title))
    if subtitle:
        console.print(Text(subtitle, style=theme.subtitle))
    console.print()


def pause(console: Console, theme: Theme) -> None:
    """Wait for Enter before continuing."""
    console.print()
    try:
        console.input(Text("Press Enter to continue...", style=theme.faint))
    except (EOFError, KeyboardInterrupt):
        console.print()


def select(
    console: Console,
    theme: Theme,
    title: str,
    options: Sequence[Option],
    description: str = "",
) -> str | None:
    """Pick one option; returns None when the user aborts."""
    console.print(Text(title, style=theme.label))
    if description:
        console.print(Text(description, style=theme.subtitle))
    for i, (_, label) in enumerate(options, start=1):
        console.print(f"  [{theme.info}]{i}.[/{theme.info}] {escape(label)}")
    choices = [str(i) for i in range(1, len(options) + 1)]
    try:
        answer = Prompt.ask("Choose", console=console, choices=choices)
    except (EOFError, KeyboardInterrupt):
        console.print()
        return None
    return options[int(answer) - 1][0]


def parse_selection(answer: str, count: int) -> list[int] | None:
    """Parse ``"1, 3 4"`` into zero-based indices; None if invalid."""
    indices = []
    for token in answer.replace(",", " ").split():
        if not token.isdigit() or not 1 <= int(token) <= count:
            return None
        index = int(token) - 1
        if index not in indices:
            indices.append(index)
    return indices


def multi_select(
    console: Console,
    theme: Theme,
    title: str,
    options: Sequence[Option],
    selected: Sequence[str] = (),
    description: str = "Enter the numbers to select, separated by spaces",
) -> list[str] | None:
    """Pick any number of options; returns None when the user aborts."""
    console.print(Text(title, style=theme.label))
    if description:
        console.print(Text(description, style=theme.subtitle))
    for i, (value, label) in enumerate(options, start=1):
        mark = "x" if value in selected else " "
        box = escape(f"[{mark}]")
        console.print(f"  [{theme.info}]{i}.[/{theme.info}] {box} {escape(label)}")

    default = " ".join(
        str(i) for i, (value, _) in enumerate(options, start=1) if value in selected
    )
    while True:
        try:
            answer = Prompt.ask("Selection", console=console, default=default)
        except (EOFError, KeyboardInterrupt):
            console.print()
            return None
        indices = parse_selection(answer, len(options))
        if indices is not None:
            return [options[i][0] for i in sorted(indices)]
        console.print(Text("Please enter valid option numbers", style=theme.error))
