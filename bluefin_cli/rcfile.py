"""Idempotent management of bluefin-cli blocks inside shell rc files.

A managed block looks like::

    # >>> bluefin-cli shell-config >>>
    eval "$(bluefin-cli init bash)"
    # <<< bluefin-cli shell-config <<<

Enabling appends the block when its begin marker is absent; disabling removes
everything from the begin marker through the matching end marker.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .utils import home_dir, log

logger = logging.getLogger(__name__)

SHELLS: tuple[str, ...] = ("bash", "zsh", "fish")

_RC_FILES = {
    "bash": (".bashrc",),
    "zsh": (".zshrc",),
    "fish": (".config", "fish", "config.fish"),
}


class UnsupportedShellError(ValueError):
    """Raised for shells other than bash, zsh and fish."""

    def __init__(self, shell: str) -> None:
        """Initialize the UnsupportedShellError."""
        self.shell = shell
        super().__init__(
            f"unsupported shell: {shell} (supported: {', '.join(SHELLS)})",
        )


def validate_shell(shell: str) -> str:
    """Return ``shell`` if supported, raise otherwise."""
    if shell not in _RC_FILES:
        raise UnsupportedShellError(shell)
    return shell


def rc_path(shell: str, home: Path | None = None) -> Path:
    """Canonical startup file for ``shell``."""
    validate_shell(shell)
    return (home or home_dir()).joinpath(*_RC_FILES[shell])


def begin_marker(name: str) -> str:
    """First line of block ``name``."""
    return f"# >>> bluefin-cli {name} >>>"


def end_marker(name: str) -> str:
    """Last line of block ``name``."""
    return f"# <<< bluefin-cli {name} <<<"


def _read(path: Path) -> str:
    # newline="" keeps \r\n endings intact
    try:
        with path.open(newline="") as f:
            return f.read()
    except FileNotFoundError:
        return ""


def _write(path: Path, content: str) -> None:
    with path.open("w", newline="") as f:
        f.write(content)


def has_block(shell: str, name: str, home: Path | None = None) -> bool:
    """Return True if the rc file of ``shell`` contains block ``name``."""
    return begin_marker(name) in _read(rc_path(shell, home))


def enable_block(
    shell: str,
    name: str,
    lines: list[str],
    home: Path | None = None,
) -> bool:
    """Append block ``name`` to the rc file of ``shell``.

    Returns False, leaving the file alone, when the block is already present.
    """
    path = rc_path(shell, home)
    content = _read(path)
    if begin_marker(name) in content:
        logger.debug("%s already contains block %s", path, name)
        return False

    if content and not content.endswith("\n"):
        content += "\n"
    block = [begin_marker(name), *lines, end_marker(name)]
    content += "\n".join(block) + "\n"

    path.parent.mkdir(parents=True, exist_ok=True)
    _write(path, content)
    logger.debug("Added block %s to %s", name, path)
    return True


def remove_block(content: str, name: str) -> str:
    """Return ``content`` with every block ``name`` removed."""
    begin, end = begin_marker(name), end_marker(name)
    # only "\n" separates lines; form feeds and the like are line content
    lines = content.split("\n")
    kept: list[str] = []
    i = 0
    while i < len(lines):
        if begin not in lines[i]:
            kept.append(lines[i])
            i += 1
            continue

        close = next(
            (j for j in range(i + 1, len(lines)) if end in lines[j]),
            None,
        )
        if close is None:
            log(
                f"Found '{begin}' without a matching end marker; "
                "removing the marker line only",
                "warning",
            )
            i += 1
            continue

        i = close + 1

    text = "\n".join(kept).rstrip("\n")
    return text + "\n" if text else ""


def disable_block(shell: str, name: str, home: Path | None = None) -> bool:
    """Remove block ``name`` from the rc file of ``shell``.

    Returns False, leaving the file alone, when the block is not present.
    """
    path = rc_path(shell, home)
    content = _read(path)
    if begin_marker(name) not in content:
        logger.debug("%s has no block %s", path, name)
        return False

    _write(path, remove_block(content, name))
    logger.debug("Removed block %s from %s", name, path)
    return True


def block_status(name: str, home: Path | None = None) -> dict[str, bool]:
    """Presence of block ``name`` for every supported shell."""
    return {shell: has_block(shell, name, home) for shell in SHELLS}
