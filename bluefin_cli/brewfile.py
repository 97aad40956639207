"""Management of a Brewfile in the working directory."""

from __future__ import annotations

import subprocess
from pathlib import Path

from .utils import log, run_command

SCAFFOLD = "# Brewfile - Add your packages here\n\n"


class BrewfileError(RuntimeError):
    """The Brewfile is missing, already present, or failed to apply."""


def initialize(directory: Path = Path()) -> Path:
    """Create a new, empty Brewfile scaffold."""
    path = directory / "Brewfile"
    if path.exists():
        msg = f"Brewfile already exists in {directory.resolve()}"
        raise BrewfileError(msg)

    path.write_text(SCAFFOLD)
    log("Brewfile created successfully!", "success", "✓")
    log(f"  Location: {path}", "info", "")
    return path


def apply(directory: Path = Path()) -> None:
    """Run ``brew bundle install`` against the Brewfile."""
    path = directory / "Brewfile"
    if not path.exists():
        msg = f"Brewfile not found in {directory.resolve()}"
        raise BrewfileError(msg)

    log("Installing packages from Brewfile...", "info", "📦")
    try:
        run_command(["brew", "bundle", "install", "--file", str(path)])
    except (OSError, subprocess.CalledProcessError) as e:
        msg = f"brew bundle failed: {e}"
        raise BrewfileError(msg) from e
    log("All packages installed successfully!", "success", "✓")


def add_package(package: str, directory: Path = Path()) -> None:
    """Append a ``brew`` entry for ``package``."""
    path = directory / "Brewfile"
    try:
        content = path.read_text()
    except FileNotFoundError:
        msg = "Brewfile not found. Run 'bluefin-cli brewfile init' first"
        raise BrewfileError(msg) from None

    if content and not content.endswith("\n"):
        content += "\n"
    path.write_text(f'{content}brew "{package}"\n')
    log(f"Added '{package}' to Brewfile", "success", "✓")
