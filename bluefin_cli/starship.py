"""Starship prompt installation and preset themes."""

from __future__ import annotations

import subprocess

from .utils import home_dir, log, run_command, which

# (preset, label) pairs offered by the theme selector
PRESETS: tuple[tuple[str, str], ...] = (
    ("nerd-font-symbols", "Nerd Font Symbols"),
    ("no-runtime-versions", "No Runtime Versions"),
    ("plain-text-symbols", "Plain Text Symbols"),
    ("pure-preset", "Pure Preset"),
    ("tokyo-night", "Tokyo Night"),
    ("gruvbox-rainbow", "Gruvbox Rainbow"),
    ("catppuccin-powerline", "Catppuccin Powerline"),
    ("jetpack", "Jetpack"),
    ("no-empty-icons", "No Empty Icons"),
    ("no-nerd-font", "No Nerd Font"),
    ("pastel-powerline", "Pastel Powerline"),
)

INSTALLER = "curl -sS https://starship.rs/install.sh | sh -s -- -y"


class StarshipError(RuntimeError):
    """Starship could not be installed or configured."""


def install() -> None:
    """Install Starship with Homebrew, or the official installer."""
    if which("starship"):
        log("Starship is already installed", "success", "✓")
        return

    log("Installing Starship...", "info", "⬇️")
    if which("brew"):
        cmd = ["brew", "install", "starship"]
    else:
        cmd = ["sh", "-c", INSTALLER]

    try:
        run_command(cmd)
    except (OSError, subprocess.CalledProcessError) as e:
        msg = f"installation failed: {e}"
        raise StarshipError(msg) from e
    log("Starship installed successfully!", "success", "✓")


def apply_theme(theme: str) -> None:
    """Write the Starship preset ``theme`` to ``~/.config/starship.toml``."""
    config_dir = home_dir() / ".config"
    config_dir.mkdir(parents=True, exist_ok=True)
    target = config_dir / "starship.toml"

    try:
        run_command(["starship", "preset", theme, "-o", str(target)])
    except (OSError, subprocess.CalledProcessError) as e:
        msg = f"failed to apply theme: {e}"
        raise StarshipError(msg) from e
    log(f"Starship theme '{theme}' applied to {target}", "success", "✓")
