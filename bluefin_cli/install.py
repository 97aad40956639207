"""Installation of managed tools, Homebrew bundles and wallpapers."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import requests
import yaml
from rich.console import Console

from .tools import Tool
from .utils import capture_command, home_dir, is_linux, log, run_command, which

if TYPE_CHECKING:
    from .config import ShellConfig

# Initialize rich console
console = Console()
logger = logging.getLogger(__name__)

BUNDLES_FILE = Path(__file__).parent / "bundles.yaml"
WALLPAPERS_TAP = "ublue-os/tap"
FLATHUB_URL = "https://dl.flathub.org/repo/flathub.flatpakrepo"
_BREW_ENV = {"HOMEBREW_NO_ENV_HINTS": "1"}


class InstallError(RuntimeError):
    """A package manager invocation failed."""


class BundleError(RuntimeError):
    """A bundle could not be resolved, downloaded or installed."""


@dataclass(frozen=True)
class Bundle:
    """A remotely hosted Brewfile."""

    name: str
    file: str
    description: str
    url: str
    requires_flathub: bool = False


def ensure_brew() -> None:
    """Raise if Homebrew is not available."""
    if not which("brew"):
        msg = "Homebrew not found. Please install Homebrew first: https://brew.sh"
        raise BundleError(msg)


def ensure_tool(tool: Tool) -> bool:
    """Install ``tool`` through Homebrew if its binary is missing.

    Returns True if an installation was performed. A missing ``brew`` is only
    reported.
    """
    if which(tool.binary):
        logger.debug("%s already available", tool.binary)
        return False

    if not which("brew"):
        log(f"Homebrew not found. Cannot auto-install {tool.package}.", "warning")
        return False

    log(f"Installing {tool.package} via Homebrew...", "info", "⬇️")
    try:
        run_command(["brew", "install", tool.package])
    except (OSError, subprocess.CalledProcessError) as e:
        msg = f"failed to install {tool.package}: {e}"
        raise InstallError(msg) from e
    log(f"{tool.package} installed successfully!", "success", "✓")
    return True


def install_tools(config: ShellConfig) -> list[str]:
    """Install every enabled tool, one at a time in registry order.

    Failures are reported as warnings; returns the installed package names.
    """
    installed = []
    for tool in config.enabled_tools():
        try:
            if ensure_tool(tool):
                installed.append(tool.package)
        except InstallError as e:
            log(f"Warning: {e}", "warning")
    return installed


def load_bundles(path: Path = BUNDLES_FILE) -> dict[str, Bundle]:
    """Load the bundle catalogue from YAML."""
    with open(path) as file:
        data = yaml.safe_load(file)

    base_url = data["base_url"].rstrip("/")
    default_path = data["default_path"]
    bundles = {}
    for name, entry in data["bundles"].items():
        location = entry.get("path", default_path)
        bundles[name] = Bundle(
            name=name,
            file=entry["file"],
            description=entry["description"],
            url=f"{base_url}/{location}/{entry['file']}",
            requires_flathub=entry.get("requires_flathub", False),
        )
    return bundles


def list_bundles() -> None:
    """Display all available bundles."""
    console.print("📦 [bold cyan]Available Homebrew Bundles[/bold cyan]\n")
    for name, bundle in load_bundles().items():
        console.print(f"  [bold green]{name}:[/bold green] {bundle.description}")
    console.print("\n[blue]Usage:[/blue]")
    console.print("  bluefin-cli install <bundle-name>")
    console.print("  bluefin-cli install /path/to/Brewfile")


def download_file(url: str, destination: str) -> str:
    """Download a file from a URL to a destination path."""
    console.print(f"📥 [blue]Downloading from {url}[/blue]")
    try:
        response = requests.get(url, stream=True, timeout=30)
        response.raise_for_status()

        with open(destination, "wb") as f:
            for chunk in response.iter_content(chunk_size=8192):
                f.write(chunk)

        return destination
    except requests.RequestException as e:
        msg = f"Failed to download {url}: {e}"
        raise BundleError(msg) from e


def brew_bundle(brewfile: Path) -> None:
    """Run ``brew bundle install`` for ``brewfile``."""
    log(f"Installing packages from: {brewfile}", "info", "📦")
    try:
        run_command(
            ["brew", "bundle", "install", "--file", str(brewfile)],
            env=_BREW_ENV,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        msg = f"brew bundle failed: {e}"
        raise BundleError(msg) from e
    log("Bundle installed successfully!", "success", "✓")


def install_bundle(name_or_path: str) -> None:
    """Install a named bundle, ``all`` bundles, or a local Brewfile."""
    ensure_brew()

    if name_or_path == "all":
        console.print("📦 [bold cyan]Installing all bundles...[/bold cyan]")
        for name in load_bundles():
            log(f"Installing bundle: {name}", "info")
            try:
                install_bundle(name)
            except BundleError as e:
                log(f"Failed to install {name}: {e}", "error", "✗")
        return

    if "/" in name_or_path or "\\" in name_or_path:
        brewfile = Path(name_or_path)
        if not brewfile.exists():
            msg = f"Brewfile not found: {name_or_path}"
            raise BundleError(msg)
        brew_bundle(brewfile)
        return

    bundles = load_bundles()
    bundle = bundles.get(name_or_path)
    if bundle is None:
        available = ", ".join([*bundles, "all"])
        msg = f"unknown bundle: {name_or_path} (available: {available})"
        raise BundleError(msg)

    if bundle.requires_flathub:
        ensure_flathub()

    log(f"Downloading {bundle.name} bundle...", "info", "⬇️")
    with tempfile.TemporaryDirectory() as tmp_dir:
        brewfile = Path(tmp_dir) / bundle.file
        download_file(bundle.url, str(brewfile))
        brew_bundle(brewfile)


def is_gnome() -> bool:
    """Check if the current desktop environment is GNOME."""
    return "GNOME" in os.environ.get("XDG_CURRENT_DESKTOP", "").upper()


def full_desktop_available() -> bool:
    """The full-desktop bundle is only offered on Linux GNOME sessions."""
    return is_linux() and is_gnome()


def ensure_flathub() -> None:
    """Add the Flathub remote if flatpak is available and it is missing."""
    if not which("flatpak"):
        msg = "flatpak not found. Please install flatpak first: https://flatpak.org/setup/"
        raise BundleError(msg)

    remotes = capture_command(["flatpak", "remote-list"])
    if remotes is not None and "flathub" in remotes:
        return

    log("Adding Flathub remote...", "info")
    try:
        run_command(
            ["flatpak", "remote-add", "--if-not-exists", "flathub", FLATHUB_URL],
        )
    except (OSError, subprocess.CalledProcessError) as e:
        msg = f"failed to add Flathub remote: {e}"
        raise BundleError(msg) from e


def _ensure_tap(tap: str) -> None:
    ensure_brew()
    try:
        run_command(["brew", "tap", tap])
    except (OSError, subprocess.CalledProcessError) as e:
        msg = f"failed to tap {tap}: {e}"
        raise BundleError(msg) from e


def wallpaper_casks() -> list[str]:
    """Names of the wallpaper casks published in the ublue-os tap."""
    _ensure_tap(WALLPAPERS_TAP)
    tap_path = capture_command(["brew", "--repository", WALLPAPERS_TAP])
    if not tap_path:
        msg = "failed to get tap repository path"
        raise BundleError(msg)

    casks_dir = Path(tap_path) / "Casks"
    if not casks_dir.is_dir():
        msg = f"failed to read casks directory at {casks_dir}"
        raise BundleError(msg)

    return sorted(
        entry.stem
        for entry in casks_dir.glob("*.rb")
        if "wallpaper" in entry.stem.lower()
    )


def install_wallpaper_casks(casks: list[str]) -> None:
    """Install wallpaper casks, qualifying bare names with the tap."""
    if not casks:
        msg = "no wallpaper casks selected"
        raise BundleError(msg)
    _ensure_tap(WALLPAPERS_TAP)

    args = ["brew", "install", "--cask"]
    args += [c if "/" in c else f"{WALLPAPERS_TAP}/{c}" for c in casks]
    try:
        run_command(args, env=_BREW_ENV)
    except (OSError, subprocess.CalledProcessError) as e:
        msg = f"failed to install wallpaper casks: {e}"
        raise BundleError(msg) from e

    log("Wallpaper casks installed!", "success", "✓")
    if sys.platform == "darwin":
        pictures = home_dir() / "Library" / "Desktop Pictures"
        log(f"Wallpapers installed to: {pictures}", "info", "")
        log("To use: System Settings > Wallpaper > Add Folder", "info", "")
