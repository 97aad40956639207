"""Command-line interface for bluefin-cli."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from rich.console import Console

from . import __version__, brewfile, install, menu, motd, shell, starship, status
from .config import load_config_or_default, save_config
from .rcfile import SHELLS
from .tools import TOOLS
from .ui import DEFAULT_THEME
from .utils import log, setup_logging

# Initialize rich console
console = Console()
logger = logging.getLogger(__name__)


def _add_tool_flags(parser: argparse.ArgumentParser) -> None:
    """Add ``--<tool>/--no-<tool>`` switches; unset switches stay None."""
    for tool in TOOLS:
        parser.add_argument(
            f"--{tool.id.value}",
            dest=f"tool_{tool.id.value}",
            action=argparse.BooleanOptionalAction,
            default=None,
            help=f"Enable {tool.name} ({tool.description})",
        )


def _tool_overrides(args: argparse.Namespace) -> dict[str, bool]:
    """Tool switches explicitly given on the command line."""
    overrides = {}
    for tool in TOOLS:
        value = getattr(args, f"tool_{tool.id.value}", None)
        if value is not None:
            overrides[tool.id.value] = value
    return overrides


def shell_command(args: argparse.Namespace) -> None:
    """Toggle the shell experience, or configure its tools."""
    if args.target is None:
        menu.shell_menu(console, DEFAULT_THEME)
        return

    if args.target == "config":
        overrides = _tool_overrides(args)
        if not overrides:
            menu.configure_tools(console, DEFAULT_THEME)
            return
        config = load_config_or_default(shell.default_shell() or None)
        for name, enabled in overrides.items():
            config.set_enabled(name, enabled)
        path = save_config(config)
        shell.write_env_files(config)
        log(f"Configuration saved to {path}", "success", "✓")
        install.install_tools(config)
        return

    shell.toggle(args.target, args.state != "off")


def init_command(args: argparse.Namespace) -> None:
    """Print the initialisation script for a shell."""
    config = load_config_or_default(args.shell)
    for name, enabled in _tool_overrides(args).items():
        config.set_enabled(name, enabled)
    # stdout is evaluated by the shell: plain print, no markup
    print(shell.render_init(args.shell, config, motd=args.motd))


def install_command(args: argparse.Namespace) -> None:
    """Install bundles, list them, or install wallpapers."""
    if args.target is None:
        menu.bundles_menu(console, DEFAULT_THEME)
    elif args.target == "list":
        install.list_bundles()
    elif args.target == "wallpapers":
        if args.extra:
            install.install_wallpaper_casks(args.extra)
        else:
            menu.wallpapers_menu(console, DEFAULT_THEME)
    else:
        install.install_bundle(args.target)


def motd_command(args: argparse.Namespace) -> None:
    """Show, toggle or configure the message of the day."""
    if args.motd_command is None:
        menu.motd_menu(console, DEFAULT_THEME)
    elif args.motd_command == "show":
        motd.show()
    elif args.motd_command == "toggle":
        motd.toggle(args.target, args.state != "off")
    elif args.theme:
        motd.set_theme(args.theme)
    else:
        menu.motd_theme_selector(console, DEFAULT_THEME)


def starship_command(args: argparse.Namespace) -> None:
    """Install Starship or apply a preset."""
    if args.starship_command is None:
        menu.starship_menu(console, DEFAULT_THEME)
    elif args.starship_command == "install":
        starship.install()
    elif args.preset:
        starship.apply_theme(args.preset)
    else:
        menu.theme_selector(console, DEFAULT_THEME)


def brewfile_command(args: argparse.Namespace) -> None:
    """Manage the Brewfile in the current directory."""
    if args.brewfile_command == "init":
        brewfile.initialize()
    elif args.brewfile_command == "apply":
        brewfile.apply()
    else:
        brewfile.add_package(args.package)


def status_command(_args: Any) -> None:
    status.show(console, DEFAULT_THEME)


def menu_command(_args: Any) -> None:
    menu.main_menu(console, DEFAULT_THEME)


def osscripts_command(_args: Any) -> None:
    menu.osscripts_menu(console, DEFAULT_THEME)


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="bluefin-cli",
        description="bluefin-cli - Bring the Bluefin terminal experience to any machine",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"bluefin-cli version {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # shell command
    shell_parser = subparsers.add_parser(
        "shell",
        help="Toggle shell experience enhancements",
        description="Enable or disable the shell experience for a shell, "
        "or use 'shell config' to choose the enabled tools.",
    )
    shell_parser.add_argument(
        "target",
        nargs="?",
        choices=[*SHELLS, "config"],
        help="Shell to toggle, or 'config'",
    )
    shell_parser.add_argument("state", nargs="?", choices=["on", "off"], default="on")
    _add_tool_flags(shell_parser)
    shell_parser.set_defaults(func=shell_command)

    # init command
    init_parser = subparsers.add_parser(
        "init",
        help="Generate shell initialization script",
        description='Add `eval "$(bluefin-cli init bash)"` to ~/.bashrc, '
        '`eval "$(bluefin-cli init zsh)"` to ~/.zshrc, or '
        "`bluefin-cli init fish | source` to ~/.config/fish/config.fish.",
    )
    init_parser.add_argument("shell", choices=SHELLS)
    _add_tool_flags(init_parser)
    init_parser.add_argument(
        "--motd",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Show the message of the day in interactive shells",
    )
    init_parser.set_defaults(func=init_command)

    # install command
    install_parser = subparsers.add_parser(
        "install",
        help="Install Homebrew bundles",
        description="Install a predefined bundle ('list' shows them), 'all' "
        "bundles, a local Brewfile path, or 'wallpapers [CASK...]'.",
    )
    install_parser.add_argument("target", nargs="?", help="Bundle, path, 'list' or 'wallpapers'")
    install_parser.add_argument("extra", nargs="*", help="Wallpaper casks")
    install_parser.set_defaults(func=install_command)

    # motd command
    motd_parser = subparsers.add_parser("motd", help="Manage Message of the Day")
    motd_sub = motd_parser.add_subparsers(dest="motd_command")
    motd_sub.add_parser("show", help="Display the MOTD")
    toggle_parser = motd_sub.add_parser("toggle", help="Toggle MOTD for shells")
    toggle_parser.add_argument("target", nargs="?", choices=[*SHELLS, "all"], default="all")
    toggle_parser.add_argument("state", nargs="?", choices=["on", "off"], default="on")
    config_parser = motd_sub.add_parser("config", help="Configure MOTD theme")
    config_parser.add_argument("theme", nargs="?", choices=motd.THEMES)
    motd_parser.set_defaults(func=motd_command)

    # starship command
    starship_parser = subparsers.add_parser("starship", help="Manage Starship prompt themes")
    starship_sub = starship_parser.add_subparsers(dest="starship_command")
    starship_sub.add_parser("install", help="Install Starship prompt")
    theme_parser = starship_sub.add_parser("theme", help="Select and apply a Starship theme")
    theme_parser.add_argument("preset", nargs="?")
    starship_parser.set_defaults(func=starship_command)

    # brewfile command
    brewfile_parser = subparsers.add_parser("brewfile", help="Manage Homebrew Brewfiles")
    brewfile_sub = brewfile_parser.add_subparsers(dest="brewfile_command", required=True)
    brewfile_sub.add_parser("init", help="Initialize a new Brewfile")
    brewfile_sub.add_parser("apply", help="Apply Brewfile configuration")
    add_parser = brewfile_sub.add_parser("add", help="Add a package to your Brewfile")
    add_parser.add_argument("package")
    brewfile_parser.set_defaults(func=brewfile_command)

    # osscripts command
    osscripts_parser = subparsers.add_parser("osscripts", help="Run OS-provided scripts and recipes")
    osscripts_parser.set_defaults(func=osscripts_command)

    # status command
    status_parser = subparsers.add_parser("status", help="Show configuration status")
    status_parser.set_defaults(func=status_command)

    # menu command
    menu_parser = subparsers.add_parser("menu", help="Open the interactive main menu")
    menu_parser.set_defaults(func=menu_command)

    # version command
    version_parser = subparsers.add_parser("version", help="Print version information")
    version_parser.set_defaults(
        func=lambda _: console.print(f"[yellow]bluefin-cli[/] [bold]v{__version__}[/]"),
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main function to parse arguments and execute commands."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        if hasattr(args, "func"):
            args.func(args)
        else:
            menu_command(args)
    except KeyboardInterrupt:
        console.print()
        sys.exit(130)
    except Exception as e:  # noqa: BLE001
        log(f"Error: {e!s}", "error")
        if args.verbose:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
