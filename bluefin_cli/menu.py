"""Interactive menus mirroring the CLI subcommands."""

from __future__ import annotations

from typing import Callable

from rich.console import Console

from . import install, motd, osscripts, shell, starship, status
from .config import load_config_or_default, save_config
from .rcfile import SHELLS
from .tools import TOOLS
from .ui import Theme, clear_screen, multi_select, pause, render_header, select

APP_TITLE = "Bluefin CLI"

BUNDLE_LABELS = {
    "ai": "🤖 AI Tools",
    "cli": "💻 CLI Essentials",
    "cncf": "☁️  CNCF Tools",
    "experimental-ide": "🧪 Experimental IDE",
    "fonts": "🔤 Development Fonts",
    "ide": "📝 IDE Tools",
    "k8s": "☸️  Kubernetes Tools",
    "full-desktop": "🖥️  Full GNOME Desktop",
}


def main_menu(console: Console, theme: Theme) -> None:
    """Top-level menu loop."""
    while True:
        clear_screen(console)
        render_header(console, theme, APP_TITLE, "Main Menu")
        options = [
            ("status", "📊 Status"),
            ("shell", "✨ Shell Experience"),
            ("motd", "📰 MOTD"),
            ("bundles", "📦 Install Tools"),
            ("wallpapers", "🖼  Wallpapers"),
            ("starship", "🚀 Starship Theme"),
        ]
        if osscripts.discover_os_scripts():
            options.append(("osscripts", "⚙️  OS Scripts"))
        options.append(("exit", "Exit"))

        choice = select(console, theme, "Choose an action", options)
        if choice in (None, "exit"):
            return
        if choice == "status":
            status.show(console, theme)
            pause(console, theme)
        elif choice == "shell":
            shell_menu(console, theme)
        elif choice == "motd":
            motd_menu(console, theme)
        elif choice == "bundles":
            bundles_menu(console, theme)
        elif choice == "wallpapers":
            wallpapers_menu(console, theme)
        elif choice == "starship":
            starship_menu(console, theme)
        elif choice == "osscripts":
            osscripts_menu(console, theme)


def shell_menu(console: Console, theme: Theme) -> None:
    """Toggle the shell experience and configure its components."""
    while True:
        clear_screen(console)
        render_header(console, theme, APP_TITLE, "Shell Configuration")

        current = shell.default_shell()
        if current not in SHELLS:
            current = "bash"
        enabled = shell.check_status()[current]
        verb = "Disable" if enabled else "Enable"

        action = select(
            console,
            theme,
            "Choose an option",
            [
                ("toggle_current", f"{verb} for current shell ({current})"),
                ("components", "Configure Components"),
                ("shells", "Enable/Disable for other shells"),
                ("exit", "Exit to Main Menu"),
            ],
        )
        if action in (None, "exit"):
            return
        if action == "toggle_current":
            shell.toggle(current, not enabled)
            pause(console, theme)
        elif action == "components":
            configure_tools(console, theme)
        elif action == "shells":
            toggle_shells(
                console,
                theme,
                "Shell > Shells",
                shell.check_status(),
                shell.toggle,
            )


def toggle_shells(
    console: Console,
    theme: Theme,
    subtitle: str,
    current_status: dict[str, bool],
    toggle: Callable[[str, bool], object],
) -> None:
    """Multi-select shells and toggle those whose state changed."""
    clear_screen(console)
    render_header(console, theme, APP_TITLE, subtitle)
    before = [name for name in SHELLS if current_status.get(name)]
    after = multi_select(
        console,
        theme,
        "Manage shells",
        [(name, name) for name in SHELLS],
        selected=before,
        description="Selected = ON, Deselected = OFF",
    )
    if after is None:
        return
    for name in SHELLS:
        if (name in before) != (name in after):
            toggle(name, name in after)
    pause(console, theme)


def configure_tools(console: Console, theme: Theme) -> None:
    """Choose enabled tools, save them and install what is missing."""
    clear_screen(console)
    render_header(console, theme, APP_TITLE, "Shell > Components")

    config = load_config_or_default(shell.default_shell() or None)
    chosen = multi_select(
        console,
        theme,
        "Select tools to enable",
        [(tool.id.value, f"{tool.name.lower()} ({tool.description})") for tool in TOOLS],
        selected=[tool.id.value for tool in config.enabled_tools()],
    )
    if chosen is None:
        return

    for tool in TOOLS:
        config.set_enabled(tool, tool.id.value in chosen)
    save_config(config)
    shell.write_env_files(config)
    install.install_tools(config)
    console.print(f"[{theme.success}]Configuration saved! Tools installed/updated.[/]")
    pause(console, theme)


def motd_menu(console: Console, theme: Theme) -> None:
    """Show the MOTD or toggle it per shell."""
    while True:
        clear_screen(console)
        render_header(console, theme, APP_TITLE, "Main Menu > MOTD")
        action = select(
            console,
            theme,
            "MOTD - What do you want to do?",
            [
                ("show", "Show MOTD"),
                ("toggle", "Toggle for shells"),
                ("exit", "Exit to Main Menu"),
            ],
        )
        if action in (None, "exit"):
            return
        if action == "show":
            motd.show()
            pause(console, theme)
        else:
            toggle_shells(
                console,
                theme,
                "MOTD > Shells",
                motd.check_status(),
                motd.toggle,
            )


def bundles_menu(console: Console, theme: Theme) -> None:
    """Select and install Homebrew bundles."""
    clear_screen(console)
    render_header(console, theme, APP_TITLE, "Main Menu > Install Apps")
    bundles = install.load_bundles()
    options = [
        (name, BUNDLE_LABELS.get(name, name))
        for name in bundles
        if name != "full-desktop" or install.full_desktop_available()
    ]
    selected = multi_select(console, theme, "Select bundles to install", options)
    if not selected:
        return
    for name in selected:
        install.install_bundle(name)
    pause(console, theme)


def wallpapers_menu(console: Console, theme: Theme) -> None:
    """Select and install wallpaper casks."""
    clear_screen(console)
    render_header(console, theme, APP_TITLE, "Main Menu > Wallpapers")
    casks = install.wallpaper_casks()
    if not casks:
        msg = f"no wallpaper casks found in {install.WALLPAPERS_TAP}"
        raise install.BundleError(msg)
    selected = multi_select(
        console,
        theme,
        "Select wallpapers to install",
        [(cask, cask) for cask in casks],
    )
    if not selected:
        return
    install.install_wallpaper_casks(selected)
    pause(console, theme)


def theme_selector(console: Console, theme: Theme) -> None:
    """Choose a Starship preset and apply it."""
    preset = select(
        console,
        theme,
        "Choose a Starship theme",
        list(starship.PRESETS),
        description="Select a preset theme for your terminal prompt",
    )
    if preset is not None:
        starship.apply_theme(preset)


def starship_menu(console: Console, theme: Theme) -> None:
    clear_screen(console)
    render_header(console, theme, APP_TITLE, "Main Menu > Starship")
    starship.install()
    theme_selector(console, theme)
    pause(console, theme)


def motd_theme_selector(console: Console, theme: Theme) -> None:
    choice = select(
        console,
        theme,
        "Choose MOTD theme",
        [(name, name.capitalize()) for name in motd.THEMES],
    )
    if choice is not None:
        motd.set_theme(choice)


def osscripts_menu(console: Console, theme: Theme) -> None:
    """Pick and run an OS-provided recipe."""
    recipes = osscripts.discover_os_scripts()
    if not recipes:
        msg = f"no OS scripts found in {osscripts.SHARE_DIR}/*/just/"
        raise FileNotFoundError(msg)
    options = [
        (str(i), f"{'🐚' if recipe.kind == 'bash' else '📜'} {recipe.display_name}")
        for i, recipe in enumerate(recipes)
    ]
    choice = select(
        console,
        theme,
        "Select a script or recipe to run",
        options,
        description="Choose from available OS-provided scripts",
    )
    if choice is not None:
        osscripts.run_recipe(recipes[int(choice)])
