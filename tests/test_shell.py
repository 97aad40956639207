"""Tests for the shell experience toggle and the ``init`` script."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from bluefin_cli import shell
from bluefin_cli.config import default_config, save_config
from bluefin_cli.rcfile import UnsupportedShellError, begin_marker, end_marker
from bluefin_cli.tools import TOOLS


def test_enable_bash_on_fresh_home(home: Path) -> None:
    assert shell.toggle("bash", True)  # noqa: FBT003

    content = (home / ".bashrc").read_text()
    assert content.count(begin_marker(shell.BLOCK_NAME)) == 1
    assert content.count(shell.directive("bash")) == 1
    assert content.count(end_marker(shell.BLOCK_NAME)) == 1
    assert shell.check_status() == {"bash": True, "zsh": False, "fish": False}


def test_toggle_is_idempotent(home: Path, capsys: pytest.CaptureFixture) -> None:
    assert shell.toggle("zsh", True)  # noqa: FBT003
    assert not shell.toggle("zsh", True)  # noqa: FBT003
    assert "already enabled" in capsys.readouterr().out

    assert shell.toggle("zsh", False)  # noqa: FBT003
    assert not shell.toggle("zsh", False)  # noqa: FBT003
    assert "already disabled" in capsys.readouterr().out
    assert (home / ".zshrc").read_text() == ""


def test_toggle_fish_uses_source_directive(home: Path) -> None:
    shell.toggle("fish", True)  # noqa: FBT003
    config_fish = home / ".config" / "fish" / "config.fish"
    assert "bluefin-cli init fish | source" in config_fish.read_text()


def test_toggle_unsupported_shell(home: Path) -> None:
    with pytest.raises(UnsupportedShellError):
        shell.toggle("powershell", True)  # noqa: FBT003
    assert list(home.iterdir()) == []


def test_render_env_posix_and_fish() -> None:
    config = default_config("bash")
    config.set_enabled("eza", False)  # noqa: FBT003

    bash = shell.render_env("bash", config)
    assert "export BLUEFIN_SHELL_ENABLE_EZA=0\n" in bash
    assert "export BLUEFIN_SHELL_ENABLE_BAT=1\n" in bash
    assert "export BLUEFIN_SHELL_ENABLE_ATUIN=0\n" in bash
    assert len(bash.splitlines()) == len(TOOLS)

    fish = shell.render_env("fish", config)
    assert "set -gx BLUEFIN_SHELL_ENABLE_EZA 0\n" in fish
    assert "set -gx BLUEFIN_SHELL_ENABLE_ZOXIDE 1\n" in fish


def test_render_init_uses_saved_config(home: Path) -> None:  # noqa: ARG001
    config = default_config()
    config.set_enabled("starship", False)  # noqa: FBT003
    save_config(config)

    script = shell.render_init("zsh")
    assert "export BLUEFIN_SHELL_ENABLE_STARSHIP=0" in script
    # atuin is on by default for zsh
    assert "export BLUEFIN_SHELL_ENABLE_ATUIN=1" in script
    assert "alias ls='eza'" in script
    assert "starship init" in script
    assert "bluefin-cli motd show" in script


def test_render_init_without_motd(home: Path) -> None:  # noqa: ARG001
    script = shell.render_init("fish", motd=False)
    assert script.startswith("set -gx BLUEFIN_SHELL_ENABLE_EZA 1")
    assert "zoxide init fish" in script
    assert "motd show" not in script


def test_render_init_rejects_unknown_shell(home: Path) -> None:  # noqa: ARG001
    with pytest.raises(UnsupportedShellError):
        shell.render_init("tcsh")


def test_write_env_files(home: Path) -> None:
    paths = shell.write_env_files(default_config())
    directory = home / ".local" / "share" / "bluefin-cli"
    assert paths == [directory / "env.sh", directory / "env.fish"]
    assert "export BLUEFIN_SHELL_ENABLE_EZA=1" in paths[0].read_text()
    assert "set -gx BLUEFIN_SHELL_ENABLE_EZA 1" in paths[1].read_text()


def test_dependencies_and_installed_shells(
    fake_binary: Callable[[str], Path],
) -> None:
    fake_binary("eza")
    fake_binary("zsh")
    deps = shell.check_dependencies()
    assert deps["eza"] is True
    assert deps["ug"] is False
    assert set(deps) == {tool.binary for tool in TOOLS}
    assert shell.installed_shells() == ["zsh"]


def test_default_shell(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHELL", "/usr/bin/fish")
    assert shell.default_shell() == "fish"
