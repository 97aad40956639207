"""Tests for the message of the day."""

import json
from pathlib import Path

import pytest

from bluefin_cli import motd
from bluefin_cli.rcfile import begin_marker


def test_parse_os_release() -> None:
    text = 'NAME="Bluefin"\nVERSION="42"\nVERSION_ID=42\nID=bluefin\n'
    assert motd.parse_os_release(text) == ("Bluefin", "42")
    assert motd.parse_os_release("") == ("", "")


def test_setup_creates_assets(home: Path) -> None:
    directory = motd.setup_motd()
    assert directory == home / ".local" / "share" / "bluefin-cli" / "motd"
    assert len(list((directory / "tips").glob("*.md"))) == len(motd.DEFAULT_TIPS)

    script = directory / motd.SCRIPT_NAME
    assert script.read_text() == motd.LAUNCHER
    assert script.stat().st_mode & 0o111

    data = json.loads((directory / "motd.json").read_text())
    assert data["tips-directory"] == str(directory / "tips")
    assert data["default-theme"] == "slate"


def test_setup_keeps_user_tips(home: Path) -> None:  # noqa: ARG001
    directory = motd.setup_motd()
    tip = directory / "tips" / "01-tip.md"
    tip.write_text("my own tip")
    motd.setup_motd()
    assert tip.read_text() == "my own tip"


def test_toggle_all_shells(home: Path) -> None:
    motd.toggle("all", True)  # noqa: FBT003
    assert motd.check_status() == {"bash": True, "zsh": True, "fish": True}

    bashrc = (home / ".bashrc").read_text()
    assert begin_marker(motd.BLOCK_NAME) in bashrc
    assert motd.directive("bash") in bashrc

    motd.toggle("zsh", False)  # noqa: FBT003
    assert motd.check_status() == {"bash": True, "zsh": False, "fish": True}


def test_toggle_unknown_shell_is_reported(
    home: Path,
    capsys: pytest.CaptureFixture,
) -> None:
    motd.toggle("powershell", True)  # noqa: FBT003
    assert "unsupported shell: powershell" in capsys.readouterr().err
    assert list(home.iterdir()) == []


def test_random_tip(tmp_path: Path) -> None:
    assert motd.random_tip(tmp_path) == ""
    (tmp_path / "01-tip.md").write_text("Use zoxide")
    assert motd.random_tip(tmp_path) == "💡 **Tip:** Use zoxide"


def test_render_motd(home: Path, monkeypatch: pytest.MonkeyPatch) -> None:  # noqa: ARG001
    monkeypatch.setattr(motd, "image_info", lambda: motd.ImageInfo("Bluefin", "42"))
    content = motd.render_motd()
    assert "󱋩 Bluefin:42" in content
    assert "**Tip:**" in content


def test_show_without_glow(
    home: Path,  # noqa: ARG001
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture,
) -> None:
    monkeypatch.setattr(motd, "image_info", lambda: motd.ImageInfo("Bluefin", "42"))
    motd.show()
    assert "Welcome to Bluefin CLI" in capsys.readouterr().out


def test_set_theme(home: Path) -> None:  # noqa: ARG001
    motd.set_theme("dracula")
    assert motd.load_motd_config().default_theme == "dracula"
    with pytest.raises(ValueError, match="unknown MOTD theme"):
        motd.set_theme("neon")
