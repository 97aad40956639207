"""Tests for tool installation and Homebrew bundles."""

from __future__ import annotations

from pathlib import Path
from typing import Callable
from unittest.mock import MagicMock, patch

import pytest
import requests

from bluefin_cli import install
from bluefin_cli.config import default_config
from bluefin_cli.install import BundleError, InstallError
from bluefin_cli.tools import ToolId, get_tool


def test_load_bundles() -> None:
    bundles = install.load_bundles()
    assert "ai" in bundles
    assert "full-desktop" in bundles
    assert bundles["full-desktop"].requires_flathub
    assert not bundles["cli"].requires_flathub
    for bundle in bundles.values():
        assert bundle.url.startswith("https://")
        assert bundle.url.endswith(bundle.file)


def test_load_bundles_custom_file(tmp_path: Path) -> None:
    catalogue = tmp_path / "bundles.yaml"
    catalogue.write_text(
        "base_url: https://example.com/repo/\n"
        "default_path: brew\n"
        "bundles:\n"
        "  demo:\n"
        "    file: demo.Brewfile\n"
        "    description: Demo bundle\n"
        "  other:\n"
        "    file: other.Brewfile\n"
        "    description: Elsewhere\n"
        "    path: flatpaks\n",
    )
    bundles = install.load_bundles(catalogue)
    assert bundles["demo"].url == "https://example.com/repo/brew/demo.Brewfile"
    assert bundles["other"].url == "https://example.com/repo/flatpaks/other.Brewfile"


def test_disabled_tool_is_never_installed(fake_binary: Callable[[str], Path]) -> None:
    fake_binary("brew")
    config = default_config()
    for tool in config.enabled_tools():
        fake_binary(tool.binary)
    fake_binary("bat").unlink()
    config.set_enabled("bat", False)  # noqa: FBT003

    with patch("bluefin_cli.install.run_command") as mock_run:
        assert install.install_tools(config) == []
    mock_run.assert_not_called()


def test_missing_tool_is_installed(fake_binary: Callable[[str], Path]) -> None:
    fake_binary("brew")
    with patch("bluefin_cli.install.run_command") as mock_run:
        assert install.ensure_tool(get_tool(ToolId.ZOXIDE))
    mock_run.assert_called_once_with(["brew", "install", "zoxide"])


def test_missing_brew_does_not_raise(
    home: Path,  # noqa: ARG001
    capsys: pytest.CaptureFixture,
) -> None:
    assert install.install_tools(default_config()) == []
    assert "Homebrew not found" in capsys.readouterr().err


def test_failed_install_is_reported(
    fake_binary: Callable[[str], Path],
    capsys: pytest.CaptureFixture,
) -> None:
    fake_binary("brew", "#!/bin/sh\nexit 1\n")
    with pytest.raises(InstallError, match="failed to install eza"):
        install.ensure_tool(get_tool("eza"))

    config = default_config()
    assert install.install_tools(config) == []
    err = capsys.readouterr().err
    assert "failed to install eza" in err
    assert "failed to install zoxide" in err


def test_install_bundle_requires_brew(home: Path) -> None:  # noqa: ARG001
    with pytest.raises(BundleError, match="Homebrew not found"):
        install.install_bundle("cli")


def test_unknown_bundle(fake_binary: Callable[[str], Path]) -> None:
    fake_binary("brew")
    with pytest.raises(BundleError, match="unknown bundle: nope") as exc_info:
        install.install_bundle("nope")
    assert "all" in str(exc_info.value)


def test_local_brewfile(fake_binary: Callable[[str], Path], tmp_path: Path) -> None:
    fake_binary("brew")
    brewfile = tmp_path / "Brewfile"
    brewfile.write_text('brew "jq"\n')

    with patch("bluefin_cli.install.run_command") as mock_run:
        install.install_bundle(str(brewfile))
    args, kwargs = mock_run.call_args
    assert args[0] == ["brew", "bundle", "install", "--file", str(brewfile)]
    assert kwargs["env"] == {"HOMEBREW_NO_ENV_HINTS": "1"}

    with pytest.raises(BundleError, match="Brewfile not found"):
        install.install_bundle(str(tmp_path / "missing" / "Brewfile"))


def test_named_bundle_is_downloaded(fake_binary: Callable[[str], Path]) -> None:
    fake_binary("brew")
    response = MagicMock()
    response.iter_content.return_value = [b'brew "gh"\n']
    seen = {}

    def fake_brew_bundle(path: Path) -> None:
        seen["content"] = path.read_text()

    with patch(
        "bluefin_cli.install.requests.get",
        return_value=response,
    ) as mock_get, patch(
        "bluefin_cli.install.brew_bundle",
        side_effect=fake_brew_bundle,
    ):
        install.install_bundle("cli")

    url = install.load_bundles()["cli"].url
    mock_get.assert_called_once_with(url, stream=True, timeout=30)
    assert seen["content"] == 'brew "gh"\n'


def test_download_error_is_wrapped(tmp_path: Path) -> None:
    with patch(
        "bluefin_cli.install.requests.get",
        side_effect=requests.ConnectionError("offline"),
    ), pytest.raises(BundleError, match="Failed to download"):
        install.download_file("https://example.com/x", str(tmp_path / "x"))


def test_flathub_required_without_flatpak(fake_binary: Callable[[str], Path]) -> None:
    fake_binary("brew")
    with pytest.raises(BundleError, match="flatpak not found"):
        install.install_bundle("full-desktop")


def test_wallpaper_casks(fake_binary: Callable[[str], Path], tmp_path: Path) -> None:
    casks = tmp_path / "tap" / "Casks"
    casks.mkdir(parents=True)
    for name in ("bluefin-wallpapers", "aurora-wallpapers", "framework-tool"):
        (casks / f"{name}.rb").write_text("cask")
    fake_binary("brew", f"#!/bin/sh\necho {tmp_path / 'tap'}\n")

    assert install.wallpaper_casks() == ["aurora-wallpapers", "bluefin-wallpapers"]

    with patch("bluefin_cli.install.run_command") as mock_run:
        install.install_wallpaper_casks(["bluefin-wallpapers", "other/tap/x"])
    args, _ = mock_run.call_args
    assert args[0] == [
        "brew",
        "install",
        "--cask",
        "ublue-os/tap/bluefin-wallpapers",
        "other/tap/x",
    ]


def test_no_wallpapers_selected() -> None:
    with pytest.raises(BundleError, match="no wallpaper casks selected"):
        install.install_wallpaper_casks([])


def test_is_gnome(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_CURRENT_DESKTOP", "ubuntu:GNOME")
    assert install.is_gnome()
    monkeypatch.setenv("XDG_CURRENT_DESKTOP", "KDE")
    assert not install.is_gnome()
