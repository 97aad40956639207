"""Tests for Brewfile management and Starship presets."""

from __future__ import annotations

from pathlib import Path
from typing import Callable
from unittest.mock import patch

import pytest

from bluefin_cli import brewfile, starship
from bluefin_cli.brewfile import BrewfileError
from bluefin_cli.starship import StarshipError


def test_initialize_and_add(tmp_path: Path) -> None:
    path = brewfile.initialize(tmp_path)
    assert path.read_text() == brewfile.SCAFFOLD

    brewfile.add_package("jq", tmp_path)
    brewfile.add_package("gh", tmp_path)
    assert path.read_text() == brewfile.SCAFFOLD + 'brew "jq"\nbrew "gh"\n'

    with pytest.raises(BrewfileError, match="already exists"):
        brewfile.initialize(tmp_path)


def test_add_without_brewfile(tmp_path: Path) -> None:
    with pytest.raises(BrewfileError, match="brewfile init"):
        brewfile.add_package("jq", tmp_path)
    assert not (tmp_path / "Brewfile").exists()


def test_add_to_file_without_trailing_newline(tmp_path: Path) -> None:
    (tmp_path / "Brewfile").write_text('tap "ublue-os/tap"')
    brewfile.add_package("jq", tmp_path)
    assert (tmp_path / "Brewfile").read_text() == 'tap "ublue-os/tap"\nbrew "jq"\n'


def test_apply(tmp_path: Path) -> None:
    with pytest.raises(BrewfileError, match="Brewfile not found"):
        brewfile.apply(tmp_path)

    brewfile.initialize(tmp_path)
    with patch("bluefin_cli.brewfile.run_command") as mock_run:
        brewfile.apply(tmp_path)
    mock_run.assert_called_once_with(
        ["brew", "bundle", "install", "--file", str(tmp_path / "Brewfile")],
    )


def test_starship_install_prefers_brew(fake_binary: Callable[[str], Path]) -> None:
    fake_binary("brew")
    with patch("bluefin_cli.starship.run_command") as mock_run:
        starship.install()
    mock_run.assert_called_once_with(["brew", "install", "starship"])


def test_starship_install_falls_back_to_script(home: Path) -> None:  # noqa: ARG001
    with patch("bluefin_cli.starship.run_command") as mock_run:
        starship.install()
    mock_run.assert_called_once_with(["sh", "-c", starship.INSTALLER])


def test_starship_already_installed(fake_binary: Callable[[str], Path]) -> None:
    fake_binary("starship")
    with patch("bluefin_cli.starship.run_command") as mock_run:
        starship.install()
    mock_run.assert_not_called()


def test_apply_theme(home: Path, fake_binary: Callable[[str], Path]) -> None:
    with patch("bluefin_cli.starship.run_command") as mock_run:
        starship.apply_theme("tokyo-night")
    target = home / ".config" / "starship.toml"
    mock_run.assert_called_once_with(
        ["starship", "preset", "tokyo-night", "-o", str(target)],
    )

    fake_binary("starship", "#!/bin/sh\nexit 3\n")
    with pytest.raises(StarshipError, match="failed to apply theme"):
        starship.apply_theme("no-such-preset")
