"""Configuration for pytest fixtures used in bluefin-cli tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An empty home directory with an isolated environment.

    ``PATH`` only contains ``<tmp>/bin`` so that tool lookups are controlled
    by the test (see ``fake_binary``).
    """
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()

    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("PATH", str(bin_dir))
    monkeypatch.setenv("SHELL", "/bin/bash")
    monkeypatch.delenv("HOMEBREW_PREFIX", raising=False)
    monkeypatch.delenv("XDG_CURRENT_DESKTOP", raising=False)
    return home_dir


@pytest.fixture
def fake_binary(home: Path) -> Callable[[str], Path]:
    r"""Create an executable stub on the isolated ``PATH``.

    Usage:
        fake_binary("brew")
    """
    bin_dir = home.parent / "bin"

    def _create(name: str, content: str = "#!/bin/sh\nexit 0\n") -> Path:
        path = bin_dir / name
        path.write_text(content)
        path.chmod(0o755)
        return path

    return _create
