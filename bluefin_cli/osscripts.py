"""Discovery and execution of OS-provided ``just`` recipes and scripts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .utils import run_command, which

logger = logging.getLogger(__name__)

SHARE_DIR = Path("/usr/share")


@dataclass(frozen=True)
class Recipe:
    """A runnable just recipe or shell script."""

    display_name: str
    kind: Literal["just", "bash"]
    path: Path  # justfile or script
    recipe: str = ""

    @property
    def command(self) -> list[str]:
        if self.kind == "bash":
            return ["bash", str(self.path)]
        return ["just", "-f", str(self.path), self.recipe]


def parse_justfile_recipes(path: Path) -> list[str]:
    """Names of the public recipes defined in a justfile."""
    try:
        text = path.read_text()
    except OSError as e:
        logger.debug("Could not read %s: %s", path, e)
        return []

    recipes = []
    for raw in text.splitlines():
        if raw.startswith((" ", "\t")):
            continue
        line = raw.strip()
        if not line or line.startswith("#") or ":" not in line:
            continue
        # assignments such as `x := "y"` are not recipes
        if ":=" in line:
            continue
        words = line.split(":", 1)[0].split()
        if not words:
            continue
        name = words[0]
        if name.startswith(("@", "_", "[")):
            continue
        recipes.append(name)
    return recipes


def _is_justfile(path: Path) -> bool:
    return path.suffix == ".just" or path.name in ("justfile", "Justfile")


def discover_os_scripts(share_dir: Path = SHARE_DIR) -> list[Recipe]:
    """Recipes and scripts under ``<share_dir>/*/just/``.

    Nothing is returned when ``just`` is not installed.
    """
    if not which("just"):
        return []

    try:
        just_dirs = sorted(
            p / "just" for p in share_dir.iterdir() if (p / "just").is_dir()
        )
    except OSError as e:
        logger.debug("Could not scan %s: %s", share_dir, e)
        return []

    recipes = []
    for just_dir in just_dirs:
        for path in sorted(p for p in just_dir.rglob("*") if p.is_file()):
            if _is_justfile(path):
                recipes.extend(
                    Recipe(display_name=name, kind="just", path=path, recipe=name)
                    for name in parse_justfile_recipes(path)
                    if name != "default"
                )
            elif path.suffix == ".sh":
                relative = path.relative_to(just_dir)
                recipes.append(
                    Recipe(
                        display_name=f"{just_dir.parent.name}/{relative}",
                        kind="bash",
                        path=path,
                    ),
                )
    return recipes


def run_recipe(recipe: Recipe) -> None:
    """Run ``recipe`` attached to the terminal."""
    run_command(recipe.command)
