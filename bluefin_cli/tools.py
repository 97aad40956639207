"""Registry of the shell tools bluefin-cli knows how to manage."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ToolId(str, Enum):
    """Known tools, valued by their lowercase config key."""

    EZA = "eza"
    UGREP = "ugrep"
    BAT = "bat"
    ATUIN = "atuin"
    STARSHIP = "starship"
    ZOXIDE = "zoxide"
    UUTILS_COREUTILS = "uutilscoreutils"
    UUTILS_FINDUTILS = "uutilsfindutils"
    UUTILS_DIFFUTILS = "uutilsdiffutils"
    CARAPACE = "carapace"


class UnknownToolError(KeyError):
    """Raised when a tool name does not match any registered tool."""

    def __init__(self, name: str) -> None:
        """Initialize the UnknownToolError."""
        self.name = name
        known = ", ".join(t.value for t in ToolId)
        super().__init__(f"unknown tool: {name} (known: {known})")

    def __str__(self) -> str:
        """Return the message without KeyError's quoting."""
        return str(self.args[0])


@dataclass(frozen=True)
class Tool:
    """A CLI tool that can be enabled, disabled and installed."""

    id: ToolId
    name: str  # display name
    description: str
    binary: str  # binary looked up in PATH
    package: str  # Homebrew package name
    default: bool = True
    shell_defaults: Mapping[str, bool] = field(
        default_factory=lambda: MappingProxyType({}),
    )

    @property
    def env_var(self) -> str:
        """Environment variable the shell snippet reads for this tool."""
        return f"BLUEFIN_SHELL_ENABLE_{self.name.upper()}"

    def default_for(self, shell: str | None = None) -> bool:
        """Default enabled state, honouring any per-shell override."""
        if shell is not None and shell in self.shell_defaults:
            return self.shell_defaults[shell]
        return self.default


TOOLS: tuple[Tool, ...] = (
    Tool(ToolId.EZA, "Eza", "Modern, maintained replacement for ls", "eza", "eza"),
    Tool(ToolId.UGREP, "Ugrep", "Ultra fast grep with interactive mode", "ug", "ugrep"),
    Tool(ToolId.BAT, "Bat", "A cat clone with wings", "bat", "bat"),
    Tool(
        ToolId.ATUIN,
        "Atuin",
        "Magical shell history",
        "atuin",
        "atuin",
        default=False,
        shell_defaults=MappingProxyType({"zsh": True, "fish": True}),
    ),
    Tool(
        ToolId.STARSHIP,
        "Starship",
        "The minimal, blazing-fast, and infinitely customizable prompt",
        "starship",
        "starship",
    ),
    Tool(ToolId.ZOXIDE, "Zoxide", "A smarter cd command", "zoxide", "zoxide"),
    Tool(
        ToolId.UUTILS_COREUTILS,
        "UutilsCoreutils",
        "Rust rewrite of GNU coreutils",
        "hashsum",
        "uutils-coreutils",
    ),
    Tool(
        ToolId.UUTILS_FINDUTILS,
        "UutilsFindutils",
        "Rust rewrite of GNU findutils",
        "ufind",
        "uutils-findutils",
    ),
    Tool(
        ToolId.UUTILS_DIFFUTILS,
        "UutilsDiffutils",
        "Rust rewrite of GNU diffutils",
        "udiffutils",
        "uutils-diffutils",
    ),
    Tool(
        ToolId.CARAPACE,
        "Carapace",
        "Multi-shell multi-command argument completer",
        "carapace",
        "carapace",
        default=False,
    ),
)

_BY_ID = {tool.id: tool for tool in TOOLS}


def get_tool(name: str | ToolId | Tool) -> Tool:
    """Resolve a tool by id, descriptor or case-insensitive name."""
    if isinstance(name, Tool):
        return name
    if isinstance(name, ToolId):
        return _BY_ID[name]
    try:
        return _BY_ID[ToolId(name.lower())]
    except ValueError:
        raise UnknownToolError(name) from None


def default_enabled(tool: str | ToolId | Tool, shell: str | None = None) -> bool:
    """Default enabled state of ``tool`` for ``shell``."""
    return get_tool(tool).default_for(shell)
