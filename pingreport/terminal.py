"""Text decoration for terminal output."""

from dataclasses import dataclass
from typing import Callable, TextIO

from rich.color import ColorSystem
from rich.style import Style

Decorate = Callable[[str], str]


def is_interactive(stream: TextIO) -> bool:
    """Return True if stream is attached to an interactive terminal.

    Only the stream itself decides; color-forcing environment variables are
    not consulted.
    """
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # closed stream
        return False


def _plain(text: str) -> str:
    return text


def _styled(definition: str) -> Decorate:
    style = Style.parse(definition)

    def decorate(text: str) -> str:
        return style.render(text, color_system=ColorSystem.STANDARD)

    return decorate


@dataclass(frozen=True)
class Decorations:
    """Set of text decorations; every one is the identity when not interactive."""

    bold: Decorate = _plain
    red: Decorate = _plain
    green: Decorate = _plain
    yellow: Decorate = _plain

    @classmethod
    def for_terminal(cls, interactive: bool) -> "Decorations":
        if not interactive:
            return cls()
        return cls(
            bold=_styled("bold"),
            red=_styled("red"),
            green=_styled("green"),
            yellow=_styled("yellow"),
        )
