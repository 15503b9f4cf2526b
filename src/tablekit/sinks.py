"""
Display sinks for the table pretty-printer.

A sink is anything with ``write_text`` and ``set_color``. The printer never
opens or closes a sink; callers own its lifecycle.
"""

from __future__ import annotations
from enum import IntEnum
from typing import Protocol, runtime_checkable

from rich.console import Console


class Color(IntEnum):
    """The sixteen terminal colors of the host, as bit flags."""

    WHITE = 0x1
    ORANGE = 0x2
    MAGENTA = 0x4
    LIGHT_BLUE = 0x8
    YELLOW = 0x10
    LIME = 0x20
    PINK = 0x40
    GRAY = 0x80
    LIGHT_GRAY = 0x100
    CYAN = 0x200
    PURPLE = 0x400
    BLUE = 0x800
    BROWN = 0x1000
    GREEN = 0x2000
    RED = 0x4000
    BLACK = 0x8000


RICH_STYLES: dict[Color, str] = {
    Color.WHITE: "white",
    Color.ORANGE: "dark_orange",
    Color.MAGENTA: "magenta",
    Color.LIGHT_BLUE: "sky_blue1",
    Color.YELLOW: "yellow",
    Color.LIME: "chartreuse1",
    Color.PINK: "pink1",
    Color.GRAY: "grey50",
    Color.LIGHT_GRAY: "grey70",
    Color.CYAN: "cyan",
    Color.PURPLE: "purple",
    Color.BLUE: "blue",
    Color.BROWN: "orange4",
    Color.GREEN: "green",
    Color.RED: "red",
    Color.BLACK: "black",
}


@runtime_checkable
class DisplaySink(Protocol):
    """Text output with a current color."""

    def write_text(self, text: str) -> None:
        """Append raw text to the current line."""
        ...

    def set_color(self, color: Color) -> None:
        """Use ``color`` for subsequently written text."""
        ...


class RichSink:
    """
    Sink backed by a rich ``Console``.

    Example:
        sink = RichSink()
        T({"name": "turtle", "fuel": 80}).print(sink)
    """

    def __init__(self, console: Console | None = None):
        self._console = console or Console()
        self._style = RICH_STYLES[Color.WHITE]

    def write_text(self, text: str) -> None:
        self._console.out(text, style=self._style, highlight=False, end="")

    def set_color(self, color: Color) -> None:
        self._style = RICH_STYLES[Color(color)]


class BufferSink:
    """Records written text in memory as ``(color, text)`` segments."""

    def __init__(self, color: Color = Color.WHITE):
        self.color = color
        self.segments: list[tuple[Color, str]] = []

    def write_text(self, text: str) -> None:
        self.segments.append((self.color, text))

    def set_color(self, color: Color) -> None:
        self.color = color

    @property
    def text(self) -> str:
        """Everything written so far, without colors."""
        return "".join(text for _, text in self.segments)
