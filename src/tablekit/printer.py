"""
Recursive, colored rendering of tables to a display sink.

Output looks like::

    {
      "name": "turtle"
      ["fuel level"]: 80
      1: {
        "x": 3
      }
    }
"""

from __future__ import annotations
from collections.abc import Mapping
from numbers import Number
from typing import Any
import inspect
import logging
import os
import re

from .config import Palette, settings
from .sinks import Color, DisplaySink

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def _is_collection(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def _identity(value: Any) -> int:
    from .table import Table

    # A table and the mapping it wraps are the same collection.
    return id(value.data if isinstance(value, Table) else value)


def _entries(collection: Any) -> list[tuple[Any, Any]]:
    if isinstance(collection, Mapping):
        return [(k, v) for k, v in collection.items() if v is not None]
    return [(i, v) for i, v in enumerate(collection, 1) if v is not None]


def describe_function(fn: Any) -> str:
    """Render a callable as ``<file> ln.<line>`` where its code is known."""
    code = getattr(inspect.unwrap(fn), "__code__", None)
    if code is None:
        return repr(fn)
    return f"{os.path.basename(code.co_filename)} ln.{code.co_firstlineno}"


class TablePrinter:
    """
    Writes collections to a sink, one entry per line.

    Nested collections are expanded unless they are already being printed
    further up, in which case they are written as a plain value. The
    visited set only holds the current chain of ancestors, so a collection
    shared by two siblings is expanded under both.
    """

    def __init__(
        self,
        sink: DisplaySink,
        palette: Palette | None = None,
        unit: str | None = None,
    ):
        self._sink = sink
        self._palette = palette or settings.PALETTE
        self._unit = unit if unit is not None else settings.INDENT

    def print(
        self,
        collection: Any,
        visited: set[int] | None = None,
        indent: str | None = None,
    ) -> None:
        if visited is None:
            visited = set()
        if indent is None:
            indent = self._unit

        self._sink.write_text("{")
        self._newline()

        identity = _identity(collection)
        visited.add(identity)
        try:
            for key, value in _entries(collection):
                self._write_key(key, indent)
                if _is_collection(value) and _identity(value) not in visited:
                    self.print(value, visited, indent + self._unit)
                    continue
                if _is_collection(value):
                    logger.debug("Not re-entering collection under key %r", key)
                self._write_value(value)
                self._newline()
        finally:
            visited.discard(identity)

        self._sink.write_text(indent[len(self._unit):] + "}")
        self._newline()

    def _newline(self) -> None:
        self._sink.write_text("\n")

    def _write_key(self, key: Any, indent: str) -> None:
        if isinstance(key, str) and _NON_ALNUM.search(key):
            self._sink.write_text(indent + "[")
            self._write_value(key)
            self._sink.write_text("]: ")
        else:
            self._sink.write_text(indent)
            self._write_value(key)
            self._sink.write_text(": ")

    def _write_value(self, value: Any) -> None:
        color, text = self._style(value)
        self._sink.set_color(color)
        self._sink.write_text(text)
        self._sink.set_color(self._palette.default)

    def _style(self, value: Any) -> tuple[Color, str]:
        palette = self._palette
        if isinstance(value, bool):
            return (palette.true if value else palette.false), str(value)
        if isinstance(value, str):
            return palette.string, f'"{value}"'
        if isinstance(value, Number):
            return palette.number, str(value)
        if _is_collection(value):
            return palette.table, f"table: {_identity(value):#x}"
        if callable(value):
            return palette.function, describe_function(value)
        return palette.default, str(value)
